from flask import Response
from warpblog.blueprints.files import files_bp
from warpblog.services.attachment_service import AttachmentService


@files_bp.route('/attachments/<int:id>')
def download_attachment(id):
    """输出附件原始内容 (文章封面)"""
    attachment = AttachmentService.get_attachment(id)
    response = Response(attachment.data, mimetype=attachment.mime)
    # 附件内容不可变，替换封面时会生成新 id
    response.headers['Cache-Control'] = 'max-age=86400'
    return response
