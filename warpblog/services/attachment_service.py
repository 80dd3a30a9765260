"""附件 (封面图片) 服务"""
import base64
import binascii
import io
from flask import current_app
from PIL import Image, UnidentifiedImageError
from warpblog.extensions import db
from warpblog.exceptions import NotFound, InvalidParameter
from warpblog.models.content import Attachment

# Pillow 格式名 -> mime
IMAGE_MIMES = {
    'JPEG': 'image/jpeg',
    'PNG': 'image/png',
    'GIF': 'image/gif',
    'WEBP': 'image/webp',
}


class AttachmentService:

    @staticmethod
    def decode_image(encoded):
        """base64 字符串解码为字节"""
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidParameter('image', 'Image must be base64 encoded.')

    @staticmethod
    def create_attachment(user_id, name, description, data, mime=None, expected_image=True):
        """
        保存附件 (不提交事务)
        :param data: 原始字节
        :param expected_image: 为 True 时用 Pillow 校验图片并记录宽高
        """
        if not data:
            raise InvalidParameter('image', 'Empty attachment.')
        if len(data) > current_app.config.get('MAX_IMAGE_SIZE', 5 * 1024 * 1024):
            raise InvalidParameter('image', 'Image is too large.')

        width = height = 0
        if expected_image:
            try:
                with Image.open(io.BytesIO(data)) as image:
                    image.verify()
                    fmt = image.format
                    width, height = image.size
            except (UnidentifiedImageError, OSError, SyntaxError):
                raise InvalidParameter('image', 'Invalid image.')
            if fmt not in IMAGE_MIMES:
                raise InvalidParameter('image', f'Unsupported image format: {fmt}')
            mime = IMAGE_MIMES[fmt]

        attachment = Attachment(
            user_id=user_id,
            name=name or '',
            description=description or '',
            mime=mime or 'application/octet-stream',
            width=width,
            height=height,
            size=len(data),
            data=data
        )
        db.session.add(attachment)
        db.session.flush()
        current_app.logger.info(f'attachment {attachment.id} created: {attachment.mime} {width}x{height}')
        return attachment

    @staticmethod
    def get_attachment(attachment_id):
        attachment = db.session.get(Attachment, attachment_id)
        if attachment is None:
            raise NotFound('Attachment')
        return attachment

    @staticmethod
    def delete_attachment(attachment_id):
        """删除附件 (不提交事务)"""
        if attachment_id is None:
            return
        Attachment.query.filter_by(id=attachment_id).delete(synchronize_session=False)
