"""正文存储服务 (不提交事务，由调用方统一提交)"""
from warpblog.extensions import db
from warpblog.exceptions import NotFound
from warpblog.models.content import Text


class TextService:

    @staticmethod
    def create_text(ref_id, value):
        text = Text(ref_id=ref_id, value=value)
        db.session.add(text)
        db.session.flush()
        return text

    @staticmethod
    def get_text(text_id):
        text = db.session.get(Text, text_id) if text_id is not None else None
        if text is None:
            raise NotFound('Text')
        return text

    @staticmethod
    def delete_texts(ref_id):
        """删除文章的全部正文版本"""
        return Text.query.filter_by(ref_id=ref_id).delete(synchronize_session=False)
