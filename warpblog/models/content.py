from warpblog.extensions import db
from .base import BaseModel

class Category(BaseModel):
    """文章分类"""
    __tablename__ = 'categories'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(1000), default='')
    # 展示顺序，从 0 开始连续编号
    display_order = db.Column(db.Integer, default=0, nullable=False, index=True)

    def __repr__(self):
        return f'<Category {self.name}>'

class Article(BaseModel):
    """博客文章"""
    __tablename__ = 'articles'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    # 创建时作者名的快照，作者改名后不会同步
    user_name = db.Column(db.String(64), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False, index=True)
    cover_id = db.Column(db.Integer, db.ForeignKey('attachments.id'), nullable=True)
    content_id = db.Column(db.Integer, nullable=True)

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(1000), default='')
    tags = db.Column(db.String(1000), default='')
    # 毫秒时间戳，晚于当前时间即为未发布
    publish_at = db.Column(db.BigInteger, nullable=False, index=True)

    # 读取时从 Text 关联填充，不落库
    content = None

    def to_dict(self):
        data = super().to_dict()
        if self.content is not None:
            data['content'] = self.content
        return data

    def __repr__(self):
        return f'<Article {self.id} {self.name}>'

class Text(BaseModel):
    """文章正文，每次修改正文都会新建一条记录"""
    __tablename__ = 'texts'

    # 所属文章 id，删除文章时按此字段级联删除
    ref_id = db.Column(db.Integer, nullable=False, index=True)
    value = db.Column(db.Text, nullable=False, default='')

class Attachment(BaseModel):
    """上传的附件 (文章封面图片)"""
    __tablename__ = 'attachments'
    __hidden_fields__ = ('data',)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(100), default='')
    description = db.Column(db.String(1000), default='')
    mime = db.Column(db.String(64), default='application/octet-stream')
    width = db.Column(db.Integer, default=0)
    height = db.Column(db.Integer, default=0)
    size = db.Column(db.Integer, default=0)  # 字节数
    data = db.Column(db.LargeBinary, nullable=False)
