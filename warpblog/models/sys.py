from warpblog.extensions import db
from .base import BaseModel

class Setting(BaseModel):
    """站点配置项 (按 group + key 存储)"""
    __tablename__ = 'settings'
    __table_args__ = (db.UniqueConstraint('group', 'key', name='uq_settings_group_key'),)

    group = db.Column(db.String(64), nullable=False, index=True)  # e.g., 'website'
    key = db.Column(db.String(64), nullable=False)
    value = db.Column(db.Text, default='')
