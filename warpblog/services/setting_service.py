"""站点配置服务"""
from flask import current_app
from warpblog.extensions import db
from warpblog.models.sys import Setting

WEBSITE_GROUP = 'website'
WEBSITE_KEYS = ('name', 'description')


class SettingService:

    @staticmethod
    def get_settings(group):
        rows = Setting.query.filter_by(group=group).all()
        return {row.key: row.value for row in rows}

    @staticmethod
    def get_website_settings():
        """站点名称与描述，未配置的项使用 config 中的默认值"""
        stored = SettingService.get_settings(WEBSITE_GROUP)
        return {
            'name': stored.get('name') or current_app.config['WEBSITE_NAME'],
            'description': stored.get('description') or current_app.config['WEBSITE_DESCRIPTION'],
        }

    @staticmethod
    def set_website_settings(values):
        """保存站点配置，只处理已知的 key"""
        for key in WEBSITE_KEYS:
            if key not in values or values[key] is None:
                continue
            row = Setting.query.filter_by(group=WEBSITE_GROUP, key=key).first()
            if row is None:
                row = Setting(group=WEBSITE_GROUP, key=key)
                db.session.add(row)
            row.value = str(values[key]).strip()
        db.session.commit()
        return SettingService.get_website_settings()
