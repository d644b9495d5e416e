from datetime import datetime
from newsportal.extensions import db
from newsportal.utils.text import isoformat


class SiteSetting(db.Model):
    """站点设置（单例行，固定主键）"""
    __tablename__ = 'site_settings'

    SINGLETON_ID = 'singleton'
    THEMES = ('light', 'dark')
    DEFAULTS = {
        'siteName': 'News Portal',
        'defaultLanguage': 'zh',
        'theme': 'light',
    }

    id = db.Column(db.String(32), primary_key=True, default=SINGLETON_ID)
    site_name = db.Column(db.String(128), nullable=False)
    default_language = db.Column(db.String(8), nullable=False)
    theme = db.Column(db.String(16), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'siteName': self.site_name,
            'defaultLanguage': self.default_language,
            'theme': self.theme,
            'updatedAt': isoformat(self.updated_at),
        }

    @classmethod
    def defaults(cls):
        return dict(cls.DEFAULTS, id=cls.SINGLETON_ID)
