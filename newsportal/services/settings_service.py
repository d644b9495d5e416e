"""站点设置服务 - 单例行读写与缓存"""
from flask import current_app

from newsportal.extensions import db, cache
from newsportal.exceptions import ValidationError
from newsportal.models.sys import SiteSetting
from newsportal.utils.i18n import t

CACHE_KEY = 'site_settings'


class SettingsService:
    """站点设置服务"""

    @staticmethod
    def get_settings():
        """读取设置；单例行尚未创建时返回内置默认值"""
        cached = cache.get(CACHE_KEY)
        if cached is not None:
            return cached

        row = db.session.get(SiteSetting, SiteSetting.SINGLETON_ID)
        settings = row.to_dict() if row else SiteSetting.defaults()
        cache.set(CACHE_KEY, settings)
        return settings

    @staticmethod
    def update_settings(data):
        """写入设置，单例行不存在时创建"""
        site_name = str(data.get('siteName') or '').strip()
        default_language = str(data.get('defaultLanguage') or '').strip()
        theme = str(data.get('theme') or '').strip()

        if not site_name or not default_language or not theme:
            raise ValidationError(t('settings_incomplete'))
        if default_language not in current_app.config['SUPPORTED_LANGUAGES']:
            raise ValidationError(t('settings_language_invalid', language=default_language))
        if theme not in SiteSetting.THEMES:
            raise ValidationError(t('settings_theme_invalid', theme=theme))

        row = db.session.get(SiteSetting, SiteSetting.SINGLETON_ID)
        if row is None:
            row = SiteSetting(id=SiteSetting.SINGLETON_ID)
            db.session.add(row)
        row.site_name = site_name
        row.default_language = default_language
        row.theme = theme
        db.session.commit()

        cache.delete(CACHE_KEY)
        current_app.logger.info(f'站点设置已更新 siteName={site_name} lang={default_language} theme={theme}')
        return row.to_dict()
