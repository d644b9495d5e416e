"""
文本与参数处理工具
"""
import re
from datetime import datetime, timezone

_SLUG_STRIP = re.compile(r'[^A-Za-z0-9_\s-]')
_SLUG_SEPARATORS = re.compile(r'[\s_-]+')


def slugify(text):
    """
    生成 URL 安全的标识：
    小写 -> 去除特殊字符 -> 空白/下划线/连字符合并为单个连字符 -> 去掉首尾连字符
    """
    value = (text or '').lower()
    value = _SLUG_STRIP.sub('', value)
    value = _SLUG_SEPARATORS.sub('-', value)
    return value.strip('-')


def parse_int(value, default, minimum=1, maximum=None):
    """查询参数转整数，无法解析或越界时回退默认值"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    if maximum is not None and number > maximum:
        return maximum
    return number


def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def parse_datetime(value):
    """解析 ISO-8601 时间，统一转为 UTC naive datetime；无法解析返回 None"""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value):
    return value.isoformat() if value else None
