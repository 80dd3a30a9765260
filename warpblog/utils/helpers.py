import re
import time
from werkzeug.http import http_date

_TAG_SEPARATOR = re.compile(r'[,，]')


def now_millis():
    """当前毫秒时间戳"""
    return int(time.time() * 1000)


def format_tags(value):
    """
    规范化标签：按逗号拆分、去空白、去空项、去重 (保留首次出现的顺序)，再用 ',' 拼接。
    对结果再次调用返回值不变。
    """
    if not value:
        return ''
    tags = []
    for tag in _TAG_SEPARATOR.split(value):
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return ','.join(tags)


def to_rss_date(millis):
    """毫秒时间戳转 RFC-1123 GMT 格式, e.g. 'Thu, 01 Jan 1970 00:00:00 GMT'"""
    return http_date(millis / 1000.0)


def page_to_dict(pagination):
    """Flask-SQLAlchemy 分页对象序列化"""
    return {
        'index': pagination.page,
        'size': pagination.per_page,
        'total': pagination.total,
        'pages': pagination.pages
    }
