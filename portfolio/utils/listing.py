"""
列表工具：数据量小，整表取回后在内存中完成搜索、排序与分页
"""
import math
from datetime import datetime, timezone

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def sort_time(*values):
    """返回第一个非空时间，用作排序键"""
    for value in values:
        if value is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value
    return _EPOCH


def matches_search(term, *texts, tags=None):
    """不区分大小写地在文本字段和标签中查找关键字"""
    if not term:
        return True
    needle = term.strip().lower()
    if not needle:
        return True
    for text in texts:
        if text and needle in text.lower():
            return True
    return any(needle in tag.lower() for tag in tags or [])


def paginate(items, page=1, per_page=6):
    """内存分页，返回值的结构与 Flask-SQLAlchemy 的 Pagination 相近"""
    per_page = max(1, int(per_page))
    total = len(items)
    pages = max(1, math.ceil(total / per_page))
    page = min(max(1, int(page)), pages)
    start = (page - 1) * per_page
    return {
        'items': items[start:start + per_page],
        'page': page,
        'per_page': per_page,
        'total': total,
        'pages': pages,
        'has_prev': page > 1,
        'has_next': page < pages,
    }
