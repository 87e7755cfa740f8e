from dataclasses import dataclass, fields
from datetime import datetime


def parse_timestamp(value):
    """把后端返回的 ISO 时间字符串转换为 datetime"""
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return datetime.fromisoformat(text)


@dataclass
class BaseRecord:
    """
    后端表记录基类
    表结构由 Supabase 维护，这里只负责：行数据 -> 类型化对象，以及序列化
    """
    TIMESTAMP_FIELDS = ('created_at', 'updated_at')
    LIST_FIELDS = ()

    @classmethod
    def from_row(cls, row):
        """从后端返回的行字典构建对象，忽略未知列"""
        names = {f.name for f in fields(cls)}
        data = {k: v for k, v in (row or {}).items() if k in names}
        for name in cls.TIMESTAMP_FIELDS:
            if name in data:
                data[name] = parse_timestamp(data[name])
        for name in cls.LIST_FIELDS:
            if data.get(name) is None:
                data[name] = []
        return cls(**data)

    @classmethod
    def from_rows(cls, rows):
        return [cls.from_row(row) for row in rows or []]

    def to_dict(self):
        """
        通用序列化方法：将记录转换为字典，便于 API 返回 JSON。
        过滤掉以 '_' 开头的私有属性。
        """
        data = {}
        for f in fields(self):
            if f.name.startswith('_'):
                continue
            val = getattr(self, f.name)
            if isinstance(val, datetime):
                data[f.name] = val.isoformat()
            elif isinstance(val, list):
                data[f.name] = list(val)
            else:
                data[f.name] = val
        return data
