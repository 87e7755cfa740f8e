import math
import re

WORDS_PER_MINUTE = 200


def slugify(text):
    """标题 -> URL 友好的 slug (小写，非字母数字连续段替换为 '-')"""
    slug = re.sub(r'[^a-z0-9]+', '-', (text or '').lower())
    return slug.strip('-')


def calculate_read_time(content):
    """按每分钟 200 词估算阅读时长 (分钟)，至少 1 分钟"""
    words = len((content or '').split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def normalize_tags(tags):
    """标签去空白、去重，保留原有顺序；接受列表或逗号分隔字符串"""
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(',')
    result = []
    for tag in tags:
        tag = (tag or '').strip()
        if tag and tag not in result:
            result.append(tag)
    return result
