"""作品服务 (artworks)：2D、3D 与摄影三个画廊共用一张表"""
import logging
from datetime import datetime, timezone

from portfolio.exceptions import ValidationError
from portfolio.models.content import ARTWORK_CATEGORIES, Artwork
from portfolio.services.base import BaseService
from portfolio.utils.listing import matches_search, sort_time
from portfolio.utils.storage import remove_from_storage
from portfolio.utils.text import normalize_tags

logger = logging.getLogger(__name__)

PROTECTED_COLUMNS = ('id', 'created_at', 'updated_at', 'likes', 'views')


def validate_category(category):
    if category not in ARTWORK_CATEGORIES:
        raise ValidationError(
            f"Invalid artwork category '{category}', expected one of: {', '.join(ARTWORK_CATEGORIES)}"
        )
    return category


def _clean_subcategory(value):
    value = (value or '').strip() if isinstance(value, str) else value
    if not value:
        raise ValidationError('Subcategory is required')
    return value


class ArtworkService(BaseService):
    """作品服务"""
    table = 'artworks'

    def __init__(self, client, bucket='images'):
        super().__init__(client)
        self.bucket = bucket

    def get_artworks(self, category=None):
        """获取作品列表 (最新在前)，可按分类过滤；'All' 等同于不过滤"""
        query = self.query().select('*').order('created_at', desc=True)
        if category and category != 'All':
            query = query.eq('category', validate_category(category))
        response = query.execute()
        return Artwork.from_rows(response.data)

    def get_artwork_by_id(self, id):
        """按 ID 获取作品，不存在返回 None"""
        row = self.fetch_single(self.query().select('*').eq('id', id))
        return Artwork.from_row(row) if row else None

    def create_artwork(self, data):
        """创建作品：分类必须合法，子分类必填"""
        payload = {k: v for k, v in dict(data).items() if k not in PROTECTED_COLUMNS}
        if not payload.get('title') or not payload.get('image_url'):
            raise ValidationError('Title, image, and category are required')
        validate_category(payload.get('category'))
        payload['subcategory'] = _clean_subcategory(payload.get('subcategory'))
        payload['tags'] = normalize_tags(payload.get('tags'))

        row = self.insert_row(payload)
        logger.info(f"Artwork created: {payload['title']} [{payload['category']}/{payload['subcategory']}]")
        return Artwork.from_row(row)

    def update_artwork(self, id, updates):
        """更新作品，校验规则与创建一致"""
        payload = {k: v for k, v in dict(updates).items() if k not in PROTECTED_COLUMNS}
        if 'category' in payload:
            validate_category(payload['category'])
        if 'subcategory' in payload:
            payload['subcategory'] = _clean_subcategory(payload['subcategory'])
        for name in ('title', 'image_url'):
            if name in payload and not payload[name]:
                raise ValidationError('Title, image, and category are required')
        if 'tags' in payload:
            payload['tags'] = normalize_tags(payload['tags'])
        payload['updated_at'] = datetime.now(timezone.utc).isoformat()
        return Artwork.from_row(self.update_row(id, payload))

    def delete_artwork(self, id):
        """删除作品：先清理存储中的图片 (失败仅记录)，再删除数据库记录"""
        artwork = self.get_artwork_by_id(id)
        if artwork and artwork.image_url:
            remove_from_storage(self.client, self.bucket, artwork.image_url)
        self.delete_row(id)
        logger.info(f'Artwork deleted successfully: {id}')

    def gallery(self, category, subcategory=None, search=None):
        """
        画廊视图：只返回指定分类的作品，再按子分类与关键字在内存中筛选
        返回 (作品列表, 子分类列表)
        """
        validate_category(category)
        artworks = [a for a in self.get_artworks(category) if a.category == category]
        subcategories = self.subcategories(artworks)
        return self.filter_artworks(artworks, subcategory, search), subcategories

    @staticmethod
    def filter_artworks(artworks, subcategory=None, search=None):
        filtered = artworks
        if subcategory and subcategory != 'All':
            filtered = [a for a in filtered if a.subcategory == subcategory]
        if search:
            filtered = [
                a for a in filtered
                if matches_search(search, a.title, a.description, tags=a.tags)
            ]
        return sorted(filtered, key=lambda a: sort_time(a.created_at), reverse=True)

    @staticmethod
    def subcategories(artworks):
        """作品中出现过的子分类 (去重，保留首次出现顺序，跳过空值)"""
        seen = []
        for artwork in artworks:
            if artwork.subcategory and artwork.subcategory not in seen:
                seen.append(artwork.subcategory)
        return seen
