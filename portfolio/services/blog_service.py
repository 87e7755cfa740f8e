"""博客文章服务 (blog_posts)"""
import logging
from datetime import datetime, timezone

from portfolio.exceptions import NotFound, ValidationError
from portfolio.models.content import BlogPost
from portfolio.services.base import BaseService
from portfolio.utils.listing import matches_search, sort_time
from portfolio.utils.storage import remove_from_storage
from portfolio.utils.text import calculate_read_time, normalize_tags, slugify

logger = logging.getLogger(__name__)

# 由后端维护，调用方不能写入的列
PROTECTED_COLUMNS = ('id', 'created_at', 'updated_at', 'likes', 'views')

SORT_OPTIONS = ('newest', 'oldest', 'popular', 'featured')


def _now():
    return datetime.now(timezone.utc).isoformat()


class BlogService(BaseService):
    """博客文章服务"""
    table = 'blog_posts'

    def __init__(self, client, bucket='images'):
        super().__init__(client)
        self.bucket = bucket

    def get_published_posts(self):
        """获取所有已发布文章，按发布时间倒序"""
        response = self.query().select('*').eq('published', True) \
            .order('published_at', desc=True).execute()
        return BlogPost.from_rows(response.data)

    def get_post_by_slug(self, slug):
        """按 slug 获取已发布文章，不存在返回 None"""
        row = self.fetch_single(
            self.query().select('*').eq('slug', slug).eq('published', True)
        )
        return BlogPost.from_row(row) if row else None

    def get_post_by_id(self, id):
        """按 ID 获取文章 (含草稿)，不存在返回 None"""
        row = self.fetch_single(self.query().select('*').eq('id', id))
        return BlogPost.from_row(row) if row else None

    def get_all_posts(self):
        """后台：获取全部文章 (含草稿)，按创建时间倒序"""
        response = self.query().select('*').order('created_at', desc=True).execute()
        return BlogPost.from_rows(response.data)

    def create_post(self, data):
        """
        创建文章
        - 默认为草稿，只有显式 published=True 才发布
        - published_at 当且仅当发布时写入
        - slug 缺省时由标题生成，read_time 由正文估算
        """
        payload = {k: v for k, v in dict(data).items() if k not in PROTECTED_COLUMNS}
        if not payload.get('title') or not payload.get('content'):
            raise ValidationError('Title and content are required')

        payload['slug'] = slugify(payload.get('slug') or payload['title'])
        if not payload['slug']:
            raise ValidationError('Slug must contain letters or numbers')

        published = bool(payload.get('published', False))
        payload['published'] = published
        payload['published_at'] = _now() if published else None
        payload['read_time'] = calculate_read_time(payload['content'])
        payload['tags'] = normalize_tags(payload.get('tags'))

        row = self.insert_row(payload)
        logger.info(f"Blog post created: {payload['slug']} (published={published})")
        return BlogPost.from_row(row)

    def update_post(self, id, updates):
        """
        更新文章
        - 草稿 -> 发布：写入当前时间
        - 保持发布：沿用原发布时间
        - 取消发布：清空 published_at
        """
        payload = {k: v for k, v in dict(updates).items() if k not in PROTECTED_COLUMNS}
        payload.pop('published_at', None)

        if 'published' in payload:
            published = bool(payload['published'])
            payload['published'] = published
            if published:
                current = self.get_post_by_id(id)
                if current is None:
                    raise NotFound(f'Blog post {id} not found')
                if current.published and current.published_at:
                    payload['published_at'] = current.published_at.isoformat()
                else:
                    payload['published_at'] = _now()
            else:
                payload['published_at'] = None

        if 'slug' in payload:
            payload['slug'] = slugify(payload['slug'])
            if not payload['slug']:
                raise ValidationError('Slug must contain letters or numbers')
        if 'content' in payload:
            if not payload['content']:
                raise ValidationError('Title and content are required')
            payload['read_time'] = calculate_read_time(payload['content'])
        if 'title' in payload and not payload['title']:
            raise ValidationError('Title and content are required')
        if 'tags' in payload:
            payload['tags'] = normalize_tags(payload['tags'])

        payload['updated_at'] = _now()
        return BlogPost.from_row(self.update_row(id, payload))

    def delete_post(self, id):
        """删除文章：先清理封面图 (失败仅记录)，再删除数据库记录"""
        post = self.get_post_by_id(id)
        if post and post.featured_image:
            remove_from_storage(self.client, self.bucket, post.featured_image, default_folder='blog')
        self.delete_row(id)
        logger.info(f'Blog post deleted: {id}')

    def increment_views(self, id):
        """阅读数 +1 (后端存储过程)，失败只记录日志"""
        try:
            self.client.rpc('increment_views', {'post_id': id}).execute()
        except Exception as e:
            logger.error(f'Error incrementing views for post {id}: {e}')

    @staticmethod
    def filter_posts(posts, search=None, category=None, sort='newest'):
        """在内存中按关键字、分类筛选并排序"""
        filtered = [
            p for p in posts
            if matches_search(search, p.title, p.excerpt, tags=p.tags)
        ]
        if category and category != 'All':
            filtered = [p for p in filtered if p.category == category]

        newest_first = sorted(filtered, key=lambda p: sort_time(p.published_at, p.created_at), reverse=True)
        if sort == 'oldest':
            return list(reversed(newest_first))
        if sort == 'popular':
            return sorted(newest_first, key=lambda p: p.views or 0, reverse=True)
        if sort == 'featured':
            return sorted(newest_first, key=lambda p: not p.featured)
        return newest_first

    @staticmethod
    def list_categories(posts):
        """文章中出现过的分类 (去重排序)"""
        return sorted({p.category for p in posts if p.category})
