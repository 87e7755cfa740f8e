from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .base import BaseRecord

# 作品分类：同一张 artworks 表服务三个画廊视图
CATEGORY_3D = '3d'
CATEGORY_2D = '2d'
CATEGORY_PHOTOGRAPHY = 'photography'
ARTWORK_CATEGORIES = (CATEGORY_3D, CATEGORY_2D, CATEGORY_PHOTOGRAPHY)

# 后台表单的子分类候选项
SUBCATEGORY_CHOICES = {
    CATEGORY_2D: [
        'Digital Painting', 'Illustration', 'Concept Art', 'Character Design',
        'Environment Art', 'Portrait', 'Abstract', 'Fantasy Art',
    ],
    CATEGORY_3D: [
        'Character Model', 'Environment', 'Props', 'Vehicle',
        'Architectural', 'Abstract Sculpture', 'Animation', 'Game Asset',
    ],
    CATEGORY_PHOTOGRAPHY: [
        'Landscape', 'Portrait', 'Urban', 'Nature', 'Architecture',
        'Wildlife', 'Street', 'Abstract', 'Astrophotography', 'Cultural',
    ],
}

BLOG_CATEGORIES = [
    'Digital Art', '3D Modeling', 'Creative Process', 'Industry Insights', 'Tutorials',
]


@dataclass
class BlogPost(BaseRecord):
    """博客文章 (blog_posts)"""
    TIMESTAMP_FIELDS = ('created_at', 'updated_at', 'published_at')
    LIST_FIELDS = ('tags',)

    id: Optional[str] = None
    title: str = ''
    slug: str = ''
    excerpt: Optional[str] = None
    content: str = ''  # Markdown 文本
    category: str = ''
    tags: List[str] = field(default_factory=list)
    featured_image: Optional[str] = None
    published: bool = False
    featured: bool = False
    likes: int = 0
    views: int = 0
    read_time: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


@dataclass
class Artwork(BaseRecord):
    """2D/3D 作品与摄影作品 (artworks)，按 category 区分画廊"""
    LIST_FIELDS = ('tags',)

    id: Optional[str] = None
    title: str = ''
    description: Optional[str] = None
    image_url: str = ''
    thumbnail_url: Optional[str] = None
    category: str = CATEGORY_2D
    subcategory: Optional[str] = None
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    camera: Optional[str] = None
    settings: Optional[str] = None
    location: Optional[str] = None
    sketchfab_id: Optional[str] = None  # 外部 3D 模型 ID
    tags: List[str] = field(default_factory=list)
    featured: bool = False
    likes: int = 0
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
