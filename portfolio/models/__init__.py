# 按照依赖顺序导入
from .base import BaseRecord
from .content import BlogPost, Artwork, ARTWORK_CATEGORIES, SUBCATEGORY_CHOICES, BLOG_CATEGORIES
from .contact import ContactSubmission, CONTACT_STATUSES
from .analytics import PageView
from .auth import AdminUser
