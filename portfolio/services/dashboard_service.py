"""后台仪表盘统计：整表取回后在内存中汇总"""
from portfolio.models.contact import STATUS_NEW
from portfolio.models.content import CATEGORY_2D, CATEGORY_3D, CATEGORY_PHOTOGRAPHY


class DashboardService:

    def __init__(self, blog, artworks, contacts, analytics):
        self.blog = blog
        self.artworks = artworks
        self.contacts = contacts
        self.analytics = analytics

    def get_stats(self, days=30):
        posts = self.blog.get_all_posts()
        artworks = self.artworks.get_artworks()
        submissions = self.contacts.get_submissions()
        page_views = self.analytics.get_page_views(days)

        def count(category):
            return sum(1 for a in artworks if a.category == category)

        return {
            'blog_posts': len(posts),
            'published_posts': sum(1 for p in posts if p.published),
            'art_pieces': count(CATEGORY_2D),
            'models_3d': count(CATEGORY_3D),
            'photos': count(CATEGORY_PHOTOGRAPHY),
            'total_views': sum(p.views or 0 for p in posts) + sum(a.views or 0 for a in artworks),
            'total_likes': sum(p.likes or 0 for p in posts) + sum(a.likes or 0 for a in artworks),
            'new_messages': sum(1 for s in submissions if s.status == STATUS_NEW),
            'page_views': len(page_views),
            'page_view_days': days,
        }
