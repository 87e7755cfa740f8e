"""访问统计服务 (page_views)"""
import logging
from datetime import datetime, timedelta, timezone

from portfolio.models.analytics import PageView
from portfolio.services.base import BaseService

logger = logging.getLogger(__name__)


class AnalyticsService(BaseService):
    table = 'page_views'

    def track_page_view(self, page_path, user_agent=None, referrer=None):
        """记录一次页面访问，失败只记录日志"""
        try:
            self.query().insert({
                'page_path': page_path,
                'user_agent': user_agent,
                'referrer': referrer,
            }).execute()
        except Exception as e:
            logger.error(f'Error tracking page view for {page_path}: {e}')

    def get_page_views(self, days=30):
        """最近 N 天的访问记录，最新在前"""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        response = self.query().select('*').gte('created_at', since.isoformat()) \
            .order('created_at', desc=True).execute()
        return PageView.from_rows(response.data)

    @staticmethod
    def views_by_page(page_views):
        """按页面路径汇总访问次数，次数多的在前"""
        counts = {}
        for view in page_views:
            counts[view.page_path] = counts.get(view.page_path, 0) + 1
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
