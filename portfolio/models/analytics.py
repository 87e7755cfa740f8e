from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .base import BaseRecord


@dataclass
class PageView(BaseRecord):
    """页面访问日志 (page_views)，只追加"""
    TIMESTAMP_FIELDS = ('created_at',)

    id: Optional[str] = None
    page_path: str = ''
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    created_at: Optional[datetime] = None
