from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .base import BaseRecord

STATUS_NEW = 'new'
STATUS_READ = 'read'
STATUS_REPLIED = 'replied'
STATUS_ARCHIVED = 'archived'
CONTACT_STATUSES = (STATUS_NEW, STATUS_READ, STATUS_REPLIED, STATUS_ARCHIVED)

BUDGET_CHOICES = ['under-1k', '1k-5k', '5k-10k', '10k-plus', 'discuss']
TIMELINE_CHOICES = ['asap', '1-month', '3-months', '6-months', 'flexible']


@dataclass
class ContactSubmission(BaseRecord):
    """联系表单提交 (contact_submissions)"""
    TIMESTAMP_FIELDS = ('created_at',)

    id: Optional[str] = None
    name: str = ''
    email: str = ''
    subject: str = ''
    message: str = ''
    budget: Optional[str] = None
    timeline: Optional[str] = None
    status: str = STATUS_NEW
    created_at: Optional[datetime] = None
