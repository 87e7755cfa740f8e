"""联系表单服务 (contact_submissions)"""
import logging

from portfolio.exceptions import ValidationError
from portfolio.models.contact import CONTACT_STATUSES, STATUS_NEW, ContactSubmission
from portfolio.services.base import BaseService

logger = logging.getLogger(__name__)

SUBMISSION_FIELDS = ('name', 'email', 'subject', 'message', 'budget', 'timeline')


class ContactService(BaseService):
    table = 'contact_submissions'

    def submit_contact(self, data):
        """公开联系表单提交，新记录状态固定为 new"""
        payload = {k: data.get(k) for k in SUBMISSION_FIELDS if data.get(k) not in (None, '')}
        missing = [k for k in ('name', 'email', 'subject', 'message') if not payload.get(k)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        payload['status'] = STATUS_NEW
        row = self.insert_row(payload)
        logger.info(f"Contact submission received from {payload['email']}")
        return ContactSubmission.from_row(row)

    def get_submissions(self):
        """后台：全部提交，最新在前"""
        response = self.query().select('*').order('created_at', desc=True).execute()
        return ContactSubmission.from_rows(response.data)

    def update_status(self, id, status):
        """更新处理状态，记录不存在时抛出 NotFound"""
        if status not in CONTACT_STATUSES:
            raise ValidationError(f"Invalid status '{status}'")
        return ContactSubmission.from_row(self.update_row(id, {'status': status}))
