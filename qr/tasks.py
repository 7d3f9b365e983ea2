import logging

from celery import shared_task
from django.utils.dateparse import parse_datetime

from .exceptions import PersistenceError, QRNotFound
from .models import QRCode

logger = logging.getLogger(__name__)

MAX_TASK_RETRIES = 3


@shared_task(ignore_result=True)
def record_visit_task(qr_id, visitor_ip, user_agent, timestamp, retry_count=0):
    """
    Background visit recording for the public memorial page.
    ``timestamp`` is the ISO time of the request, so dedup uses request time.
    """
    from .services import record_visit

    try:
        qr = QRCode.objects.get(pk=qr_id)
    except QRCode.DoesNotExist:
        logger.error(f"QR {qr_id} not found, visit dropped")
        return

    try:
        record_visit(qr, visitor_ip, user_agent, now=parse_datetime(timestamp))
    except QRNotFound:
        logger.error(f"QR {qr_id} removed before its visit was recorded, visit dropped")
    except PersistenceError as e:
        if retry_count < MAX_TASK_RETRIES:
            record_visit_task.apply_async(
                args=[qr_id, visitor_ip, user_agent, timestamp, retry_count + 1],
                countdown=10 * (retry_count + 1),
            )
            logger.warning(f"Retry scheduled for visit on QR {qr.code}: {e.detail}")
            return
        logger.error(f"Visit on QR {qr.code} dropped after {MAX_TASK_RETRIES} retries: {e.detail}")
