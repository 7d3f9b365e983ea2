"""
QR codes: creation, resolution and visit tracking.

Visits on one code are serialized by locking its statistics row
(``select_for_update``) for the whole read-decide-write. The visit log is read
and the dedup decision taken under that lock, so concurrent visits queue up
instead of overwriting each other. Counters are incremented with ``F()``
expressions so the database does the arithmetic. Different codes never
contend.
"""
import logging

import segno
from django.conf import settings
from django.contrib.contenttypes.models import ContentType
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound

from .exceptions import PersistenceError, QRAlreadyExists, QRNotFound
from .metrics import TRACKING_FAILURES, VISITS
from .models import QRCode, VisitRecord
from .policy import UNKNOWN_USER_AGENT, Visit, is_duplicate_visit, plan_insert
from .utils import generate_short_code

logger = logging.getLogger(__name__)

KIND_PROFILE = 'profile'
CODE_ATTEMPTS = 5
VISITOR_IP_MAX_LENGTH = VisitRecord._meta.get_field('visitor_ip').max_length


def _lock_statistics(qr_id):
    return QRCode.objects.select_for_update().only('pk').get(pk=qr_id)


def _load_visit_log(qr_id):
    return list(VisitRecord.objects.filter(qr_id=qr_id).order_by('-timestamp', '-id'))


def _apply_visit(qr_id, visit):
    """Record one visit under the row lock. Returns True when it counted as a scan."""
    with transaction.atomic():
        _lock_statistics(qr_id)
        log = _load_visit_log(qr_id)
        duplicate = is_duplicate_visit(log, visit.visitor_ip, visit.timestamp)

        QRCode.objects.filter(pk=qr_id).update(
            views=F('views') + 1,
            scans=F('scans') + (0 if duplicate else 1),
            last_visited_at=visit.timestamp,
        )

        if not duplicate:
            store, evicted = plan_insert(log, visit)
            if evicted:
                VisitRecord.objects.filter(pk__in=[v.pk for v in evicted]).delete()
            if store:
                VisitRecord.objects.create(
                    qr_id=qr_id,
                    visitor_ip=visit.visitor_ip,
                    user_agent=visit.user_agent,
                    timestamp=visit.timestamp,
                )
    return not duplicate


def record_visit(qr, visitor_ip, user_agent=None, now=None):
    """Count one visit on ``qr`` and return it with refreshed statistics.

    ``views`` always grows by one; ``scans`` only when the visitor IP has no
    visit in the trailing 24 hours. Raises PersistenceError when the database
    fails.
    """
    visit = Visit(
        (visitor_ip or '')[:VISITOR_IP_MAX_LENGTH],
        user_agent or UNKNOWN_USER_AGENT,
        now or timezone.now(),
    )

    try:
        is_scan = _apply_visit(qr.pk, visit)
    except QRCode.DoesNotExist:
        raise QRNotFound()
    except DatabaseError as e:
        TRACKING_FAILURES.inc()
        logger.error(f"Database error recording visit on QR {qr.code}: {e}")
        raise PersistenceError() from e

    VISITS.labels(outcome='scan' if is_scan else 'view').inc()
    qr.refresh_from_db(fields=['views', 'scans', 'last_visited_at'])
    return qr


def resolve_code(code, active_only=True):
    qs = QRCode.objects.select_related('target_type')
    if active_only:
        qs = qs.filter(is_active=True)
    try:
        return qs.get(code=code)
    except QRCode.DoesNotExist:
        raise QRNotFound()


def resolve_target(qr):
    """The public resource behind ``qr``; hidden or missing targets are NotFound."""
    target = qr.target
    if target is None or not getattr(target, 'is_active', True) or not getattr(target, 'is_public', True):
        raise NotFound('Memorial not found or not public')
    return target


def track_visit(code, visitor_ip, user_agent, now=None):
    qr = resolve_code(code)
    return record_visit(qr, visitor_ip, user_agent, now=now)


def _send_to_celery(qr, visitor_ip, user_agent, timestamp):
    from .tasks import record_visit_task
    try:
        record_visit_task.delay(qr.pk, visitor_ip, user_agent, timestamp.isoformat())
        logger.debug(f"Visit on QR {qr.code} queued")
    except Exception as e:
        logger.error(f"Celery unavailable, recording visit on QR {qr.code} inline: {e}")
        try:
            record_visit(qr, visitor_ip, user_agent, now=timestamp)
        except (PersistenceError, QRNotFound) as exc:
            logger.warning(f"Visit on QR {qr.code} lost: {exc.detail}")


def track_visit_safely(qr, visitor_ip, user_agent, now=None):
    """Best-effort tracking for the public memorial page.

    Returns whether the visit was recorded (or queued). Tracking errors,
    including a code removed since it was resolved, are logged and swallowed.
    """
    timestamp = now or timezone.now()
    if settings.QR_TRACK_VISITS_ASYNC:
        transaction.on_commit(lambda: _send_to_celery(qr, visitor_ip, user_agent, timestamp))
        return True
    try:
        record_visit(qr, visitor_ip, user_agent, now=timestamp)
    except (PersistenceError, QRNotFound) as e:
        logger.warning(f"Visit tracking failed for QR {qr.code}: {e.detail}")
        return False
    return True


def build_qr_url(code):
    return f"{settings.QR_BASE_URL.rstrip('/')}/{code}"


def generate_unique_code():
    for _ in range(CODE_ATTEMPTS):
        code = generate_short_code()
        if not QRCode.objects.filter(code=code).exists():
            return code
    raise PersistenceError('Could not allocate a unique QR code')


def _has_active_qr(profile_type, profile):
    return QRCode.objects.filter(
        target_type=profile_type, target_id=profile.pk, kind=KIND_PROFILE, is_active=True
    ).exists()


def create_qr_for_profile(profile, user):
    profile_type = ContentType.objects.get_for_model(profile)
    if _has_active_qr(profile_type, profile):
        raise QRAlreadyExists()

    code = generate_unique_code()
    try:
        with transaction.atomic():
            qr = QRCode.objects.create(
                code=code,
                url=build_qr_url(code),
                kind=KIND_PROFILE,
                target_type=profile_type,
                target_id=profile.pk,
                created_by=user,
            )
            profile.qr = qr
            profile.save(update_fields=['qr', 'updated_at'])
    except IntegrityError as e:
        # qr_one_active_per_target: a concurrent request won the race
        if _has_active_qr(profile_type, profile):
            logger.info(f"Profile {profile.pk} got an active QR concurrently")
            raise QRAlreadyExists() from e
        logger.error(f"Could not create QR for profile {profile.pk}: {e}")
        raise PersistenceError('Could not allocate a unique QR code') from e

    logger.info(f"QR {qr.code} created for profile {profile.pk}")
    return qr


def deactivate(qr):
    qr.is_active = False
    qr.save(update_fields=['is_active', 'updated_at'])
    logger.info(f"QR {qr.code} deactivated")
    return qr


def get_stats(qr):
    return {
        'code': qr.code,
        'kind': qr.kind,
        'is_active': qr.is_active,
        'views': qr.views,
        'scans': qr.scans,
        'last_visited_at': qr.last_visited_at,
        'recent_visits': qr.recent_visits.count(),
    }


def render_qr_image(qr, dark='#000000', light='#FFFFFF', scale=10):
    """PNG data URI of the QR pointing at the memorial URL."""
    return segno.make(qr.url, error='h').png_data_uri(scale=scale, border=2, dark=dark, light=light)
