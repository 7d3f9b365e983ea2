from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.validators import MinLengthValidator
from django.db import models

from .policy import UNKNOWN_USER_AGENT


class QRCode(models.Model):
    KIND_CHOICES = [('profile', 'profile'), ('event', 'event'), ('gallery', 'gallery')]

    code = models.CharField(max_length=32, unique=True, validators=[MinLengthValidator(8)])
    url = models.URLField(max_length=500)
    kind = models.CharField(max_length=16, choices=KIND_CHOICES, default='profile')
    target_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    target_id = models.PositiveBigIntegerField()
    target = GenericForeignKey('target_type', 'target_id')

    # statistics, only ever changed through record_visit()
    views = models.PositiveBigIntegerField(default=0)
    scans = models.PositiveBigIntegerField(default=0)
    last_visited_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='qr_codes',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(scans__lte=models.F('views')), name='qr_scans_lte_views'),
            models.CheckConstraint(condition=~models.Q(code=''), name='qr_code_not_empty'),
            models.UniqueConstraint(
                fields=['target_type', 'target_id', 'kind'],
                condition=models.Q(is_active=True),
                name='qr_one_active_per_target',
            ),
        ]
        indexes = [
            models.Index(fields=['target_type', 'target_id', 'kind'], name='qr_target_idx'),
            models.Index(fields=['created_by'], name='qr_created_by_idx'),
            models.Index(fields=['is_active'], name='qr_active_idx'),
        ]
        verbose_name = 'QR code'
        verbose_name_plural = 'QR codes'

    def __str__(self):
        return f"{self.code} ({self.kind}, {self.views} views / {self.scans} scans)"

    def record_visit(self, visitor_ip, user_agent=None, now=None):
        """Count a visit and refresh the statistics on this instance."""
        from .services import record_visit
        return record_visit(self, visitor_ip, user_agent, now=now)


class VisitRecord(models.Model):
    qr = models.ForeignKey(QRCode, on_delete=models.CASCADE, related_name='recent_visits')
    visitor_ip = models.CharField(max_length=64, blank=True)
    user_agent = models.TextField(default=UNKNOWN_USER_AGENT)
    timestamp = models.DateTimeField()

    class Meta:
        ordering = ['-timestamp', '-id']
        indexes = [models.Index(fields=['qr', '-timestamp'], name='qr_visit_recent_idx')]

    def __str__(self):
        return f"{self.visitor_ip or '?'} @ {self.timestamp:%Y-%m-%d %H:%M}"
