from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Profile(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profiles')
    full_name = models.CharField(max_length=100)
    birth_date = models.DateField()
    death_date = models.DateField()
    photo_url = models.URLField(max_length=500, blank=True)
    epitaph = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=50, blank=True)
    country = models.CharField(max_length=50, blank=True)
    cemetery = models.CharField(max_length=100, blank=True)
    biography = models.TextField(max_length=10000, blank=True)
    profession = models.CharField(max_length=100, blank=True)
    family = models.JSONField(default=dict, blank=True) # spouse, children, parents, siblings
    qr = models.OneToOneField('qr.QRCode', null=True, blank=True, on_delete=models.SET_NULL, related_name='profile')
    is_public = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.full_name} ({self.birth_date:%Y} - {self.death_date:%Y})"

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(death_date__gte=models.F('birth_date')), name='profile_death_after_birth'),
        ]
        indexes = [
            models.Index(fields=['owner', 'is_active'], name='profile_owner_active_idx'),
        ]

    def clean(self):
        today = timezone.localdate()
        errors = {}
        if self.birth_date and self.birth_date >= today:
            errors['birth_date'] = 'Birth date must be before today'
        if self.death_date and self.death_date > today:
            errors['death_date'] = 'Death date cannot be in the future'
        elif self.birth_date and self.death_date and self.death_date < self.birth_date:
            errors['death_date'] = 'Death date must not precede birth date'
        if errors:
            raise ValidationError(errors)

    @property
    def age_at_death(self):
        if not (self.birth_date and self.death_date):
            return None
        return _full_years(self.birth_date, self.death_date)

    @property
    def years_since_death(self):
        if not self.death_date:
            return None
        return _full_years(self.death_date, timezone.localdate())


def _full_years(start, end):
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
