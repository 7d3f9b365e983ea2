"""
Shared fixtures: users, a memorial profile with its QR code, API clients and
a fixed clock value for visit tracking.
"""
from datetime import date, datetime, timezone

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from profiles.models import Profile
from qr import services


@pytest.fixture(autouse=True)
def fast_password_hashing(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def now():
    return datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username='family', email='family@example.com', password='s3cret-pass')


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(username='stranger', email='stranger@example.com', password='s3cret-pass')


@pytest.fixture
def profile(user):
    return Profile.objects.create(
        owner=user,
        full_name='Ana María López',
        birth_date=date(1940, 3, 2),
        death_date=date(2020, 5, 17),
        epitaph='Siempre en nuestros corazones',
        city='Valencia',
        country='España',
        family={'children': ['Lucía', 'Pablo']},
    )


@pytest.fixture
def qr_code(profile, user):
    return services.create_qr_for_profile(profile, user)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(user):
    client = APIClient()
    client.force_authenticate(user)
    return client
