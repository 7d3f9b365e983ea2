from unittest.mock import patch

import pytest
from django.contrib.contenttypes.models import ContentType
from django.urls import reverse

from profiles.models import Profile
from qr.exceptions import PersistenceError, QRNotFound
from qr.models import QRCode, VisitRecord


@pytest.mark.django_db
class TestMemorialAccess:

    def url(self, code):
        return reverse('memorial-access', args=[code])

    def test_returns_memorial_and_counts_visit(self, api_client, qr_code):
        response = api_client.get(self.url(qr_code.code), HTTP_USER_AGENT='Firefox')

        assert response.status_code == 200
        body = response.json()
        assert body['memorial']['full_name'] == 'Ana María López'
        assert body['memorial']['age_at_death'] == 80
        assert body['qr'] == {'code': qr_code.code, 'kind': 'profile', 'views': 1, 'scans': 1}
        assert body['visit_registered'] is True
        record = VisitRecord.objects.get()
        assert (record.visitor_ip, record.user_agent) == ('127.0.0.1', 'Firefox')

    def test_repeat_visit_is_a_view(self, api_client, qr_code):
        api_client.get(self.url(qr_code.code))
        body = api_client.get(self.url(qr_code.code)).json()

        assert (body['qr']['views'], body['qr']['scans']) == (2, 1)

    def test_forwarded_for_identifies_visitor(self, api_client, qr_code):
        api_client.get(self.url(qr_code.code), HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1')
        api_client.get(self.url(qr_code.code), HTTP_X_FORWARDED_FOR='198.51.100.2')

        qr_code.refresh_from_db()
        assert (qr_code.views, qr_code.scans) == (2, 2)
        assert set(VisitRecord.objects.values_list('visitor_ip', flat=True)) == {'203.0.113.7', '198.51.100.2'}

    def test_missing_user_agent(self, api_client, qr_code):
        api_client.get(self.url(qr_code.code))
        assert VisitRecord.objects.get().user_agent == 'Unknown'

    def test_oversized_forwarded_for_falls_back_to_remote_addr(self, api_client, qr_code):
        response = api_client.get(self.url(qr_code.code), HTTP_X_FORWARDED_FOR='x' * 300 + ', 10.0.0.1')

        assert response.status_code == 200
        assert response.json()['visit_registered'] is True
        assert VisitRecord.objects.get().visitor_ip == '127.0.0.1'

    def test_code_removed_while_tracking_still_serves_the_page(self, api_client, qr_code):
        with patch('qr.services.record_visit', side_effect=QRNotFound()):
            response = api_client.get(self.url(qr_code.code))

        assert response.status_code == 200
        assert response.json()['visit_registered'] is False

    def test_tracking_failure_does_not_fail_the_page(self, api_client, qr_code):
        with patch('qr.services.record_visit', side_effect=PersistenceError()):
            response = api_client.get(self.url(qr_code.code))

        assert response.status_code == 200
        assert response.json()['visit_registered'] is False
        assert response.json()['memorial']['full_name'] == 'Ana María López'

    def test_unknown_code(self, api_client, db):
        assert api_client.get(self.url('NOSUCHCODE00')).status_code == 404

    def test_inactive_code(self, api_client, qr_code):
        qr_code.is_active = False
        qr_code.save()
        assert api_client.get(self.url(qr_code.code)).status_code == 404

    def test_private_profile(self, api_client, qr_code, profile):
        Profile.objects.filter(pk=profile.pk).update(is_public=False)
        assert api_client.get(self.url(qr_code.code)).status_code == 404
        qr_code.refresh_from_db()
        assert qr_code.views == 0

    def test_unsupported_kind(self, api_client, profile, user):
        QRCode.objects.create(
            code='EVENTCODE001',
            url='http://localhost/memorial/EVENTCODE001',
            kind='event',
            target_type=ContentType.objects.get_for_model(Profile),
            target_id=profile.pk,
            created_by=user,
        )
        assert api_client.get(self.url('EVENTCODE001')).status_code == 400


@pytest.mark.django_db
class TestTrackVisitEndpoint:

    def test_public_visit(self, api_client, qr_code):
        response = api_client.post(reverse('qr-visit', args=[qr_code.code]))

        assert response.status_code == 200
        assert response.json() == {'code': qr_code.code, 'views': 1, 'scans': 1}

    def test_unknown_code(self, api_client, db):
        assert api_client.post(reverse('qr-visit', args=['NOSUCHCODE00'])).status_code == 404

    def test_persistence_failure(self, api_client, qr_code):
        with patch('qr.services.record_visit', side_effect=PersistenceError()):
            response = api_client.post(reverse('qr-visit', args=[qr_code.code]))
        assert response.status_code == 503

    def test_oversized_forwarded_for(self, api_client, qr_code):
        response = api_client.post(reverse('qr-visit', args=[qr_code.code]), HTTP_X_FORWARDED_FOR='a' * 80)

        assert response.status_code == 200
        assert VisitRecord.objects.get().visitor_ip == '127.0.0.1'


@pytest.mark.django_db
class TestOwnerEndpoints:

    def test_generate(self, owner_client, profile):
        response = owner_client.post(reverse('qr-generate', args=[profile.pk]), {'dark': '#222222'}, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['qr_image'].startswith('data:image/png;base64,')
        assert Profile.objects.get(pk=profile.pk).qr.code == body['code']

    def test_generate_twice(self, owner_client, profile):
        owner_client.post(reverse('qr-generate', args=[profile.pk]))
        assert owner_client.post(reverse('qr-generate', args=[profile.pk])).status_code == 409

    def test_generate_rejects_bad_color(self, owner_client, profile):
        response = owner_client.post(reverse('qr-generate', args=[profile.pk]), {'dark': 'black'}, format='json')
        assert response.status_code == 400
        assert not QRCode.objects.exists()

    def test_generate_for_someone_elses_profile(self, api_client, other_user, profile):
        api_client.force_authenticate(other_user)
        assert api_client.post(reverse('qr-generate', args=[profile.pk])).status_code == 404

    def test_list(self, owner_client, qr_code):
        body = owner_client.get(reverse('qr-list')).json()
        assert [q['code'] for q in body] == [qr_code.code]

    def test_stats(self, owner_client, api_client, qr_code):
        api_client.get(reverse('memorial-access', args=[qr_code.code]))
        body = owner_client.get(reverse('qr-stats', args=[qr_code.code])).json()

        assert (body['views'], body['scans'], body['recent_visits']) == (1, 1, 1)
        assert body['last_visited_at'] is not None

    def test_stats_of_deactivated_code(self, owner_client, qr_code):
        owner_client.post(reverse('qr-deactivate', args=[qr_code.code]))
        response = owner_client.get(reverse('qr-stats', args=[qr_code.code]))
        assert response.status_code == 200
        assert response.json()['is_active'] is False

    def test_stats_forbidden_for_others(self, api_client, other_user, qr_code):
        api_client.force_authenticate(other_user)
        assert api_client.get(reverse('qr-stats', args=[qr_code.code])).status_code == 403

    def test_stats_requires_login(self, api_client, qr_code):
        assert api_client.get(reverse('qr-stats', args=[qr_code.code])).status_code == 403

    def test_detail_and_image(self, owner_client, qr_code):
        detail = owner_client.get(reverse('qr-detail', args=[qr_code.code])).json()
        assert detail['url'] == qr_code.url

        image = owner_client.get(reverse('qr-image', args=[qr_code.code]), {'scale': 3}).json()
        assert image['image'].startswith('data:image/png;base64,')

    def test_deactivate(self, owner_client, api_client, qr_code):
        response = owner_client.post(reverse('qr-deactivate', args=[qr_code.code]))

        assert response.json() == {'code': qr_code.code, 'is_active': False}
        assert api_client.get(reverse('memorial-access', args=[qr_code.code])).status_code == 404


@pytest.mark.django_db
class TestProfiles:

    payload = {
        'full_name': 'José Pérez',
        'birth_date': '1931-07-01',
        'death_date': '2019-11-23',
        'epitaph': 'Descansa en paz',
    }

    def test_create(self, owner_client, user):
        response = owner_client.post(reverse('profile-create'), self.payload, format='json')

        assert response.status_code == 201
        assert Profile.objects.get(pk=response.json()['id']).owner == user

    def test_death_before_birth(self, owner_client):
        data = dict(self.payload, death_date='1930-01-01')
        response = owner_client.post(reverse('profile-create'), data, format='json')
        assert response.status_code == 400
        assert 'death_date' in response.json()

    def test_future_death_date(self, owner_client):
        data = dict(self.payload, death_date='2999-01-01')
        assert owner_client.post(reverse('profile-create'), data, format='json').status_code == 400

    def test_list_shows_qr(self, owner_client, qr_code):
        body = owner_client.get(reverse('profile-list')).json()
        assert body[0]['qr_code'] == qr_code.code

    def test_detail(self, owner_client, qr_code, profile):
        body = owner_client.get(reverse('profile-detail', args=[profile.pk])).json()

        assert body['full_name'] == 'Ana María López'
        assert body['family'] == {'children': ['Lucía', 'Pablo']}
        assert body['qr_code'] == qr_code.code

    def test_detail_of_someone_elses_profile(self, api_client, other_user, profile):
        api_client.force_authenticate(other_user)
        assert api_client.get(reverse('profile-detail', args=[profile.pk])).status_code == 403
        assert api_client.delete(reverse('profile-detail', args=[profile.pk])).status_code == 403
        assert Profile.objects.get(pk=profile.pk).is_active is True

    def test_detail_requires_login(self, api_client, profile):
        assert api_client.get(reverse('profile-detail', args=[profile.pk])).status_code == 403

    def test_put_replaces_fields(self, owner_client, profile):
        response = owner_client.put(reverse('profile-detail', args=[profile.pk]), self.payload, format='json')

        assert response.status_code == 200
        profile.refresh_from_db()
        assert profile.full_name == 'José Pérez'
        assert profile.epitaph == 'Descansa en paz'

    def test_patch_checks_dates_against_stored_ones(self, owner_client, profile):
        url = reverse('profile-detail', args=[profile.pk])

        response = owner_client.patch(url, {'death_date': '1939-12-31'}, format='json')
        assert response.status_code == 400
        assert 'death_date' in response.json()

        response = owner_client.patch(url, {'city': 'Sevilla'}, format='json')
        assert response.status_code == 200
        assert response.json()['city'] == 'Sevilla'

    def test_delete_is_soft(self, owner_client, api_client, qr_code, profile):
        response = owner_client.delete(reverse('profile-detail', args=[profile.pk]))

        assert response.status_code == 204
        assert Profile.objects.get(pk=profile.pk).is_active is False
        assert owner_client.get(reverse('profile-detail', args=[profile.pk])).status_code == 404
        assert owner_client.get(reverse('profile-list')).json() == []
        assert api_client.get(reverse('memorial-access', args=[qr_code.code])).status_code == 404


@pytest.mark.django_db
def test_health(api_client):
    body = api_client.get(reverse('health')).json()
    assert body['database'] == 'ok'
    assert body['cache'] == 'ok'
    assert body['celery'] == 'disabled'
