"""
Integration Tests for Volunteer Endpoints
Tests registration, scoped listing and application review
"""
import uuid
import pytest
from httpx import AsyncClient
from faker import Faker

from app.models.volunteer import VolunteerStatus

fake = Faker()


def application(district: str = 'Khordha') -> dict:
    return {
        'fullName': fake.name(),
        'phone': '9123456780',
        'district': district,
        'isExServiceman': True,
        'skills': ['First Aid', 'Swimming'],
    }


class TestRegistration:
    """POST /api/volunteers and /me"""

    @pytest.mark.asyncio
    async def test_register_starts_pending(self, client: AsyncClient, volunteer_headers, volunteer_user):
        response = await client.post('/api/volunteers', json=application(), headers=volunteer_headers)

        assert response.status_code == 201
        data = response.json()
        assert data['status'] == 'pending'
        assert data['userId'] == volunteer_user.id
        assert data['skills'] == ['First Aid', 'Swimming']

    @pytest.mark.asyncio
    async def test_register_twice(self, client: AsyncClient, volunteer_headers):
        await client.post('/api/volunteers', json=application(), headers=volunteer_headers)

        response = await client.post('/api/volunteers', json=application(), headers=volunteer_headers)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_my_profile_missing(self, client: AsyncClient, volunteer_headers):
        response = await client.get('/api/volunteers/me', headers=volunteer_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_my_profile(self, client: AsyncClient, volunteer_headers, volunteer_profile):
        response = await client.patch(
            '/api/volunteers/me',
            json={'address': 'Plot 12, Saheed Nagar', 'status': 'rejected'},
            headers=volunteer_headers,
        )

        assert response.status_code == 200
        assert response.json()['address'] == 'Plot 12, Saheed Nagar'
        assert response.json()['status'] == 'approved'

    @pytest.mark.asyncio
    async def test_null_does_not_clear_required_fields(self, client: AsyncClient, volunteer_headers, make_volunteer,
                                                       volunteer_user):
        profile = await make_volunteer(user=volunteer_user, full_name='Sasmita Behera', address='Old Town')

        response = await client.patch(
            '/api/volunteers/me',
            json={'fullName': None, 'phone': None, 'isExServiceman': None, 'skills': None, 'address': None},
            headers=volunteer_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data['id'] == profile.id
        assert data['fullName'] == 'Sasmita Behera'
        assert data['phone'] == '9876543210'
        assert data['isExServiceman'] is False
        assert data['address'] is None


class TestScopedListing:
    """GET /api/volunteers"""

    @pytest.mark.asyncio
    async def test_district_admin_sees_own_district(self, client: AsyncClient, district_admin_headers, make_volunteer):
        own = await make_volunteer('Khordha')
        await make_volunteer('Puri')

        response = await client.get('/api/volunteers', headers=district_admin_headers)

        assert response.status_code == 200
        assert [v['id'] for v in response.json()] == [own.id]

    @pytest.mark.asyncio
    async def test_state_admin_sees_all(self, client: AsyncClient, state_admin_headers, make_volunteer):
        await make_volunteer('Khordha')
        await make_volunteer('Puri')

        response = await client.get('/api/volunteers', headers=state_admin_headers)

        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_status_filter(self, client: AsyncClient, state_admin_headers, make_volunteer):
        await make_volunteer('Khordha', status=VolunteerStatus.APPROVED)
        await make_volunteer('Puri')

        response = await client.get('/api/volunteers?status=approved', headers=state_admin_headers)

        assert [v['status'] for v in response.json()] == ['approved']

    @pytest.mark.asyncio
    async def test_unknown_status_filter(self, client: AsyncClient, state_admin_headers):
        response = await client.get('/api/volunteers?status=archived', headers=state_admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_volunteer_list_is_empty(self, client: AsyncClient, volunteer_headers, make_volunteer):
        await make_volunteer('Khordha')

        response = await client.get('/api/volunteers', headers=volunteer_headers)

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_other_district_volunteer_is_not_found(self, client: AsyncClient, puri_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.get(f'/api/volunteers/{volunteer.id}', headers=puri_admin_headers)

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'VOLUNTEER_NOT_FOUND'


class TestApproval:
    """PATCH /api/volunteers/{id}/status"""

    @pytest.mark.asyncio
    async def test_approve(self, client: AsyncClient, district_admin, district_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.patch(
            f'/api/volunteers/{volunteer.id}/status',
            json={'status': 'approved'},
            headers=district_admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'approved'
        assert data['approvedBy'] == district_admin.id
        assert data['approvedAt'] is not None

    @pytest.mark.asyncio
    async def test_second_decision_conflicts(self, client: AsyncClient, district_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')
        url = f'/api/volunteers/{volunteer.id}/status'
        await client.patch(url, json={'status': 'approved'}, headers=district_admin_headers)

        response = await client.patch(url, json={'status': 'approved'}, headers=district_admin_headers)

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'ALREADY_DECIDED'

    @pytest.mark.asyncio
    async def test_reject_requires_reason(self, client: AsyncClient, district_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.patch(
            f'/api/volunteers/{volunteer.id}/status',
            json={'status': 'rejected', 'rejectionReason': '  '},
            headers=district_admin_headers,
        )

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'REJECTION_REASON_REQUIRED'

    @pytest.mark.asyncio
    async def test_reject_with_reason(self, client: AsyncClient, district_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.patch(
            f'/api/volunteers/{volunteer.id}/status',
            json={'status': 'rejected', 'rejectionReason': 'Documents unreadable'},
            headers=district_admin_headers,
        )

        assert response.status_code == 200
        assert response.json()['rejectionReason'] == 'Documents unreadable'

    @pytest.mark.asyncio
    async def test_other_district_admin_gets_not_found(self, client: AsyncClient, puri_admin_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.patch(
            f'/api/volunteers/{volunteer.id}/status',
            json={'status': 'approved'},
            headers=puri_admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_volunteer_cannot_approve(self, client: AsyncClient, volunteer_headers, make_volunteer):
        volunteer = await make_volunteer('Khordha')

        response = await client.patch(
            f'/api/volunteers/{volunteer.id}/status',
            json={'status': 'approved'},
            headers=volunteer_headers,
        )

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'MISSING_CAPABILITY'

    @pytest.mark.asyncio
    async def test_unknown_volunteer(self, client: AsyncClient, state_admin_headers):
        response = await client.patch(
            f'/api/volunteers/{uuid.uuid4()}/status',
            json={'status': 'approved'},
            headers=state_admin_headers,
        )

        assert response.status_code == 404
