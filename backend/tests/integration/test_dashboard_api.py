"""
Integration Tests for Dashboard Endpoints
Tests scoped summaries, district breakdown and the volunteer dashboard
"""
import pytest
from httpx import AsyncClient

from app.db.reference_data import ODISHA_DISTRICT_NAMES
from app.models.assignment import Assignment, AssignmentStatus
from app.models.incident import IncidentSeverity, IncidentStatus
from app.models.volunteer import VolunteerStatus


def chart(data: dict, name: str) -> dict:
    return {row['label']: row['count'] for row in data[name]}


class TestSummary:
    """GET /api/dashboard/summary"""

    @pytest.mark.asyncio
    async def test_district_summary_is_scoped(
        self, client: AsyncClient, district_admin_headers, make_volunteer, make_incident
    ):
        await make_volunteer('Khordha', status=VolunteerStatus.APPROVED, is_ex_serviceman=True)
        await make_volunteer('Khordha')
        await make_volunteer('Puri', status=VolunteerStatus.APPROVED)
        await make_incident('Khordha', severity=IncidentSeverity.CRITICAL)
        await make_incident('Puri', severity=IncidentSeverity.CRITICAL)

        response = await client.get('/api/dashboard/summary', headers=district_admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['scope'] == 'district'
        assert data['district'] == 'Khordha'
        assert data['volunteers'] == {'total': 2, 'approved': 1, 'pending': 1, 'rejected': 0, 'exServicemen': 1}
        assert data['incidents']['active'] == 1
        assert chart(data, 'severityChart')['Critical'] == 1

    @pytest.mark.asyncio
    async def test_state_summary_counts_everything(
        self, client: AsyncClient, state_admin_headers, make_volunteer, make_incident
    ):
        await make_volunteer('Khordha')
        await make_volunteer('Puri')
        await make_incident('Cuttack', status=IncidentStatus.CLOSED)
        await make_incident('Puri', status=IncidentStatus.IN_PROGRESS, assigned_to=['x'])

        data = (await client.get('/api/dashboard/summary', headers=state_admin_headers)).json()

        assert data['volunteers']['total'] == 2
        assert data['incidents']['total'] == 2
        assert data['incidents']['active'] == 1
        assert data['incidents']['resolved'] == 1
        assert data['incidents']['byStatus']['closed'] == 1
        assert len(data['monthlyTrend']) == 6
        assert data['monthlyTrend'][-1]['volunteers'] == 2

    @pytest.mark.asyncio
    async def test_volunteer_summary_is_empty(
        self, client: AsyncClient, volunteer_headers, make_volunteer, make_incident
    ):
        await make_volunteer('Khordha')
        await make_incident('Khordha')

        data = (await client.get('/api/dashboard/summary', headers=volunteer_headers)).json()

        assert data['scope'] == 'volunteer'
        assert data['volunteers']['total'] == 0
        assert data['incidents']['total'] == 0
        assert data['trainings']['total'] == 0

    @pytest.mark.asyncio
    async def test_summary_includes_inventory_and_training(
        self, client: AsyncClient, state_admin_headers, make_training
    ):
        await client.post('/api/inventory', json={
            'name': 'Satellite phone',
            'category': 'communication_equipment',
            'quantity': 2,
            'location': 'Control room',
            'district': 'Puri',
        }, headers=state_admin_headers)
        await make_training('Puri')

        data = (await client.get('/api/dashboard/summary', headers=state_admin_headers)).json()

        assert data['inventory']['lowStock'] == 1
        assert chart(data, 'categoryChart')['Communication'] == 1
        assert data['trainings']['upcoming'] == 1

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get('/api/dashboard/summary')

        assert response.status_code == 401


class TestDistrictStats:
    """GET /api/dashboard/districts"""

    @pytest.mark.asyncio
    async def test_state_admin_gets_every_district(self, client: AsyncClient, state_admin_headers, make_volunteer):
        await make_volunteer('Puri', status=VolunteerStatus.APPROVED)

        rows = (await client.get('/api/dashboard/districts', headers=state_admin_headers)).json()

        assert [r['district'] for r in rows] == list(ODISHA_DISTRICT_NAMES)
        puri = next(r for r in rows if r['district'] == 'Puri')
        assert puri['volunteers']['approved'] == 1

    @pytest.mark.asyncio
    async def test_district_admin_gets_own_row(self, client: AsyncClient, district_admin_headers, make_incident):
        await make_incident('Khordha', severity=IncidentSeverity.CRITICAL)

        rows = (await client.get('/api/dashboard/districts', headers=district_admin_headers)).json()

        assert len(rows) == 1
        assert rows[0]['district'] == 'Khordha'
        assert rows[0]['incidents'] == {'total': 1, 'active': 1, 'critical': 1}

    @pytest.mark.asyncio
    async def test_volunteer_gets_nothing(self, client: AsyncClient, volunteer_headers):
        response = await client.get('/api/dashboard/districts', headers=volunteer_headers)

        assert response.json() == []


class TestVolunteerDashboard:
    """GET /api/dashboard/volunteer"""

    @pytest.mark.asyncio
    async def test_counts_own_work(
        self, client: AsyncClient, db_session, volunteer_headers, volunteer_profile, make_incident, make_training
    ):
        incident = await make_incident('Khordha')
        db_session.add(Assignment(volunteer_id=volunteer_profile.id, incident_id=incident.id,
                                  status=AssignmentStatus.ACCEPTED))
        await db_session.commit()
        training = await make_training('Khordha')
        await client.post(f'/api/trainings/{training.id}/register', headers=volunteer_headers)

        data = (await client.get('/api/dashboard/volunteer', headers=volunteer_headers)).json()

        assert data['volunteerId'] == volunteer_profile.id
        assert data['status'] == 'approved'
        assert data['assignments']['accepted'] == 1
        assert data['assignments']['total'] == 1
        assert data['registeredTrainings'] == 1
        assert data['upcomingTrainings'] == 1

    @pytest.mark.asyncio
    async def test_without_profile(self, client: AsyncClient, volunteer_headers):
        data = (await client.get('/api/dashboard/volunteer', headers=volunteer_headers)).json()

        assert data['volunteerId'] is None
        assert data['assignments']['total'] == 0
