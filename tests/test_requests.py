from uuid import uuid4
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from app.core.config import settings
from app.db import session as db_session
from app.db.init_db import init_db
from app.main import app
from app.models.access_request import AccessRequest
from app.models.enums import RequestStatus
from app.models.permission import Permission
from app.services import request_service


def _login(client: TestClient, name: str) -> tuple[dict, str]:
    email = f"{uuid4()}@b.com"
    registered = client.post('/api/v1/auth/register', json={'name': name, 'email': email, 'password': 'secret123'})
    login = client.post('/api/v1/auth/login', json={'email': email, 'password': 'secret123'})
    return {'Authorization': f"Bearer {login.json()['access_token']}"}, registered.json()['id']


def _upload(client: TestClient, headers: dict, title: str = 'Cooking Basics') -> str:
    created = client.post(
        '/api/v1/skills',
        data={'title': title},
        files={'video': ('clip.mp4', b'bytes', 'video/mp4')},
        headers=headers,
    )
    return created.json()['id']


def _permission_count(user_id: str, skill_id: str) -> int:
    with Session(db_session.engine) as session:
        statement = select(func.count()).select_from(Permission).where(
            (Permission.user_id == user_id) & (Permission.skill_id == skill_id)
        )
        return session.exec(statement).one()


def test_request_lifecycle_and_idempotent_accept():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, owner_id = _login(client, 'Bob')
        requester, requester_id = _login(client, 'Alice')
        skill_id = _upload(client, owner)

        created = client.post(f"/api/v1/requests/{skill_id}", headers=requester)
        assert created.status_code == 200
        request = created.json()
        assert request['status'] == 'pending'
        assert request['from_id'] == requester_id
        assert request['to_id'] == owner_id
        assert _permission_count(requester_id, skill_id) == 0

        accepted = client.post(f"/api/v1/requests/{request['id']}/accept", headers=owner)
        assert accepted.status_code == 200
        assert accepted.json()['status'] == 'accepted'
        assert _permission_count(requester_id, skill_id) == 1

        for _ in range(3):
            again = client.post(f"/api/v1/requests/{request['id']}/accept", headers=owner)
            assert again.status_code == 200
        assert _permission_count(requester_id, skill_id) == 1

        authorized = client.get('/api/v1/authorized', headers=requester)
        assert authorized.status_code == 200
        assert [item['id'] for item in authorized.json()] == [skill_id]
        assert authorized.json()[0]['owner']['name'] == 'Bob'


def test_cannot_request_own_or_missing_skill():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        skill_id = _upload(client, owner)

        own = client.post(f"/api/v1/requests/{skill_id}", headers=owner)
        assert own.status_code == 400
        assert own.json()['detail'] == 'Cannot request your own video'

        missing = client.post(f"/api/v1/requests/{uuid4()}", headers=owner)
        assert missing.status_code == 404


def test_duplicate_pending_request_conflicts_until_resolved():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        requester, _ = _login(client, 'Alice')
        skill_id = _upload(client, owner)

        first = client.post(f"/api/v1/requests/{skill_id}", headers=requester)
        duplicate = client.post(f"/api/v1/requests/{skill_id}", headers=requester)
        assert duplicate.status_code == 409
        assert duplicate.json()['detail'] == 'Request already pending'

        declined = client.post(f"/api/v1/requests/{first.json()['id']}/decline", headers=owner)
        assert declined.status_code == 200
        assert declined.json()['status'] == 'declined'

        retry = client.post(f"/api/v1/requests/{skill_id}", headers=requester)
        assert retry.status_code == 200
        assert retry.json()['id'] != first.json()['id']


def test_only_target_user_may_resolve():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        requester, requester_id = _login(client, 'Alice')
        stranger, _ = _login(client, 'Carol')
        skill_id = _upload(client, owner)
        request_id = client.post(f"/api/v1/requests/{skill_id}", headers=requester).json()['id']

        for headers in (requester, stranger):
            for action in ('accept', 'decline'):
                response = client.post(f"/api/v1/requests/{request_id}/{action}", headers=headers)
                assert response.status_code == 403
                assert response.json()['detail'] == 'Not your request'
        assert _permission_count(requester_id, skill_id) == 0

        missing = client.post(f"/api/v1/requests/{uuid4()}/accept", headers=owner)
        assert missing.status_code == 404


def test_decline_grants_no_permission_and_resolved_requests_can_be_reresolved():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        requester, requester_id = _login(client, 'Alice')
        skill_id = _upload(client, owner)
        request_id = client.post(f"/api/v1/requests/{skill_id}", headers=requester).json()['id']

        client.post(f"/api/v1/requests/{request_id}/decline", headers=owner)
        assert _permission_count(requester_id, skill_id) == 0

        accepted = client.post(f"/api/v1/requests/{request_id}/accept", headers=owner)
        assert accepted.status_code == 200
        assert accepted.json()['status'] == 'accepted'
        assert _permission_count(requester_id, skill_id) == 1


def test_strict_transitions_reject_resolved_requests(monkeypatch):
    init_db(drop_all=True)
    monkeypatch.setattr(settings, 'STRICT_REQUEST_TRANSITIONS', True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        requester, _ = _login(client, 'Alice')
        skill_id = _upload(client, owner)
        request_id = client.post(f"/api/v1/requests/{skill_id}", headers=requester).json()['id']

        assert client.post(f"/api/v1/requests/{request_id}/accept", headers=owner).status_code == 200
        again = client.post(f"/api/v1/requests/{request_id}/decline", headers=owner)
        assert again.status_code == 409
        assert again.json()['detail'] == 'Request already accepted'


def test_list_requests_by_direction():
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, owner_id = _login(client, 'Bob')
        requester, requester_id = _login(client, 'Alice')
        skill_id = _upload(client, owner, 'Guitar Lessons')
        request_id = client.post(f"/api/v1/requests/{skill_id}", headers=requester).json()['id']

        incoming = client.get('/api/v1/requests', headers=owner)
        assert incoming.status_code == 200
        assert [item['id'] for item in incoming.json()] == [request_id]
        item = incoming.json()[0]
        assert item['from_user']['id'] == requester_id
        assert item['to_user']['id'] == owner_id
        assert item['skill']['title'] == 'Guitar Lessons'

        explicit = client.get('/api/v1/requests?type=incoming', headers=owner)
        assert [i['id'] for i in explicit.json()] == [request_id]
        assert client.get('/api/v1/requests?type=outgoing', headers=owner).json() == []

        outgoing = client.get('/api/v1/requests?type=outgoing', headers=requester)
        assert [i['id'] for i in outgoing.json()] == [request_id]
        assert client.get('/api/v1/requests', headers=requester).json() == []


def test_failed_permission_grant_leaves_request_pending(monkeypatch):
    init_db(drop_all=True)

    def fail_grant(*args, **kwargs):
        raise RuntimeError('permission store unavailable')

    with TestClient(app, raise_server_exceptions=False) as client:
        owner, _ = _login(client, 'Bob')
        requester, requester_id = _login(client, 'Alice')
        skill_id = _upload(client, owner)
        request_id = client.post(f"/api/v1/requests/{skill_id}", headers=requester).json()['id']

        monkeypatch.setattr(request_service, 'add_permission', fail_grant)
        failed = client.post(f"/api/v1/requests/{request_id}/accept", headers=owner)
        assert failed.status_code == 500
        assert failed.json() == {'detail': 'Internal server error'}

        incoming = client.get('/api/v1/requests', headers=owner).json()
        assert [item['status'] for item in incoming] == ['pending']
        assert _permission_count(requester_id, skill_id) == 0
        assert client.get(f"/api/v1/stream/{skill_id}", headers=requester).status_code == 403

        monkeypatch.undo()
        accepted = client.post(f"/api/v1/requests/{request_id}/accept", headers=owner)
        assert accepted.status_code == 200
        assert _permission_count(requester_id, skill_id) == 1
        assert client.get(f"/api/v1/stream/{skill_id}", headers=requester).status_code == 200


def test_racing_duplicate_request_maps_to_conflict(monkeypatch):
    if db_session.engine.dialect.name not in ('sqlite', 'postgresql'):
        pytest.skip('partial indexes are not available on this backend')
    init_db(drop_all=True)
    with TestClient(app) as client:
        owner, _ = _login(client, 'Bob')
        requester, _ = _login(client, 'Alice')
        skill_id = _upload(client, owner)
        assert client.post(f"/api/v1/requests/{skill_id}", headers=requester).status_code == 200

        # Both creates pass the lookup, as when they run concurrently.
        monkeypatch.setattr(request_service, 'get_pending_request', lambda *args: None)
        duplicate = client.post(f"/api/v1/requests/{skill_id}", headers=requester)
        assert duplicate.status_code == 409
        assert duplicate.json()['detail'] == 'Request already pending'


def test_pending_pair_is_unique_in_the_database():
    init_db(drop_all=True)
    with Session(db_session.engine) as session:
        if session.get_bind().dialect.name not in ('sqlite', 'postgresql'):
            pytest.skip('partial indexes are not available on this backend')
        session.add(AccessRequest(from_id='u1', to_id='u2', skill_id='s1', status=RequestStatus.DECLINED))
        session.add(AccessRequest(from_id='u1', to_id='u2', skill_id='s1'))
        session.commit()
        session.add(AccessRequest(from_id='u1', to_id='u2', skill_id='s1'))
        with pytest.raises(IntegrityError):
            session.commit()
