"""
Resolvers must keep blocking work (bcrypt, database round-trips) off the
event loop so one slow request never stalls the others.
"""
import asyncio
import time

import bcrypt
import pytest
from httpx import ASGITransport, AsyncClient

from app.database import get_db
from app.main import app
from app.repositories import institutes as institute_repo
from app.services import auth as auth_service

SIGN_IN = """
mutation SignIn($input: SignInInput!) {
  signIn(input: $input) { token }
}
"""


def _on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_password_check_runs_on_worker_thread(gql, make_user, monkeypatch):
    make_user(email="ada@uni.edu", password="secret123")
    seen = []
    original = auth_service.verify_password

    def spy(plain, hashed):
        seen.append(_on_event_loop())
        return original(plain, hashed)

    monkeypatch.setattr(auth_service, "verify_password", spy)

    body = gql(SIGN_IN, {"input": {"email": "ada@uni.edu", "password": "secret123"}})

    assert body["data"]["signIn"]["token"]
    assert seen == [False]


def test_relationship_fields_run_on_worker_thread(gql, student_headers, make_student, monkeypatch):
    student = make_student()
    seen = []
    original = institute_repo.get_by_id

    def spy(db, institute_id):
        seen.append(_on_event_loop())
        return original(db, institute_id)

    monkeypatch.setattr(institute_repo, "get_by_id", spy)

    body = gql('query($id: ID!) { student(id: $id) { institute { id } } }',
               {"id": student.id}, headers=student_headers)

    assert body["data"]["student"]["institute"]["id"] == student.institute_id
    assert seen == [False]


@pytest.fixture
def slow_hash_user(make_user, db_session):
    """A user whose password hash takes a noticeable time to verify"""
    user = make_user(email="slow@uni.edu")
    user.password = bcrypt.hashpw(b"secret123", bcrypt.gensalt(rounds=13)).decode("utf-8")
    db_session.commit()
    return user


@pytest.mark.asyncio
async def test_sign_in_does_not_stall_event_loop(db_session, slow_hash_user):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    gaps = []
    done = asyncio.Event()

    async def heartbeat():
        last = time.perf_counter()
        while not done.is_set():
            await asyncio.sleep(0.01)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            beat = asyncio.create_task(heartbeat())
            started = time.perf_counter()
            response = await ac.post("/graphql", json={
                "query": SIGN_IN,
                "variables": {"input": {"email": "slow@uni.edu", "password": "secret123"}},
            })
            elapsed = time.perf_counter() - started
            done.set()
            await beat
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["data"]["signIn"]["token"]
    # bcrypt at 13 rounds takes far longer than any tolerated gap
    assert elapsed > 0.2
    assert max(gaps) < 0.15
