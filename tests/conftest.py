import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_supabase, get_service_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache
from tests.fakes import FakeSupabase


@pytest.fixture
def supabase():
    clear_auth_cache()
    yield FakeSupabase()
    clear_auth_cache()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _caller(supabase, role, phone, full_name):
    user_id = supabase.seed_account(role, phone, full_name)
    return {"id": user_id, "role": role, "token": supabase.issue_token(user_id)}


@pytest.fixture
def admin(supabase):
    return _caller(supabase, "admin", "6281100000001", "Ayu Admin")


@pytest.fixture
def volunteer(supabase):
    return _caller(supabase, "volunteer", "6281100000002", "Vera Volunteer")


@pytest.fixture
def participant(supabase):
    return _caller(supabase, "participant", "6281100000003", "Putri Participant")
