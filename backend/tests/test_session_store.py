import pytest

from portal.services import session_store as session_store_module
from portal.services.session_store import SessionStore
from portal.services.workflow import SessionAccessor


@pytest.fixture
def clock(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(session_store_module.time, "monotonic", lambda: now[0])
    return now


def test_create_and_get_share_state():
    store = SessionStore(max_age=60)
    session_id, data = store.create()
    data["userId"] = 7
    assert store.get(session_id) == {"userId": 7}
    assert store.get("unknown") is None
    assert store.get(None) is None


def test_destroy_removes_session():
    store = SessionStore(max_age=60)
    session_id, _ = store.create()
    store.destroy(session_id)
    assert store.get(session_id) is None
    assert len(store) == 0
    store.destroy(session_id)


def test_inactive_session_expires(clock):
    store = SessionStore(max_age=60)
    session_id, _ = store.create()

    clock[0] += 59
    assert store.get(session_id) == {}
    # 접근할 때마다 만료 시간이 연장된다
    clock[0] += 59
    assert store.get(session_id) == {}
    clock[0] += 61
    assert store.get(session_id) is None


def test_create_purges_expired_sessions(clock):
    store = SessionStore(max_age=60)
    store.create()
    clock[0] += 120
    store.create()
    assert len(store) == 1


def test_accessor_clear_destroys_server_entry():
    store = SessionStore(max_age=60)
    session_id, data = store.create()
    accessor = SessionAccessor(data, on_clear=lambda: store.destroy(session_id))
    accessor.bind(3)
    assert accessor.user_id == 3
    assert accessor.certificate_accepted is True

    accessor.clear()
    assert data == {}
    assert store.get(session_id) is None
