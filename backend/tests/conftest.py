import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.database import Base, get_db
from portal import models  # noqa: F401
from portal.main import app
from portal.config import settings
from portal.services.certificate_store import CertificateStore, get_certificate_store
from portal.services.session_store import SessionStore, get_session_store

# DER 인증서 대신 쓰는 임의 바이트 (검증하지 않으므로 내용은 무관)
CERT_BYTES = b"0\x82\x03\x1a0\x82\x02\x02\xa0\x03\x02\x01\x02fake-root-ca\x00\xff"

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
MAC_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15"
ANDROID_UA = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/120.0 Mobile"
WINDOWS_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/120.0"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def cert_store(tmp_path):
    store = CertificateStore(str(tmp_path / "certificates"), settings.CERTIFICATE_FILENAME)
    store.directory.mkdir(parents=True)
    store.path.write_bytes(CERT_BYTES)
    return store


@pytest.fixture
def empty_cert_store(tmp_path):
    return CertificateStore(str(tmp_path / "empty"), settings.CERTIFICATE_FILENAME)


@pytest.fixture
def session_store():
    return SessionStore(settings.SESSION_MAX_AGE)


@pytest.fixture
def client(engine, cert_store, session_store):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_certificate_store] = lambda: cert_store
    app.dependency_overrides[get_session_store] = lambda: session_store
    # lifespan(파일 DB 생성)을 실행하지 않도록 컨텍스트 매니저 없이 사용
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def accepted_client(client):
    response = client.post("/accept-certificate", json={"username": "alice"})
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/admin/token",
        data={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
