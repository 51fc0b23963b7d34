import pytest

from portal.models.certificate_action import CertificateAction
from portal.models.user import User
from portal.services.user_store import UserStore
from portal.services.workflow import (
    ANDROID_INSTALL_STARTED,
    CERTIFICATE_ACCEPTED,
    CERTIFICATE_INSTALLED,
    IOS_PROFILE_DOWNLOADED,
    REDIRECTED_TO_COMPANY,
    CertificateWorkflow,
    SessionAccessor,
    resolve_download_device,
)
from portal.utils.exceptions import AccessDeniedError, StorageError
from conftest import IPHONE_UA, WINDOWS_UA

FALLBACK = "https://www.example.edu/"


@pytest.fixture
def session():
    return {}


@pytest.fixture
def workflow(db_session, session):
    return CertificateWorkflow(UserStore(db_session), SessionAccessor(session), FALLBACK)


def actions(db_session):
    return [a.action for a in db_session.query(CertificateAction).order_by(CertificateAction.id)]


def test_accept_binds_session(workflow, session, db_session):
    user_id = workflow.accept("alice", "10.0.0.5", IPHONE_UA)

    assert session == {"userId": user_id, "certificateAccepted": True}
    assert actions(db_session) == [CERTIFICATE_ACCEPTED]
    action = db_session.query(CertificateAction).one()
    assert action.device_type == "ios"


def test_accept_without_username_uses_default(workflow, db_session):
    user_id = workflow.accept(None, "10.0.0.5", WINDOWS_UA)
    user = db_session.query(User).filter(User.id == user_id).one()
    assert user.username.startswith("user_")
    assert user.username[len("user_"):].isdigit()


def test_accept_twice_updates_same_user(workflow, db_session):
    first = workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    second = workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    assert first == second
    assert db_session.query(User).count() == 1
    assert actions(db_session) == [CERTIFICATE_ACCEPTED, CERTIFICATE_ACCEPTED]


def test_accept_storage_error_propagates(session):
    class BrokenStore:
        def upsert_trusted_user(self, *args):
            raise StorageError("database is locked")

    workflow = CertificateWorkflow(BrokenStore(), SessionAccessor(session), FALLBACK)
    with pytest.raises(StorageError):
        workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    assert session == {}


@pytest.mark.parametrize("call", [
    lambda wf: wf.issue_artifact(IOS_PROFILE_DOWNLOADED, "ios", "10.0.0.5"),
    lambda wf: wf.confirm_install("10.0.0.5", IPHONE_UA),
    lambda wf: wf.redirect("10.0.0.5"),
    lambda wf: wf.require_user(),
])
def test_unbound_session_is_denied(workflow, db_session, call):
    with pytest.raises(AccessDeniedError):
        call(workflow)
    assert actions(db_session) == []


def test_issue_artifact_rejects_unknown_action(workflow):
    workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    with pytest.raises(ValueError):
        workflow.issue_artifact("certificate_accepted", "ios", "10.0.0.5")


def test_full_sequence(workflow, session, db_session):
    user_id = workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    workflow.capture_redirect("https://intranet.example/")
    workflow.issue_artifact(IOS_PROFILE_DOWNLOADED, "ios", "10.0.0.5")

    assert workflow.confirm_install("10.0.0.5", IPHONE_UA) == "https://intranet.example/"
    user = db_session.query(User).filter(User.id == user_id).one()
    assert user.redirect_completed is True

    assert workflow.redirect("10.0.0.5") == "https://intranet.example/"
    assert session == {}
    assert actions(db_session) == [
        CERTIFICATE_ACCEPTED,
        IOS_PROFILE_DOWNLOADED,
        CERTIFICATE_INSTALLED,
        REDIRECTED_TO_COMPANY,
    ]
    redirect_action = db_session.query(CertificateAction).filter(
        CertificateAction.action == REDIRECTED_TO_COMPANY
    ).one()
    assert redirect_action.device_type == "web"

    with pytest.raises(AccessDeniedError):
        workflow.issue_artifact(ANDROID_INSTALL_STARTED, "android", "10.0.0.5")


def test_redirect_falls_back_to_configured_url(workflow):
    workflow.accept("alice", "10.0.0.5", IPHONE_UA)
    assert workflow.redirect("10.0.0.5") == FALLBACK


def test_capture_redirect_keeps_previous_value(workflow):
    workflow.capture_redirect("https://first.example/")
    assert workflow.capture_redirect(None) == "https://first.example/"


def test_resolve_download_device_prefers_server_classification():
    assert resolve_download_device(WINDOWS_UA, "android") == "windows"
    assert resolve_download_device("curl/8.4.0", "android") == "android"
    assert resolve_download_device("curl/8.4.0", None) == "unknown"
