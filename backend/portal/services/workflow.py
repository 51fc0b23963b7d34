import time
from typing import Callable, MutableMapping, Optional

from portal.services.device_classifier import DeviceType, classify
from portal.services.user_store import UserStore
from portal.utils.exceptions import AccessDeniedError
from portal.utils.logger import workflow_logger

# 감사 로그 액션 이름
CERTIFICATE_ACCEPTED = "certificate_accepted"
CERTIFICATE_DOWNLOADED = "certificate_downloaded"
IOS_PROFILE_DOWNLOADED = "ios_profile_downloaded"
WINDOWS_SCRIPT_DOWNLOADED = "windows_script_downloaded"
ANDROID_INSTALL_STARTED = "android_install_started"
CERTIFICATE_INSTALLED = "certificate_installed"
REDIRECTED_TO_COMPANY = "redirected_to_company"

ARTIFACT_ACTIONS = (
    CERTIFICATE_DOWNLOADED,
    IOS_PROFILE_DOWNLOADED,
    WINDOWS_SCRIPT_DOWNLOADED,
    ANDROID_INSTALL_STARTED,
)


class SessionAccessor:
    """브라우저 세션(dict 형태)에 저장되는 포털 상태 접근자"""

    USER_ID = "userId"
    ACCEPTED = "certificateAccepted"
    REDIRECT_URL = "redirectUrl"

    def __init__(self, session: MutableMapping, on_clear: Optional[Callable[[], None]] = None):
        self._session = session
        self._on_clear = on_clear

    @property
    def user_id(self) -> Optional[int]:
        return self._session.get(self.USER_ID)

    @property
    def certificate_accepted(self) -> bool:
        return bool(self._session.get(self.ACCEPTED, False))

    @property
    def redirect_url(self) -> Optional[str]:
        return self._session.get(self.REDIRECT_URL)

    @redirect_url.setter
    def redirect_url(self, value: str) -> None:
        self._session[self.REDIRECT_URL] = value

    def bind(self, user_id: int) -> None:
        self._session[self.USER_ID] = user_id
        self._session[self.ACCEPTED] = True

    def clear(self) -> None:
        self._session.clear()
        # 서버 측 세션 항목까지 폐기
        if self._on_clear is not None:
            self._on_clear()


def default_username() -> str:
    return f"user_{int(time.time() * 1000)}"


def resolve_download_device(user_agent: Optional[str], hint: Optional[str] = None) -> str:
    """서버에서 판별한 기기 유형을 우선하고, 판별 불가일 때만 클라이언트 값을 사용합니다."""
    device = classify(user_agent)
    if device is DeviceType.UNKNOWN and hint:
        return hint
    return device.value


class CertificateWorkflow:
    """방문 → 수락 → 설치 파일 발급 → 설치 확인 → 리다이렉트 흐름

    수락을 제외한 모든 전이는 세션에 사용자가 바인딩되어 있어야 하며,
    없으면 AccessDeniedError를 던진다.
    """

    def __init__(self, store: UserStore, session: SessionAccessor, fallback_url: str):
        self.store = store
        self.session = session
        self.fallback_url = fallback_url

    def capture_redirect(self, url: Optional[str]) -> Optional[str]:
        if url:
            self.session.redirect_url = url
        return self.session.redirect_url

    def resolve_redirect_url(self) -> str:
        return self.session.redirect_url or self.fallback_url

    def require_user(self) -> int:
        user_id = self.session.user_id
        if not user_id:
            raise AccessDeniedError("Access denied. Please accept the certificate first.")
        return user_id

    def accept(self, username: Optional[str], ip_address: str, user_agent: str) -> int:
        username = username or default_username()
        device_type = classify(user_agent).value
        workflow_logger.info(f"인증서 수락 요청: ip={ip_address}, username={username}, device={device_type}")

        # StorageError는 호출자에게 그대로 전달 (500)
        user_id = self.store.upsert_trusted_user(username, ip_address, user_agent)
        self.store.log_action(user_id, CERTIFICATE_ACCEPTED, device_type, ip_address)
        self.session.bind(user_id)
        return user_id

    def issue_artifact(self, action: str, device_type: str, ip_address: str) -> int:
        if action not in ARTIFACT_ACTIONS:
            raise ValueError(f"Unknown artifact action: {action}")
        user_id = self.require_user()
        self.store.log_action(user_id, action, device_type, ip_address)
        workflow_logger.info(f"설치 파일 발급: user_id={user_id}, action={action}, device={device_type}")
        return user_id

    def confirm_install(self, ip_address: str, user_agent: str) -> str:
        user_id = self.require_user()
        self.store.log_action(user_id, CERTIFICATE_INSTALLED, classify(user_agent).value, ip_address)
        self.store.mark_redirect_completed(user_id)
        workflow_logger.info(f"인증서 설치 확인: user_id={user_id}")
        return self.resolve_redirect_url()

    def redirect(self, ip_address: str) -> str:
        user_id = self.require_user()
        redirect_url = self.resolve_redirect_url()
        self.store.log_action(user_id, REDIRECTED_TO_COMPANY, "web", ip_address)
        # 종료 상태: 세션 폐기 후에는 다시 수락해야 한다
        self.session.clear()
        workflow_logger.info(f"리다이렉트 완료: user_id={user_id} → {redirect_url}")
        return redirect_url
