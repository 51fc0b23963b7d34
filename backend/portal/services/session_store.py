import secrets
import threading
import time
from typing import Dict, Optional, Tuple

from portal.config import settings
from portal.utils.logger import workflow_logger


class SessionStore:
    """프로세스 메모리에 보관하는 세션 저장소

    쿠키에는 서명된 세션 ID만 담기고 실제 상태는 여기 있으므로,
    destroy() 이후에는 예전 쿠키를 다시 보내도 빈 세션으로 취급된다.
    마지막 접근 후 max_age 초가 지나면 만료된다.
    """

    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: Dict[str, Tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def _purge_expired(self, now: float) -> None:
        expired = [sid for sid, (seen, _) in self._sessions.items() if now - seen > self.max_age]
        for sid in expired:
            del self._sessions[sid]

    def get(self, session_id: Optional[str]) -> Optional[dict]:
        if not session_id:
            return None
        now = time.monotonic()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            seen, data = entry
            if now - seen > self.max_age:
                del self._sessions[session_id]
                return None
            self._sessions[session_id] = (now, data)
            return data

    def create(self) -> Tuple[str, dict]:
        session_id = secrets.token_urlsafe(32)
        data: dict = {}
        now = time.monotonic()
        with self._lock:
            self._purge_expired(now)
            self._sessions[session_id] = (now, data)
        return session_id, data

    def destroy(self, session_id: Optional[str]) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is not None:
                workflow_logger.info("세션 폐기 완료")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


session_store = SessionStore(settings.SESSION_MAX_AGE)


def get_session_store() -> SessionStore:
    return session_store
