from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session
from portal.database import get_db
from portal.config import settings
from portal.schemas.user import AcceptCertificateRequest
from portal.services.user_store import UserStore
from portal.services.session_store import SessionStore, get_session_store
from portal.services.workflow import CertificateWorkflow, SessionAccessor
from portal.utils.exceptions import BadRequestException

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/admin/token")

def get_client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"

def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "")

SESSION_ID_KEY = "sid"

# 쿠키에는 세션 ID만 두고 상태는 서버 저장소에서 찾는다
def get_session_accessor(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> SessionAccessor:
    session_id = request.session.get(SESSION_ID_KEY)
    data = store.get(session_id)
    if data is None:
        session_id, data = store.create()
        request.session[SESSION_ID_KEY] = session_id

    def destroy():
        store.destroy(session_id)
        request.session.clear()

    return SessionAccessor(data, on_clear=destroy)

def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)

# 요청마다 저장소와 세션 접근자를 주입한 워크플로 생성
def get_workflow(
    store: UserStore = Depends(get_user_store),
    session: SessionAccessor = Depends(get_session_accessor),
) -> CertificateWorkflow:
    return CertificateWorkflow(store, session, settings.COMPANY_WEBSITE)

# JWT 토큰에서 관리자 확인
def get_current_admin(token: str = Depends(oauth2_scheme)) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        subject = payload.get("sub")
        if subject is None or payload.get("scope") != "admin":
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    if subject != settings.ADMIN_USERNAME:
        raise credentials_exception
    return subject

# 수락 요청의 사용자명: JSON 본문과 HTML 폼 전송 모두 허용
async def get_accept_username(request: Request) -> Optional[str]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        username = form.get("username")
        data = AcceptCertificateRequest(username=username if isinstance(username, str) else None)
    else:
        body = await request.body()
        if not body.strip():
            return None
        try:
            data = AcceptCertificateRequest.model_validate_json(body)
        except ValidationError:
            raise BadRequestException("Invalid request body")
    return data.username or None
