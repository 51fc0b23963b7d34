import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from portal.config import settings

# 관리자 자격 증명 검증 (타이밍 공격 방지를 위해 compare_digest 사용)
def verify_admin_credentials(username: str, password: str) -> bool:
    username_ok = secrets.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    return username_ok and password_ok

# 액세스 토큰 생성
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt
