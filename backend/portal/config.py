import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    # 서버 설정
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # 로깅 설정 (LOG_FILE이 비어 있으면 콘솔만 사용)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # 세션 설정 (30분 비활성 만료)
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "cert-portal-secret-key")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", str(30 * 60)))

    # 설치 완료 후 이동할 기본 주소
    COMPANY_WEBSITE: str = os.getenv("COMPANY_WEBSITE", "https://www.unam.edu.na/")

    # SQLite 설정 (사용자 + 감사 로그)
    SQLALCHEMY_DATABASE_URI: str = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///./database.db")

    # 인증서 파일 위치
    CERTIFICATE_DIR: str = os.getenv("CERTIFICATE_DIR", "certificates")
    CERTIFICATE_FILENAME: str = os.getenv("CERTIFICATE_FILENAME", "Fortinet_CA_SSL.cer")

    # 프로파일 메타데이터
    PROFILE_DISPLAY_NAME: str = os.getenv("PROFILE_DISPLAY_NAME", "UNAM Network Certificate")
    PROFILE_DESCRIPTION: str = os.getenv(
        "PROFILE_DESCRIPTION",
        "Required security certificate for University of Namibia network access"
    )
    PROFILE_ORGANIZATION: str = os.getenv("PROFILE_ORGANIZATION", "University of Namibia")
    PROFILE_IDENTIFIER: str = os.getenv("PROFILE_IDENTIFIER", "na.edu.unam.fortinet-ca")
    PROFILE_FILENAME: str = os.getenv("PROFILE_FILENAME", "UNAM-Certificate.mobileconfig")
    WINDOWS_SCRIPT_FILENAME: str = os.getenv("WINDOWS_SCRIPT_FILENAME", "Install-UNAM-Certificate.ps1")

    # 관리자 인증 설정
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "change-me")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "SUPERSECRETKEY")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

settings = Settings()
