from datetime import timedelta
from typing import List
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.orm import Session
from portal.config import settings
from portal.core.security import create_access_token, verify_admin_credentials
from portal.database import get_db
from portal.schemas.certificate_action import CertificateActionResponse, UploadCertificateResponse, UserStatsResponse
from portal.services.certificate_store import CertificateStore, get_certificate_store
from portal.services.statistics_service import StatisticsService
from portal.utils.dependencies import get_current_admin
from portal.utils.exceptions import BadRequestException, UnauthorizedException
from portal.utils.logger import admin_logger

router = APIRouter(prefix="/admin", tags=["admin"])


# 토큰 응답 모델
class TokenResponse(BaseModel):
    access_token: str
    token_type: str


@router.post(
    "/token",
    summary="관리자 로그인",
    description="관리자 username과 password를 받아 JWT를 발급합니다.",
    response_model=TokenResponse,
)
def login_admin(form_data: OAuth2PasswordRequestForm = Depends()) -> TokenResponse:
    if not verify_admin_credentials(form_data.username, form_data.password):
        admin_logger.warning(f"관리자 로그인 실패: {form_data.username}")
        raise UnauthorizedException("Incorrect username or password")
    access_token = create_access_token(
        {"sub": form_data.username, "scope": "admin"},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get(
    "/stats",
    response_model=List[UserStatsResponse],
    summary="사용자별 통계",
    description="사용자별 액션 수, 사용 기기, 액션 종류를 최신 가입 순으로 조회합니다."
)
def get_stats(db: Session = Depends(get_db), admin: str = Depends(get_current_admin)):
    try:
        stats = StatisticsService.get_user_stats(db)
        admin_logger.info(f"사용자 통계 조회 완료: {len(stats)}건")
        return stats
    except Exception as e:
        admin_logger.error(f"사용자 통계 조회 실패: {str(e)}")
        raise HTTPException(status_code=500, detail="Database error")


@router.get(
    "/actions",
    response_model=List[CertificateActionResponse],
    summary="최근 감사 로그",
    description="최근 인증서 관련 액션을 최대 limit건 조회합니다."
)
def get_actions(
    limit: int = Query(100, ge=1, le=1000, description="최대 반환 개수"),
    db: Session = Depends(get_db),
    admin: str = Depends(get_current_admin)
):
    try:
        actions = StatisticsService.get_recent_actions(db, limit=limit)
        admin_logger.info(f"감사 로그 조회 완료: {len(actions)}건")
        return actions
    except Exception as e:
        admin_logger.error(f"감사 로그 조회 실패: {str(e)}")
        raise HTTPException(status_code=500, detail="Database error")


@router.post(
    "/upload-cert",
    response_model=UploadCertificateResponse,
    summary="루트 인증서 업로드",
    description="업로드한 파일로 기존 인증서를 교체합니다. (버전 관리 없음)"
)
def upload_certificate(
    certificate: UploadFile = File(..., description="인증서 파일 (.cer/.crt)"),
    cert_store: CertificateStore = Depends(get_certificate_store),
    admin: str = Depends(get_current_admin)
):
    try:
        size = cert_store.save(certificate.file)
    except ValueError as e:
        raise BadRequestException(str(e))
    finally:
        certificate.file.close()
    admin_logger.info(f"인증서 업로드 완료: {certificate.filename} → {cert_store.path} ({size} bytes)")
    return UploadCertificateResponse(success=True, message="Certificate uploaded successfully")
