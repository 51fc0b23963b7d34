from pydantic import BaseModel
from datetime import datetime
from typing import Optional

# 감사 로그 응답용 (사용자명/IP 조인 포함)
class CertificateActionResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    device_type: Optional[str] = None
    timestamp: datetime
    ip_address: Optional[str] = None
    username: Optional[str] = None
    user_ip: Optional[str] = None

    class Config:
        from_attributes = True

# 사용자별 통계 응답용
class UserStatsResponse(BaseModel):
    id: int
    username: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    certificate_trusted: bool
    redirect_completed: bool
    created_at: datetime
    total_actions: int
    devices: Optional[str] = None   # 중복 제거된 기기 유형 (콤마 구분)
    actions: Optional[str] = None   # 중복 제거된 액션 (콤마 구분)

# 인증서 업로드 응답
class UploadCertificateResponse(BaseModel):
    success: bool = True
    message: str
