from pydantic import BaseModel, Field
from typing import Optional

# 인증서 수락 요청 (사용자명은 선택)
class AcceptCertificateRequest(BaseModel):
    username: Optional[str] = Field(None, description="사용자명 (없으면 시간 기반 기본값)")

# 인증서 수락 응답
class AcceptCertificateResponse(BaseModel):
    success: bool = True
    userId: int

# 설치 완료 응답
class CertificateInstalledResponse(BaseModel):
    success: bool = True
    redirectUrl: str

