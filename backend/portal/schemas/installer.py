from pydantic import BaseModel, Field
from typing import List

# iOS/macOS 구성 프로파일 옵션
class MobileConfigOptions(BaseModel):
    display_name: str = Field("Fortinet CA SSL Certificate", description="프로파일 표시 이름")
    description: str = Field("Security certificate required for network access", description="프로파일 설명")
    organization: str = Field("University of Namibia", description="발급 조직")
    identifier: str = Field("na.edu.unam.fortinet-ca", description="역DNS 형식 식별자")
    version: int = Field(1, description="PayloadVersion")
    certificate_filename: str = Field("Fortinet_CA_SSL.cer", description="PayloadCertificateFileName")

# Windows PowerShell 설치 스크립트 옵션
class WindowsInstallerOptions(BaseModel):
    store_name: str = Field("Root", description="인증서 저장소 이름")
    store_location: str = Field("LocalMachine", description="인증서 저장소 위치")

# Android 설치 안내
class AndroidInstructions(BaseModel):
    directInstallUrl: str
    settingsUrl: str
    wifiSettingsUrl: str
    steps: List[str]
