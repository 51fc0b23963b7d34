import base64
import plistlib
import uuid
from typing import Optional

from portal.schemas.installer import AndroidInstructions, MobileConfigOptions, WindowsInstallerOptions
from portal.utils.logger import artifact_logger

ROOT_PAYLOAD_TYPE = "com.apple.security.root"

ANDROID_SECURITY_SETTINGS_URL = "intent://settings/#Intent;action=android.settings.SECURITY_SETTINGS;end"
ANDROID_WIFI_SETTINGS_URL = "intent://settings/#Intent;action=android.settings.WIFI_SETTINGS;end"
ANDROID_STEPS = [
    "Download certificate automatically starting...",
    "Open Downloads folder or notification",
    "Tap the certificate file",
    'Name it "Fortinet CA" and select "VPN and apps"',
    "Tap OK to install",
]

WINDOWS_INSTALLER_TEMPLATE = """# Fortinet CA Certificate Auto-Installer
# This script automatically installs the Fortinet CA certificate into the Windows certificate store

Write-Host "Installing Fortinet CA Certificate..." -ForegroundColor Green

try {{
    # Certificate data (Base64 encoded)
    $certData = @"
{cert_base64}
"@

    # Convert to certificate object
    $certBytes = [Convert]::FromBase64String($certData)
    $cert = New-Object System.Security.Cryptography.X509Certificates.X509Certificate2(,$certBytes)

    # Open certificate store
    $store = New-Object System.Security.Cryptography.X509Certificates.X509Store("{store_name}", "{store_location}")
    $store.Open("ReadWrite")

    # Add certificate to store
    $store.Add($cert)
    $store.Close()

    Write-Host "Certificate installed successfully!" -ForegroundColor Green
    Write-Host "Subject: " $cert.Subject -ForegroundColor Yellow
    Write-Host "Issuer: " $cert.Issuer -ForegroundColor Yellow
    Write-Host "Thumbprint: " $cert.Thumbprint -ForegroundColor Yellow

    # Pause to show result
    Write-Host ""
    Write-Host "Press any key to continue..." -ForegroundColor Cyan
    $null = $Host.UI.RawUI.ReadKey("NoEcho,IncludeKeyDown")

}} catch {{
    Write-Host "Error installing certificate: $_" -ForegroundColor Red
    Write-Host "Please run PowerShell as Administrator and try again." -ForegroundColor Yellow

    # Pause to show error
    Write-Host ""
    Write-Host "Press any key to continue..." -ForegroundColor Cyan
    $null = $Host.UI.RawUI.ReadKey("NoEcho,IncludeKeyDown")
}}
"""


def generate_payload_uuid() -> str:
    """Apple 설치기는 재사용된 PayloadUUID를 '이미 설치됨'으로 처리하므로 매번 새로 만든다."""
    return str(uuid.uuid4()).upper()


def build_certificate_payload(certificate: bytes, options: MobileConfigOptions) -> dict:
    return {
        "PayloadCertificateFileName": options.certificate_filename,
        "PayloadContent": certificate,
        "PayloadDescription": options.description,
        "PayloadDisplayName": options.display_name,
        "PayloadIdentifier": f"{options.identifier}.certificate",
        "PayloadType": ROOT_PAYLOAD_TYPE,
        "PayloadUUID": generate_payload_uuid(),
        "PayloadVersion": options.version,
    }


def build_mobile_config(certificate: bytes, options: Optional[MobileConfigOptions] = None) -> bytes:
    """루트 인증서 한 개를 담은 .mobileconfig (XML plist) 문서를 생성합니다."""
    options = options or MobileConfigOptions()
    profile = {
        "PayloadContent": [build_certificate_payload(certificate, options)],
        "PayloadDescription": options.description,
        "PayloadDisplayName": options.display_name,
        "PayloadIdentifier": options.identifier,
        "PayloadRemovalDisallowed": False,
        "PayloadType": "Configuration",
        "PayloadUUID": generate_payload_uuid(),
        "PayloadVersion": options.version,
        "PayloadOrganization": options.organization,
    }
    # bytes 값은 plistlib가 <data> base64로 직렬화
    data = plistlib.dumps(profile, fmt=plistlib.FMT_XML, sort_keys=False)
    artifact_logger.info(f"mobileconfig 생성 완료: {options.identifier} ({len(data)} bytes)")
    return data


def build_windows_installer(certificate: bytes, options: Optional[WindowsInstallerOptions] = None) -> str:
    """인증서를 Windows 인증서 저장소에 추가하는 PowerShell 스크립트를 생성합니다."""
    options = options or WindowsInstallerOptions()
    cert_base64 = base64.b64encode(certificate).decode("ascii")
    return WINDOWS_INSTALLER_TEMPLATE.format(
        cert_base64=cert_base64,
        store_name=options.store_name,
        store_location=options.store_location,
    )


def strip_scheme(url: str) -> str:
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            return url[len(scheme):]
    return url


def build_android_instructions(certificate_url: str) -> AndroidInstructions:
    """인증서 URL로 Android intent 링크와 설치 단계를 만듭니다."""
    target = strip_scheme(certificate_url)
    return AndroidInstructions(
        directInstallUrl=(
            f"intent://{target}#Intent;scheme=https;"
            "action=android.intent.action.VIEW;"
            "category=android.intent.category.BROWSABLE;end"
        ),
        settingsUrl=ANDROID_SECURITY_SETTINGS_URL,
        wifiSettingsUrl=ANDROID_WIFI_SETTINGS_URL,
        steps=list(ANDROID_STEPS),
    )
