from fastapi import APIRouter, Depends, Request, Response
from portal.config import settings
from portal.core.templates import templates
from portal.schemas.installer import MobileConfigOptions, WindowsInstallerOptions
from portal.services.artifact_generator import (
    build_android_instructions,
    build_mobile_config,
    build_windows_installer,
)
from portal.services.certificate_store import CertificateStore, get_certificate_store
from portal.services.workflow import (
    ANDROID_INSTALL_STARTED,
    IOS_PROFILE_DOWNLOADED,
    WINDOWS_SCRIPT_DOWNLOADED,
    CertificateWorkflow,
)
from portal.utils.dependencies import get_client_ip, get_workflow
from portal.utils.exceptions import (
    AccessDeniedError,
    CertificateNotFoundError,
    InternalServerException,
    to_http_exception,
)
from portal.utils.logger import artifact_logger

router = APIRouter(tags=["install"])


def mobile_config_options(cert_store: CertificateStore) -> MobileConfigOptions:
    return MobileConfigOptions(
        display_name=settings.PROFILE_DISPLAY_NAME,
        description=settings.PROFILE_DESCRIPTION,
        organization=settings.PROFILE_ORGANIZATION,
        identifier=settings.PROFILE_IDENTIFIER,
        certificate_filename=cert_store.filename,
    )


def read_certificate(cert_store: CertificateStore, failure_message: str) -> bytes:
    try:
        return cert_store.read()
    except CertificateNotFoundError as e:
        raise to_http_exception(e)
    except OSError as e:
        artifact_logger.error(f"인증서 읽기 실패: {cert_store.path} ({str(e)})")
        raise InternalServerException(failure_message)


@router.get("/install-ios", summary="iOS/macOS 구성 프로파일 다운로드")
def install_ios(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
    cert_store: CertificateStore = Depends(get_certificate_store),
):
    try:
        workflow.require_user()
    except AccessDeniedError as e:
        raise to_http_exception(e)

    certificate = read_certificate(cert_store, "Error generating installation profile")
    try:
        mobile_config = build_mobile_config(certificate, mobile_config_options(cert_store))
    except Exception as e:
        artifact_logger.error(f"mobileconfig 생성 실패: {str(e)}")
        raise InternalServerException("Error generating installation profile")

    workflow.issue_artifact(IOS_PROFILE_DOWNLOADED, "ios", get_client_ip(request))
    return Response(
        content=mobile_config,
        media_type="application/x-apple-aspen-config",
        headers={"Content-Disposition": f'attachment; filename="{settings.PROFILE_FILENAME}"'},
    )


@router.get("/install-windows", summary="Windows PowerShell 설치 스크립트 다운로드")
def install_windows(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
    cert_store: CertificateStore = Depends(get_certificate_store),
):
    try:
        workflow.require_user()
    except AccessDeniedError as e:
        raise to_http_exception(e)

    certificate = read_certificate(cert_store, "Error generating installation script")
    try:
        script = build_windows_installer(certificate, WindowsInstallerOptions())
    except Exception as e:
        artifact_logger.error(f"PowerShell 스크립트 생성 실패: {str(e)}")
        raise InternalServerException("Error generating installation script")

    workflow.issue_artifact(WINDOWS_SCRIPT_DOWNLOADED, "windows", get_client_ip(request))
    return Response(
        content=script,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{settings.WINDOWS_SCRIPT_FILENAME}"'},
    )


@router.get("/install-android", summary="Android 설치 안내")
def install_android(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        user_id = workflow.require_user()
    except AccessDeniedError as e:
        raise to_http_exception(e)

    certificate_url = f"{request.url_for('download_certificate')}?device=android"
    instructions = build_android_instructions(certificate_url)

    workflow.issue_artifact(ANDROID_INSTALL_STARTED, "android", get_client_ip(request))
    return templates.TemplateResponse(
        request,
        "android_seamless.html",
        {
            "user_id": user_id,
            "instructions": instructions,
            "certificate_url": certificate_url,
            "company_website": settings.COMPANY_WEBSITE,
        },
    )
