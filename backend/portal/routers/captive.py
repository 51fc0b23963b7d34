from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import FileResponse, RedirectResponse
from portal.config import settings
from portal.core.templates import templates
from portal.schemas.user import AcceptCertificateResponse, CertificateInstalledResponse
from portal.services.certificate_store import CertificateStore, get_certificate_store
from portal.services.device_classifier import DeviceType, classify
from portal.services.workflow import CERTIFICATE_DOWNLOADED, CertificateWorkflow, resolve_download_device
from portal.utils.dependencies import get_accept_username, get_client_ip, get_user_agent, get_workflow
from portal.utils.exceptions import (
    AccessDeniedError,
    ForbiddenException,
    NotFoundException,
    StorageError,
    to_http_exception,
)
from portal.utils.logger import app_logger

router = APIRouter(tags=["portal"])

INSTRUCTION_PAGES = ("windows", "macos", "ios", "android")

# 기기별 자동 설치 경로 (macOS도 구성 프로파일로 설치 가능)
AUTO_INSTALL_ROUTES = {
    DeviceType.IOS: "/install-ios",
    DeviceType.MACOS: "/install-ios",
    DeviceType.ANDROID: "/install-android",
    DeviceType.WINDOWS: "/install-windows",
}


@router.get("/", summary="캡티브 포털 첫 화면")
def landing_page(
    request: Request,
    redirect: Optional[str] = Query(None, description="설치 후 이동할 주소"),
    url: Optional[str] = Query(None, description="redirect 별칭"),
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    device_type = classify(get_user_agent(request))
    redirect_url = workflow.capture_redirect(redirect or url)
    return templates.TemplateResponse(
        request,
        "captive_portal.html",
        {
            "device_type": device_type.value,
            "client_ip": get_client_ip(request),
            "redirect_url": redirect_url,
            "company_website": settings.COMPANY_WEBSITE,
            "certificate_accepted": workflow.session.certificate_accepted,
        },
    )


@router.post(
    "/accept-certificate",
    response_model=AcceptCertificateResponse,
    summary="인증서 신뢰 수락",
    description="사용자를 신뢰 상태로 등록하고 세션에 바인딩합니다."
)
def accept_certificate(
    request: Request,
    username: Optional[str] = Depends(get_accept_username),
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        user_id = workflow.accept(username, get_client_ip(request), get_user_agent(request))
    except StorageError as e:
        app_logger.error(f"인증서 수락 처리 실패: {str(e)}")
        raise to_http_exception(e)
    return AcceptCertificateResponse(success=True, userId=user_id)


@router.get("/download-certificate", summary="인증서 파일 다운로드")
def download_certificate(
    request: Request,
    device: Optional[str] = Query(None, description="기기 유형 힌트"),
    workflow: CertificateWorkflow = Depends(get_workflow),
    cert_store: CertificateStore = Depends(get_certificate_store),
):
    try:
        workflow.require_user()
    except AccessDeniedError as e:
        raise to_http_exception(e)

    if not cert_store.exists():
        raise NotFoundException("Certificate", "Certificate not found")

    device_type = resolve_download_device(get_user_agent(request), device)
    workflow.issue_artifact(CERTIFICATE_DOWNLOADED, device_type, get_client_ip(request))
    return FileResponse(
        cert_store.path,
        media_type="application/x-x509-ca-cert",
        filename=cert_store.filename,
    )


@router.get("/auto-install", summary="기기에 맞는 설치 방식으로 이동")
def auto_install(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        workflow.require_user()
    except AccessDeniedError as e:
        raise to_http_exception(e)

    device_type = classify(get_user_agent(request))
    target = AUTO_INSTALL_ROUTES.get(device_type, f"/download-certificate?device={device_type.value}")
    return RedirectResponse(target, status_code=302)


@router.get("/instructions/{os_name}", summary="OS별 수동 설치 안내")
def instructions(
    request: Request,
    os_name: str,
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        user_id = workflow.require_user()
    except AccessDeniedError:
        return RedirectResponse("/", status_code=302)

    if os_name not in INSTRUCTION_PAGES:
        raise NotFoundException("Instructions", "Instructions not found")

    return templates.TemplateResponse(
        request,
        f"instructions/{os_name}.html",
        {
            "user_id": user_id,
            "company_website": settings.COMPANY_WEBSITE,
            "redirect_url": workflow.session.redirect_url,
        },
    )


@router.post(
    "/certificate-installed",
    response_model=CertificateInstalledResponse,
    summary="설치 완료 확인"
)
def certificate_installed(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        redirect_url = workflow.confirm_install(get_client_ip(request), get_user_agent(request))
    except AccessDeniedError:
        raise ForbiddenException("Access denied")
    return CertificateInstalledResponse(success=True, redirectUrl=redirect_url)


@router.get("/redirect", summary="최종 목적지로 이동 (세션 종료)")
def redirect_to_company(
    request: Request,
    workflow: CertificateWorkflow = Depends(get_workflow),
):
    try:
        redirect_url = workflow.redirect(get_client_ip(request))
    except AccessDeniedError:
        return RedirectResponse("/", status_code=302)
    return RedirectResponse(redirect_url, status_code=302)
