# User related schemas
from .user import AcceptCertificateRequest, AcceptCertificateResponse, CertificateInstalledResponse

# Audit / admin schemas
from .certificate_action import CertificateActionResponse, UserStatsResponse, UploadCertificateResponse

# Installer schemas
from .installer import MobileConfigOptions, WindowsInstallerOptions, AndroidInstructions

__all__ = [
    # User related
    "AcceptCertificateRequest", "AcceptCertificateResponse", "CertificateInstalledResponse",
    # Audit / admin
    "CertificateActionResponse", "UserStatsResponse", "UploadCertificateResponse",
    # Installer
    "MobileConfigOptions", "WindowsInstallerOptions", "AndroidInstructions",
]
