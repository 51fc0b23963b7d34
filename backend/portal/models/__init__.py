# User registry
from .user import User

# Audit log
from .certificate_action import CertificateAction

__all__ = [
    "User",
    "CertificateAction",
]
