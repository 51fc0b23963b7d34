import shutil
from pathlib import Path
from typing import BinaryIO

from portal.config import settings
from portal.utils.exceptions import CertificateNotFoundError
from portal.utils.logger import artifact_logger


class CertificateStore:
    """고정 경로에 저장되는 단일 루트 인증서 파일 관리 (업로드 시 덮어쓰기, 버전 관리 없음)"""

    def __init__(self, directory: str, filename: str):
        self.directory = Path(directory)
        self.filename = filename

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> bytes:
        if not self.exists():
            raise CertificateNotFoundError(str(self.path))
        return self.path.read_bytes()

    def save(self, source: BinaryIO) -> int:
        """업로드된 파일로 기존 인증서를 교체하고 저장된 바이트 수를 반환합니다."""
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".upload")
        with open(tmp_path, "wb") as f:
            shutil.copyfileobj(source, f)
        size = tmp_path.stat().st_size
        if size == 0:
            tmp_path.unlink()
            raise ValueError("Uploaded certificate is empty")
        tmp_path.replace(self.path)
        artifact_logger.info(f"인증서 교체 완료: {self.path} ({size} bytes)")
        return size


def get_certificate_store() -> CertificateStore:
    return CertificateStore(settings.CERTIFICATE_DIR, settings.CERTIFICATE_FILENAME)
