import sys
from typing import Optional
from dotenv import load_dotenv

# 환경변수 로드
load_dotenv()
from portal.database import Base, engine
from portal import models  # noqa: F401
from portal.services.certificate_store import CertificateStore, get_certificate_store

def create_tables():
    Base.metadata.create_all(bind=engine)
    print("데이터베이스 테이블 생성 완료")

def import_certificate(source_path: str, cert_store: CertificateStore) -> int:
    with open(source_path, "rb") as f:
        size = cert_store.save(f)
    print(f"인증서 가져오기 완료: {source_path} → {cert_store.path} ({size} bytes)")
    return size

def main(argv: Optional[list] = None):
    argv = sys.argv[1:] if argv is None else argv
    create_tables()
    # 인자로 인증서 경로가 주어지면 고정 위치로 복사
    if argv:
        import_certificate(argv[0], get_certificate_store())

if __name__ == "__main__":
    main()
