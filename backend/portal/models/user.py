from sqlalchemy import Column, Integer, String, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portal.database.sqlite import Base

class User(Base):
    __tablename__ = "users"
    # 같은 IP + 사용자명 조합은 한 행으로만 존재 (동시 수락 시 중복 생성 방지)
    __table_args__ = (
        UniqueConstraint("ip_address", "username", name="uq_users_ip_username"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False)                          # 사용자명 (미입력 시 user_<ms>)
    ip_address = Column(String, nullable=True)                         # 마지막 접속 IP
    user_agent = Column(String, nullable=True)                         # 브라우저 User-Agent
    certificate_trusted = Column(Boolean, nullable=False, default=False)   # 인증서 신뢰 수락 여부
    redirect_completed = Column(Boolean, nullable=False, default=False)    # 설치 완료 후 리다이렉트 준비 여부
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    actions = relationship("CertificateAction", back_populates="user")
