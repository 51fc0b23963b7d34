from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portal.database.sqlite import Base

# 감사 로그: 추가만 하고 수정/삭제하지 않는다
class CertificateAction(Base):
    __tablename__ = "certificate_actions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String, nullable=False)           # certificate_accepted, ios_profile_downloaded ...
    device_type = Column(String, nullable=True)       # ios, macos, android, windows, unknown, web
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ip_address = Column(String, nullable=True)

    user = relationship("User", back_populates="actions")
