from typing import Optional
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from portal.models.user import User
from portal.models.certificate_action import CertificateAction
from portal.utils.exceptions import StorageError
import logging

logger = logging.getLogger(__name__)

class UserStore:
    """users / certificate_actions 두 테이블에 대한 저장소"""

    def __init__(self, db: Session):
        self.db = db

    def upsert_trusted_user(self, username: str, ip_address: str, user_agent: str) -> int:
        """(IP, 사용자명) 기준으로 사용자를 신뢰 상태로 만들거나 새로 생성하고 ID를 반환합니다.

        조회 후 삽입을 나누지 않고 INSERT ... ON CONFLICT DO UPDATE 한 번으로 처리하므로
        같은 요청이 동시에 들어와도 행이 하나만 생긴다.
        """
        stmt = sqlite_insert(User).values(
            username=username,
            ip_address=ip_address,
            user_agent=user_agent,
            certificate_trusted=True,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.ip_address, User.username],
            set_={"certificate_trusted": True},
        ).returning(User.id)
        try:
            user_id = self.db.execute(stmt).scalar_one()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"사용자 저장 실패: {str(e)}")
            raise StorageError(f"Failed to save user: {str(e)}") from e
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def log_action(self, user_id: int, action: str, device_type: str, ip_address: str) -> None:
        """감사 로그를 추가합니다. 실패해도 예외를 올리지 않고 기록만 남긴다."""
        try:
            self.db.add(CertificateAction(
                user_id=user_id,
                action=action,
                device_type=device_type,
                ip_address=ip_address,
            ))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"감사 로그 기록 실패 ({action}, user_id={user_id}): {str(e)}")

    def mark_redirect_completed(self, user_id: int) -> None:
        try:
            self.db.query(User).filter(User.id == user_id).update({"redirect_completed": True})
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"리다이렉트 상태 갱신 실패 (user_id={user_id}): {str(e)}")
