from typing import List, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import func, distinct
from portal.models.user import User
from portal.models.certificate_action import CertificateAction
import logging

logger = logging.getLogger(__name__)

class StatisticsService:
    """관리자 통계 조회를 담당하는 서비스 클래스"""

    @staticmethod
    def get_user_stats(db: Session) -> List[Dict[str, Any]]:
        """사용자별 액션 수와 사용 기기/액션 목록을 최신 가입 순으로 조회합니다."""
        try:
            rows = (
                db.query(
                    User,
                    func.count(CertificateAction.id).label("total_actions"),
                    func.group_concat(distinct(CertificateAction.device_type)).label("devices"),
                    func.group_concat(distinct(CertificateAction.action)).label("actions"),
                )
                .outerjoin(CertificateAction, User.id == CertificateAction.user_id)
                .group_by(User.id)
                .order_by(User.created_at.desc(), User.id.desc())
                .all()
            )

            return [
                {
                    "id": user.id,
                    "username": user.username,
                    "ip_address": user.ip_address,
                    "user_agent": user.user_agent,
                    "certificate_trusted": user.certificate_trusted,
                    "redirect_completed": user.redirect_completed,
                    "created_at": user.created_at,
                    "total_actions": total_actions,
                    "devices": devices,
                    "actions": actions,
                }
                for user, total_actions, devices, actions in rows
            ]

        except Exception as e:
            logger.error(f"사용자 통계 조회 실패: {str(e)}")
            raise

    @staticmethod
    def get_recent_actions(db: Session, limit: int = 100) -> List[Dict[str, Any]]:
        """최근 감사 로그를 사용자명/IP와 함께 조회합니다."""
        try:
            rows = (
                db.query(CertificateAction, User.username, User.ip_address.label("user_ip"))
                .join(User, CertificateAction.user_id == User.id)
                .order_by(CertificateAction.timestamp.desc(), CertificateAction.id.desc())
                .limit(limit)
                .all()
            )

            return [
                {
                    "id": action.id,
                    "user_id": action.user_id,
                    "action": action.action,
                    "device_type": action.device_type,
                    "timestamp": action.timestamp,
                    "ip_address": action.ip_address,
                    "username": username,
                    "user_ip": user_ip,
                }
                for action, username, user_ip in rows
            ]

        except Exception as e:
            logger.error(f"감사 로그 조회 실패: {str(e)}")
            raise
