"""
Tenant provisioning
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging

from app.models.user import User
from app.utils.error_handler import DatabaseError

logger = logging.getLogger(__name__)

class UserService:
    """Service for tenant records"""

    def __init__(self, db: Session):
        self.db = db

    async def get_user_by_external_id(self, external_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.external_id == external_id).first()

    async def ensure_user(
        self,
        external_id: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> User:
        """
        Idempotent upsert of the tenant keyed by the identity provider id.

        Profile fields present in the token overwrite stale local values;
        absent ones are left alone.
        """
        user = await self.get_user_by_external_id(external_id)

        try:
            if user is None:
                user = User(
                    external_id=external_id,
                    email=email.lower() if email else None,
                    first_name=first_name,
                    last_name=last_name,
                )
                self.db.add(user)
                self.db.commit()
                self.db.refresh(user)
                logger.info(f"Provisioned tenant {user.id} for subject {external_id}")
                return user

            changes = {
                "email": email.lower() if email else None,
                "first_name": first_name,
                "last_name": last_name,
            }
            changed = False
            for field, value in changes.items():
                if value is not None and getattr(user, field) != value:
                    setattr(user, field, value)
                    changed = True
            if changed:
                self.db.commit()
                self.db.refresh(user)
            return user

        except IntegrityError:
            # A concurrent request provisioned the same subject first
            self.db.rollback()
            user = await self.get_user_by_external_id(external_id)
            if user is None:
                raise DatabaseError(f"Failed to provision tenant {external_id}")
            return user
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to provision tenant {external_id}: {e}")
            raise DatabaseError(f"Failed to provision tenant: {str(e)}", e)
