"""User accounts: signup, credential checks and the admin directory"""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import Conflict, Forbidden
from scafflow.models.project import Project
from scafflow.models.user import User
from scafflow.schemas.auth import SignupRequest, UserSummary
from scafflow.services.auth_service import AuthService
from scafflow.services.ownership_policy import Identity
from scafflow.services.project_repository import require_identity
from scafflow.services.records import validate_payload, to_record

logger = logging.getLogger(__name__)


class UserService:
    """Service for user account operations"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def signup(self, payload) -> User:
        """
        Create an owner account.

        Args:
            payload: SignupRequest fields

        Returns:
            The created User

        Raises:
            InvalidInput: If the payload fails validation
            Conflict: If the email is already registered
        """
        data = validate_payload(SignupRequest, payload)
        email = data.email.lower()

        if await self.get_by_email(email):
            raise Conflict(f"Email {email} is already registered")

        user = User(
            name=data.name,
            email=email,
            password_hash=AuthService.hash_password(data.password),
            role=data.role.value,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            await self.db.rollback()
            raise Conflict(f"Email {email} is already registered")
        await self.db.refresh(user)

        logger.info(f"User {user.id} signed up with role {user.role}")
        return user

    async def authenticate_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Check an email/password pair.

        Returns:
            The matching User, or None if the email is unknown or the password is wrong
        """
        user = await self.get_by_email(email)
        if not user or not AuthService.verify_password(password, user.password_hash):
            return None
        return user

    async def list_with_project_counts(self, identity: Optional[Identity]) -> List[UserSummary]:
        """
        Every user with the number of projects they own, newest first.

        Raises:
            Unauthenticated: No identity
            Forbidden: Caller is not an admin
        """
        identity = require_identity(identity)
        if not identity.is_admin:
            logger.info(f"User {identity.id} denied access to the user directory")
            raise Forbidden("Admin access required")

        result = await self.db.execute(
            select(User, func.count(Project.id))
            .outerjoin(Project, Project.owner_id == User.id)
            .group_by(User.id)
            .order_by(User.created_at.desc())
        )
        return [
            to_record(UserSummary, user, project_count=count)
            for user, count in result.all()
        ]
