# ============================================================================
# FILE: app/services/user/user_service.py
# User business logic - creation and authentication
# ============================================================================
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone

from app.models.user import User, UserRole


class UserService:
    """Service layer for user operations."""

    @staticmethod
    def create_user(
            db: Session,
            username: str,
            email: str,
            password: str,
            role: str = UserRole.CLIENT.value
    ) -> User:
        """
        Create a new user with hashed password.
        Raises ValueError if username or email already exists.
        """
        username = username.strip()
        email = email.lower().strip()

        existing_user = db.query(User).filter(
            or_(User.username == username, User.email == email)
        ).first()
        if existing_user:
            raise ValueError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            hashed_password=User.hash_password(password),
            role=UserRole(role).value,
            is_active=True
        )

        db.add(user)
        db.commit()
        db.refresh(user)

        return user

    @staticmethod
    def authenticate_user(
            db: Session,
            login: str,
            password: str
    ) -> Optional[User]:
        """
        Authenticate by username or email and password.
        Returns User if valid, None if invalid credentials.
        """
        login = login.strip()
        user = db.query(User).filter(
            or_(User.username == login, User.email == login.lower())
        ).first()

        if not user:
            return None

        if not user.is_active:
            return None

        if not user.verify_password(password):
            return None

        # Update last login timestamp
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

        return user

    @staticmethod
    def get_user_by_id(
            db: Session,
            user_id: UUID
    ) -> Optional[User]:
        """Get user by ID."""
        return db.query(User).filter(User.id == user_id).first()
