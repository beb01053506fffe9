"""Authentication service - mock login against the shared demo password."""
import logging

from chronoguard.config import settings
from chronoguard.models.user import User
from chronoguard.services.user_service import UserService
from chronoguard.utils.auth import create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.user_service = UserService(db)

    async def login(self, username: str, password: str) -> str:
        """
        Login user and return JWT token.

        Args:
            username: Username
            password: Plain text password, compared with the demo password

        Returns:
            JWT access token

        Raises:
            ValueError: If credentials are invalid
        """
        if not username.strip() or not password.strip():
            raise ValueError("Please enter both username and password")

        user = await self.user_service.get_by_username(username.strip())
        if user is None or password != settings.demo_password:
            logger.warning("Failed login for username %r", username)
            raise ValueError("Invalid username or password")

        return create_access_token(user_id=user.id)

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        return await self.user_service.get_user(user_id)
