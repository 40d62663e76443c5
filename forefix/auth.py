"""Local accounts and the signed-in session."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from .logging_config import get_logger
from .storage import Repository, SessionUser, UserRecord

logger = get_logger(__name__)

DEFAULT_ROLE = "user"


class Auth:
    def __init__(self, repository: Repository):
        self.repository = repository

    def signup(self, name: str, email: str, password: str) -> bool:
        """Register a new user. Returns False if the email is taken."""
        users = self.repository.users()
        if any(user.email == email for user in users):
            logger.info("Signup rejected, %s already registered", email)
            return False

        users.append(
            UserRecord(
                id=str(int(time.time() * 1000)),
                name=name,
                email=email,
                password=password,
                role=DEFAULT_ROLE,
                joined_at=datetime.now(timezone.utc).isoformat(),
            )
        )
        self.repository.save_users(users)
        logger.info("Registered %s", email)
        return True

    def login(self, email: str, password: str) -> bool:
        """Start a session when both fields match a stored user exactly."""
        for user in self.repository.users():
            if user.email == email and user.password == password:
                self.repository.save_session(user.without_password())
                logger.info("Signed in %s", email)
                return True
        logger.info("Login failed for %s", email)
        return False

    def logout(self) -> None:
        self.repository.clear_session()

    def current_user(self) -> Optional[SessionUser]:
        return self.repository.session()

    def is_authenticated(self) -> bool:
        return self.repository.has_session()
