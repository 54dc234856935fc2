"""Demo identity provider.

Accepts a single configured set of credentials and produces the Principal
stored in the session. The session holds the principal under ``user``.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ticktock.config.settings import TicktockConfig
from ticktock.exceptions import AuthenticationError
from ticktock.models.user import LoginCredentials, Principal

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


class DemoIdentityProvider:
    """Authenticates against one demo account.

    Args:
        email: Accepted email address
        password: Accepted password
        name: Display name of the principal
        user_id: Identifier of the principal
    """

    def __init__(self, email: str, password: str, name: str, user_id: str = "1"):
        self.email = email
        self.password = password
        self.name = name
        self.user_id = user_id

    @classmethod
    def from_config(cls, config: TicktockConfig) -> "DemoIdentityProvider":
        """Create a provider from the demo user settings."""
        return cls(
            email=config.demo_user_email,
            password=config.demo_user_password,
            name=config.demo_user_name,
        )

    def authenticate(self, credentials: LoginCredentials) -> Principal:
        """Check credentials and return the matching principal.

        Raises:
            AuthenticationError: If the email or password does not match
        """
        if (
            credentials.email.lower() != self.email.lower()
            or credentials.password != self.password
        ):
            logger.info("Rejected login attempt")
            raise AuthenticationError(
                f"Invalid email or password! Please use {self.email} "
                f"and {self.password}"
            )

        logger.info(f"Authenticated user {self.user_id}")
        return Principal(id=self.user_id, name=self.name, email=self.email)


def principal_from_session(
    session: Optional[Mapping[str, Any]],
) -> Optional[Principal]:
    """Return the session's principal, or None if absent or unreadable."""
    if session is None:
        return None

    data = session.get(SESSION_USER_KEY)
    if not data:
        return None

    try:
        return Principal.model_validate(data)
    except ValidationError:
        logger.warning("Ignoring malformed principal in session")
        return None
