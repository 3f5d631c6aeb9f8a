# futurehire/services/auth.py
import logging
from typing import Optional

from pydantic import BaseModel

from futurehire.core.errors import InvalidCredentials
from futurehire.core.security import PasswordHasher, TokenService
from futurehire.models.identity import Identity, UserSummary
from futurehire.repositories.users import CredentialStore

logger = logging.getLogger(__name__)


class IssuedCredentials(BaseModel):
    token: str
    user: UserSummary


def _summary(identity: Identity) -> UserSummary:
    return UserSummary(id=identity.id, name=identity.name, email=identity.email)


class AuthService:
    """Signup and login: the two ways a client obtains a token."""

    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def signup(self, name: str, email: str, mobile: Optional[str], password: str) -> IssuedCredentials:
        # uniqueness is enforced by the store's insert, not checked here
        identity = await self.store.create(name, email, mobile, self.hasher.hash(password))
        logger.info("Registered user %s (%s)", identity.id, identity.email)
        return IssuedCredentials(token=self.tokens.issue(identity.id), user=_summary(identity))

    async def login(self, email: str, password: str) -> IssuedCredentials:
        identity = await self.store.find_by_email(email)
        if identity is None:
            # same cost and same error as a wrong password
            self.hasher.dummy_verify()
            logger.info("Login failed for %s", email)
            raise InvalidCredentials()
        if not self.hasher.verify(password, identity.password_hash):
            logger.info("Login failed for %s", email)
            raise InvalidCredentials()
        logger.info("Login: %s (%s)", identity.id, identity.email)
        return IssuedCredentials(token=self.tokens.issue(identity.id), user=_summary(identity))
