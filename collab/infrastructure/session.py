# collab/infrastructure/session.py
import logging
from typing import Optional

from collab.domain.schemas import Identity


class SessionProvider:
    """Holds the identity of the signed-in user for the running process."""

    def __init__(self, identity: Optional[Identity] = None) -> None:
        self._identity = identity
        self.logger = logging.getLogger("CollabSync.Session")

    def get_current_user(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def sign_in(self, identity: Identity) -> None:
        self._identity = identity
        self.logger.info(f"User signed in: {identity.id}")

    def sign_out(self) -> None:
        if self._identity is not None:
            self.logger.info(f"User signed out: {self._identity.id}")
        self._identity = None
