"""Static Token Identity Provider

Accepts a fixed set of bearer tokens issued by the external identity
provider. Signing out revokes a token for the lifetime of the process.
"""

import logging
import threading
from typing import Iterable, Optional

from fluxinvoice.app.services.identity_provider import IdentityProvider

logger = logging.getLogger(__name__)


class StaticTokenIdentityProvider(IdentityProvider):

    def __init__(self, tokens: Iterable[str], disabled: bool = False):
        self._tokens = {token for token in tokens if token}
        self._revoked = set()
        self._lock = threading.Lock()
        self.disabled = disabled

    def is_authenticated(self, token: Optional[str]) -> bool:
        if self.disabled:
            return True
        with self._lock:
            return bool(token) and token in self._tokens and token not in self._revoked

    def sign_out(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            if token in self._tokens:
                self._revoked.add(token)
                logger.info("Session signed out")
