"""Identity Provider Interface

Authentication is delegated to an external provider. The invoice core only
needs a yes/no "is authenticated" signal and a sign-out action.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IdentityProvider(ABC):

    @abstractmethod
    def is_authenticated(self, token: Optional[str]) -> bool:
        """Return True when token belongs to a signed-in session"""
        pass

    @abstractmethod
    def sign_out(self, token: Optional[str]) -> None:
        """End the session for token; unknown tokens are ignored"""
        pass
