"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """The caller identity carried by a verified bearer token.

    ``id`` is the auth user id that owns a profile row; ``email`` seeds
    the default username when that row is first created.
    """

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Turns bearer tokens into identities."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the identity for a valid token, None for anything else."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Mint a token for ``user`` (local tooling and tests only)."""
        ...
