"""Caller identity as seen by the domain layer."""

from typing import Optional, Protocol
from uuid import UUID


class Identity(Protocol):
    """An authenticated caller: anything carrying an id and an email."""

    id: UUID
    email: Optional[str]
