"""Table resolver protocol."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

T = TypeVar("T")


class ITableResolver(Protocol):
    """Maps a logical entity onto whichever physical table answers."""

    async def resolve(self, entity: str, attempt: Callable[[str], Awaitable[T]]) -> T:
        """Run ``attempt`` against the entity's table candidates in order."""
        ...

    def resolved_name(self, entity: str) -> str | None:
        """Physical table remembered for the entity, if any."""
        ...
