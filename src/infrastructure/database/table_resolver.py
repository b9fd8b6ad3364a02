"""Fallback resolution of logical entities to physical table names.

Deployments created before the profile table was renamed still carry the
old name. Rather than version the schema, each logical entity owns an
ordered list of candidate names. The first candidate whose query does not
fail with "relation does not exist" wins and is remembered for the rest of
the process, so probing happens at most once per entity.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import TypeVar

import structlog

from core.exceptions import SchemaMismatchError
from infrastructure.database.errors import is_missing_relation

logger = structlog.get_logger()

T = TypeVar("T")


class TableResolver:
    """Ordered-candidate table resolver with a per-process memo."""

    def __init__(
        self,
        candidates: Mapping[str, Sequence[str]],
        is_missing: Callable[[BaseException], bool] = is_missing_relation,
    ) -> None:
        self._candidates = {entity: list(names) for entity, names in candidates.items()}
        self._is_missing = is_missing
        self._resolved: dict[str, str] = {}

    def candidates(self, entity: str) -> list[str]:
        """Configured candidates for an entity, in priority order."""
        try:
            return list(self._candidates[entity])
        except KeyError:
            raise SchemaMismatchError(entity, []) from None

    def resolved_name(self, entity: str) -> str | None:
        """Physical table remembered for the entity, if any."""
        return self._resolved.get(entity)

    def forget(self, entity: str | None = None) -> None:
        """Drop remembered resolutions (all entities when ``entity`` is None)."""
        if entity is None:
            self._resolved.clear()
        else:
            self._resolved.pop(entity, None)

    async def resolve(self, entity: str, attempt: Callable[[str], Awaitable[T]]) -> T:
        """Run ``attempt`` against each candidate until one is accepted.

        A candidate is rejected only when the attempt fails because the table
        is missing. Any other error stops the search and propagates as is.
        Zero rows is an accepted outcome.

        Raises:
            SchemaMismatchError: If every candidate is missing.
        """
        remembered = self._resolved.get(entity)
        if remembered is not None:
            return await attempt(remembered)

        names = self.candidates(entity)
        for name in names:
            try:
                result = await attempt(name)
            except Exception as exc:
                if not self._is_missing(exc):
                    raise
                logger.info("table_candidate_missing", entity=entity, table=name)
                continue

            self._resolved[entity] = name
            logger.info("table_resolved", entity=entity, table=name)
            return result

        logger.error("table_resolution_failed", entity=entity, candidates=names)
        raise SchemaMismatchError(entity, names)
