"""Request builder for the tags endpoint."""

from typing import NamedTuple, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from gelbooru.models.schemas import OrderBy, Tag, TagQuery
from gelbooru.services.client import Client, query_api

_DEFAULT_LIMIT = 100


class TagSearch(NamedTuple):
    """One of the mutually exclusive tag lookup modes."""
    param: str
    value: str
    default_limit: int

    @classmethod
    def by_name(cls, name: str) -> "TagSearch":
        return cls("name", name, 1)

    @classmethod
    def by_names(cls, names: Sequence[str]) -> "TagSearch":
        if isinstance(names, str):
            raise ValueError("Tag names must be a list of names, not a string")
        if not names:
            raise ValueError("At least one tag name is required")
        return cls("names", " ".join(names), len(names))

    @classmethod
    def by_pattern(cls, pattern: str) -> "TagSearch":
        return cls("name_pattern", pattern, _DEFAULT_LIMIT)


class TagQueryBuilder(BaseModel):
    """Immutable search for tags.

    Configure with the ``with_*`` methods, then either list tags with
    ``execute`` or look them up with ``find_by_name``, ``find_by_names`` or
    ``find_by_pattern``. Ordering applies to every mode.
    """

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = Field(default=None, ge=0)
    after_id: Optional[int] = Field(default=None, ge=0)
    order_by: Optional[OrderBy] = None
    ascending: Optional[bool] = None

    def _evolve(self, **changes) -> "TagQueryBuilder":
        return self.model_validate({**self.model_dump(), **changes})

    def with_limit(self, limit: int) -> "TagQueryBuilder":
        """Amount of tags to receive.

        When unset the limit depends on the lookup: 1 for ``find_by_name``,
        the number of names for ``find_by_names``, 100 otherwise.
        """
        return self._evolve(limit=limit)

    def with_after_id(self, after_id: int) -> "TagQueryBuilder":
        """Only return tags with an id greater than ``after_id``."""
        return self._evolve(after_id=after_id)

    def with_order(self, order_by: OrderBy) -> "TagQueryBuilder":
        return self._evolve(order_by=order_by)

    def with_ascending(self, ascending: bool) -> "TagQueryBuilder":
        return self._evolve(ascending=ascending)

    def params(self, search: Optional[TagSearch] = None) -> dict[str, str]:
        """Assemble the query parameters for a listing or a lookup."""
        if self.limit is not None:
            limit = self.limit
        elif search is not None:
            limit = search.default_limit
        else:
            limit = _DEFAULT_LIMIT

        qs = {"s": "tag", "limit": str(limit)}
        if self.after_id is not None:
            qs["after_id"] = str(self.after_id)
        if self.order_by is not None:
            qs["orderby"] = self.order_by.value
        if self.ascending is not None:
            qs["order"] = "ASC" if self.ascending else "DESC"
        if search is not None:
            qs[search.param] = search.value
        return qs

    async def execute(self, client: Client) -> TagQuery:
        """List tags without a name or pattern filter."""
        return await self._search(client, None)

    async def find_by_name(self, client: Client, name: str) -> Optional[Tag]:
        """Look up a single tag by exact name.

        Returns:
            The tag, or None if no tag has that name.
        """
        result = await self._search(client, TagSearch.by_name(name))
        return result.tags[0] if result.tags else None

    async def find_by_names(
        self, client: Client, names: Sequence[str]
    ) -> TagQuery:
        """Look up several tags by exact name.

        Raises:
            ValueError: If ``names`` is empty or a single string.
        """
        return await self._search(client, TagSearch.by_names(names))

    async def find_by_pattern(self, client: Client, pattern: str) -> TagQuery:
        """Search tags with a SQL LIKE style pattern.

        ``_`` matches a single character and ``%`` any run of characters,
        so ``%choolgirl%`` behaves like ``*choolgirl*``.
        """
        return await self._search(client, TagSearch.by_pattern(pattern))

    async def _search(
        self, client: Client, search: Optional[TagSearch]
    ) -> TagQuery:
        return await query_api(client, self.params(search), TagQuery)
