"""Request builder for the posts endpoint."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from gelbooru.models.schemas import PostQuery, Rating
from gelbooru.services.client import Client, query_api

# Server-side default page size
_DEFAULT_LIMIT = 100


class PostQueryBuilder(BaseModel):
    """Immutable search for posts.

    Every ``with_*`` / ``add_*`` call returns a new builder, so a partially
    configured builder can be shared and extended freely::

        safe_miku = posts().add_tags(["hatsune_miku", "solo"]).with_rating(Rating.SAFE)
        result = await safe_miku.with_limit(50).execute(client)
    """

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = Field(default=None, ge=0)
    tags: tuple[str, ...] = ()
    tags_raw: str = ""
    rating: Optional[Rating] = None
    randomize: bool = False

    def _evolve(self, **changes) -> "PostQueryBuilder":
        return self.model_validate({**self.model_dump(), **changes})

    def with_limit(self, limit: int) -> "PostQueryBuilder":
        """Amount of posts to receive. The server default is 100."""
        return self._evolve(limit=limit)

    def add_tag(self, tag: str) -> "PostQueryBuilder":
        """Add a single tag to search for."""
        return self._evolve(tags=(*self.tags, tag))

    def add_tags(self, tags: Iterable[str]) -> "PostQueryBuilder":
        """Add tags to search for; previously added tags are kept.

        Any tag that works on the website works here, including meta-tags.
        """
        return self._evolve(tags=(*self.tags, *tags))

    def set_raw_tags(self, raw_tags: str) -> "PostQueryBuilder":
        """Append a string verbatim to the tag search.

        The string is not checked and can easily break the query; mostly
        useful for meta-tags.
        """
        return self._evolve(tags_raw=raw_tags)

    def clear_tags(self) -> "PostQueryBuilder":
        """Drop all tags, including the raw suffix."""
        return self._evolve(tags=(), tags_raw="")

    def with_rating(self, rating: Rating) -> "PostQueryBuilder":
        """Filter by content rating."""
        return self._evolve(rating=rating)

    def with_random(self, randomize: bool) -> "PostQueryBuilder":
        """Randomize the order of posts (server-side ``sort:random``)."""
        return self._evolve(randomize=randomize)

    def compile_tags(self) -> str:
        """Build the tag search expression.

        Order: rating meta-tag, ``sort:random``, tags, raw suffix; present
        parts are separated by single spaces.
        """
        parts: list[str] = []
        if self.rating is not None:
            parts.append(self.rating.search_term)
        if self.randomize:
            parts.append("sort:random")
        parts.extend(self.tags)
        if self.tags_raw:
            parts.append(self.tags_raw)
        return " ".join(parts)

    def params(self) -> dict[str, str]:
        limit = self.limit if self.limit is not None else _DEFAULT_LIMIT
        return {
            "s": "post",
            "limit": str(limit),
            "tags": self.compile_tags(),
        }

    async def execute(self, client: Client) -> PostQuery:
        """Run the search.

        Raises:
            UrlConstructionError, TransportError, DecodeError: See query_api.
        """
        return await query_api(client, self.params(), PostQuery)
