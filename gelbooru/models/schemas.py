"""Pydantic v2 schemas for Gelbooru API responses."""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Iterator, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from gelbooru.errors import MappingDefectError

# e.g. "Mon Jan 02 15:04:05 +0000 2006"
CREATED_AT_FORMAT = "%a %b %d %H:%M:%S %z %Y"


class Rating(IntEnum):
    """Content rating of a post, ordered from least to most explicit."""
    SAFE = 0
    QUESTIONABLE = 1
    EXPLICIT = 2

    @classmethod
    def from_code(cls, code: str) -> "Rating":
        """Map a wire rating ("s", "q", "e" or the spelled-out word).

        Only those six codes are recognized. Newer vocabulary such as
        "general" or "sensitive" is not folded into the nearest rating.

        Raises:
            MappingDefectError: For any other code.
        """
        try:
            return _RATING_CODES[code.lower()]
        except KeyError:
            raise MappingDefectError("rating", code) from None

    @property
    def search_term(self) -> str:
        """Meta-tag selecting this rating in a post search."""
        return f"rating:{self.name.lower()}"


_RATING_CODES = {
    "s": Rating.SAFE,
    "safe": Rating.SAFE,
    "q": Rating.QUESTIONABLE,
    "questionable": Rating.QUESTIONABLE,
    "e": Rating.EXPLICIT,
    "explicit": Rating.EXPLICIT,
}


class TagType(str, Enum):
    """Category of a tag."""
    ARTIST = "artist"
    CHARACTER = "character"
    COPYRIGHT = "copyright"
    DEPRECATED = "deprecated"
    METADATA = "metadata"
    TAG = "tag"


class OrderBy(str, Enum):
    """Field used to sort a tag listing."""
    DATE = "date"
    COUNT = "count"
    NAME = "name"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Attributes(_Record):
    """Pagination metadata reported with every response."""
    limit: int = Field(ge=0)
    offset: int = Field(ge=0)
    count: int = Field(ge=0)


class Post(_Record):
    """A post on Gelbooru."""
    id: int
    tags: str
    raw_rating: str = Field(validation_alias="rating")
    raw_created_at: str = Field(validation_alias="created_at")
    score: int = 0
    width: int = 0
    height: int = 0
    preview_width: int = 0
    preview_height: int = 0
    sample: int = 0
    sample_width: int = 0
    sample_height: int = 0
    owner: str = ""
    creator_id: Optional[int] = None
    parent_id: Optional[int] = None
    file_url: str = ""
    preview_url: str = ""
    sample_url: str = ""
    source: str = ""
    directory: str = ""
    image: str = ""
    md5: str = ""
    title: str = ""
    change: int = 0
    status: str = ""
    post_locked: int = 0

    @field_validator("parent_id", mode="before")
    @classmethod
    def _no_parent(cls, value: Any) -> Any:
        # The API reports a missing parent as 0 or an empty string
        if value in (0, "0", "", None):
            return None
        return value

    def rating(self) -> Rating:
        """Content rating.

        Raises:
            MappingDefectError: If the rating code is not s/q/e.
        """
        return Rating.from_code(self.raw_rating)

    def created_at(self) -> datetime:
        """Creation time as a timezone-aware datetime.

        Raises:
            MappingDefectError: If the timestamp is not in the API's format.
        """
        try:
            return datetime.strptime(self.raw_created_at, CREATED_AT_FORMAT)
        except ValueError:
            raise MappingDefectError("created_at", self.raw_created_at) from None

    def tags_list(self) -> list[str]:
        """Tag names in the order the server sent them."""
        return self.tags.split()

    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)

    def preview_dimensions(self) -> tuple[int, int]:
        return (self.preview_width, self.preview_height)

    def sample_dimensions(self) -> tuple[int, int]:
        return (self.sample_width, self.sample_height)

    def is_locked(self) -> bool:
        return self.post_locked != 0


class Tag(_Record):
    """A tag on Gelbooru.

    Depending on the endpoint variant, id, count and ambiguous arrive either
    as numeric strings or as JSON numbers; both decode to the same record.
    """
    id: int
    name: str = Field(validation_alias=AliasChoices("name", "tag"))
    count: int = 0
    raw_type: str = Field(validation_alias="type")
    ambiguous: str = "0"

    @field_validator("ambiguous", mode="before")
    @classmethod
    def _ambiguous_as_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        return value

    def tag_type(self) -> TagType:
        """Category of this tag.

        Raises:
            MappingDefectError: If the type code is unknown.
        """
        try:
            return TagType(self.raw_type)
        except ValueError:
            raise MappingDefectError("type", self.raw_type) from None

    def is_ambiguous(self) -> bool:
        return self.ambiguous != "0"


class PostQuery(_Record):
    """Response envelope of a post search."""
    attributes: Attributes = Field(alias="@attributes")
    posts: list[Post] = Field(default_factory=list, alias="post")

    @property
    def items(self) -> list[Post]:
        return self.posts

    def __iter__(self) -> Iterator[Post]:  # type: ignore[override]
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)


class TagQuery(_Record):
    """Response envelope of a tag search."""
    attributes: Attributes = Field(alias="@attributes")
    tags: list[Tag] = Field(default_factory=list, alias="tag")

    @property
    def items(self) -> list[Tag]:
        return self.tags

    def __iter__(self) -> Iterator[Tag]:  # type: ignore[override]
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)
