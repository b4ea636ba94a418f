"""Typed async client for the Gelbooru posts and tags API."""

from gelbooru.__about__ import __version__
from gelbooru.auth import AuthDetails
from gelbooru.errors import (
    CredentialParseError,
    DecodeError,
    GelbooruError,
    MappingDefectError,
    TransportError,
    UrlConstructionError,
)
from gelbooru.models.schemas import (
    Attributes,
    OrderBy,
    Post,
    PostQuery,
    Rating,
    Tag,
    TagQuery,
    TagType,
)
from gelbooru.services.client import Client
from gelbooru.services.posts import PostQueryBuilder
from gelbooru.services.tags import TagQueryBuilder

__all__ = [
    "__version__",
    "Attributes",
    "AuthDetails",
    "Client",
    "CredentialParseError",
    "DecodeError",
    "GelbooruError",
    "MappingDefectError",
    "OrderBy",
    "Post",
    "PostQuery",
    "PostQueryBuilder",
    "Rating",
    "Tag",
    "TagQuery",
    "TagQueryBuilder",
    "TagType",
    "TransportError",
    "UrlConstructionError",
    "posts",
    "tags",
]


def posts() -> PostQueryBuilder:
    """Start a post search.

    Example::

        async with Client.public() as client:
            result = await (
                posts()
                .with_limit(50)
                .with_rating(Rating.SAFE)
                .add_tags(["hatsune_miku", "solo"])
                .execute(client)
            )
    """
    return PostQueryBuilder()


def tags() -> TagQueryBuilder:
    """Start a tag listing or lookup.

    Example::

        async with Client.public() as client:
            result = await tags().with_limit(5).find_by_pattern(client, "_ol_")
    """
    return TagQueryBuilder()
