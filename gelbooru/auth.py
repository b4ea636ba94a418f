"""API credentials parsed from the account options page."""

import re

from pydantic import BaseModel, ConfigDict, Field

from gelbooru.errors import CredentialParseError

_USER_MARKER = "&user_id="
_KEY_PREFIX = "&api_key="
_DIGITS = re.compile(r"[0-9]+")


class AuthDetails(BaseModel):
    """A user id and API key pair sent with every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    api_key: str = Field(repr=False)

    @classmethod
    def from_query_string(cls, blob: str) -> "AuthDetails":
        """Parse the credential blob shown under "API Access Credentials".

        The blob looks like ``&api_key=<key>&user_id=<id>``. The leading
        ``&api_key=`` prefix is optional.

        Args:
            blob: Credential string as copied from the site.

        Returns:
            Parsed AuthDetails.

        Raises:
            CredentialParseError: If the user id marker is missing, the id is
                not a number, or the key is empty.
        """
        blob = blob.strip()
        marker = blob.find(_USER_MARKER)
        if marker == -1:
            raise CredentialParseError(
                f"Credential string has no '{_USER_MARKER}' segment"
            )

        user_raw = blob[marker + len(_USER_MARKER):]
        if not _DIGITS.fullmatch(user_raw):
            raise CredentialParseError(f"User id is not a number: {user_raw!r}")

        key = blob[:marker]
        if key.startswith(_KEY_PREFIX):
            key = key[len(_KEY_PREFIX):]
        elif key.startswith(_KEY_PREFIX[1:]):
            key = key[len(_KEY_PREFIX) - 1:]
        if not key:
            raise CredentialParseError("Credential string has an empty API key")

        return cls(user_id=int(user_raw), api_key=key)
