"""
Master key authorization for the Cosmos DB REST API.

Every request is signed with HMAC-SHA256 over a canonical payload built
from the HTTP verb, the resource type, the resource link and the request
date. See "Access control in the Azure Cosmos DB SQL API" for the format.
"""

import base64
import binascii
import datetime
import hashlib
import hmac
from email.utils import format_datetime
from typing import List, Optional, Tuple
from urllib.parse import quote_plus

from .constants import KEY_TYPE_MASTER, RESOURCE_TYPES, TOKEN_VERSION
from .exceptions import InvalidInputError, InvalidKeyError


def _split_path(resource_path: str) -> Tuple[List[str], int]:
    """Split a resource path and locate its resource-type segment.

    Returns the segments and the index of the last segment naming a
    resource type.

    Raises:
        InvalidInputError: If no segment names a resource type
    """
    segments = resource_path.strip("/").split("/")
    for index in range(len(segments) - 1, -1, -1):
        if segments[index] in RESOURCE_TYPES:
            return segments, index
    raise InvalidInputError(f"No resource type found in path {resource_path!r}")


def resource_type(resource_path: str) -> str:
    """Return the resource type ("dbs", "colls" or "docs") of a path.

    The tail is scanned first, so a trailing id segment is skipped:
    ``dbs/d/colls/c/docs/42`` is a ``docs`` resource.
    """
    segments, index = _split_path(resource_path)
    return segments[index]


def resource_link(resource_path: str) -> str:
    """Return the segments preceding the resource-type segment."""
    segments, index = _split_path(resource_path)
    return "/".join(segments[:index])


def build_payload(verb: str, resource_path: str, date: str) -> str:
    """Build the canonical string that gets signed."""
    return "{verb}\n{type}\n{link}\n{date}\n\n".format(
        verb=verb.strip().lower(),
        type=resource_type(resource_path),
        link=resource_link(resource_path),
        date=date.lower(),
    )


def _decode_key(key: str) -> bytes:
    try:
        return base64.b64decode(key, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise InvalidKeyError(f"Account key is not valid base64: {e}") from e


def sign(verb: str, resource_path: str, date: str, key: str,
         key_type: str = KEY_TYPE_MASTER, token_version: str = TOKEN_VERSION) -> str:
    """
    Generate the Authorization header value for one request.

    Args:
        verb: HTTP method, case and surrounding whitespace ignored
        resource_path: Path such as ``dbs/{db}/colls/{container}/docs/{id}``
        date: RFC 7231 date, the same value sent in ``x-ms-date``
        key: Base64 encoded account key
        key_type: Token type, normally "master"
        token_version: Token format version

    Returns:
        Form-encoded token ``type=...&ver=...&sig=...``

    Raises:
        InvalidKeyError: If the key is not valid base64
        InvalidInputError: If the path has no resource type segment
    """
    decoded_key = _decode_key(key)
    payload = build_payload(verb, resource_path, date)

    mac = hmac.new(decoded_key, payload.encode('utf-8'), hashlib.sha256)
    signature = base64.b64encode(mac.digest()).decode('ascii')

    token = f"type={key_type}&ver={token_version}&sig={signature}"
    return quote_plus(token, safe='')


def rfc7231_date(now: Optional[datetime.datetime] = None) -> str:
    """
    Format a timestamp for the ``x-ms-date`` header.

    Aware datetimes are converted to UTC; a naive datetime is taken to
    already be in UTC. The value is lower-cased, as the signature payload
    requires.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)
    else:
        now = now.astimezone(datetime.timezone.utc)

    return format_datetime(now.replace(microsecond=0), usegmt=True).lower()
