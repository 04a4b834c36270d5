"""
Maps raw HTTP responses to typed outcomes.

Request charge is the number of request units (RU) the service billed
for the operation. Request duration is the server-side execution time in
milliseconds. Both are passed through as the strings the service sent.
"""

import enum
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .constants import HEADER_CONTINUATION, HEADER_REQUEST_CHARGE, HEADER_REQUEST_DURATION
from .exceptions import CosmosClientError, MalformedResponseBodyError, UnexpectedStatusError

logger = logging.getLogger(__name__)


class OutcomeKind(enum.Enum):
    OK = "ok"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    STORAGE_LIMIT_REACHED = "storage_limit_reached"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ENTITY_TOO_LARGE = "entity_too_large"
    ERROR = "error"


STATUS_OUTCOMES: Dict[int, OutcomeKind] = {
    200: OutcomeKind.OK,
    201: OutcomeKind.OK,
    400: OutcomeKind.BAD_REQUEST,
    401: OutcomeKind.UNAUTHORIZED,
    403: OutcomeKind.STORAGE_LIMIT_REACHED,
    404: OutcomeKind.NOT_FOUND,
    409: OutcomeKind.CONFLICT,
    413: OutcomeKind.ENTITY_TOO_LARGE,
}


@dataclass
class RawResponse:
    status: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


@dataclass(frozen=True)
class ResultEnvelope:
    """Decoded body plus the telemetry the service reported for the call."""

    body: Any
    properties: Dict[str, Any]
    count: int = 1
    resource_id: Optional[str] = None

    @property
    def request_charge(self) -> Optional[str]:
        return self.properties.get("request_charge")

    @property
    def request_duration(self) -> Optional[str]:
        return self.properties.get("request_duration")

    @property
    def continuation_token(self) -> Any:
        return self.properties.get("continuation_token")

    @property
    def documents(self) -> List[Any]:
        """Documents of a listing or query result, or the single document."""
        if isinstance(self.body, dict) and "Documents" in self.body:
            return self.body["Documents"]
        return [self.body]


Outcome = Tuple[OutcomeKind, Union[ResultEnvelope, CosmosClientError]]


def flatten_headers(headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Lower-case header names, keeping the first value of each."""
    flat = {}
    for name, value in headers:
        flat.setdefault(name.lower(), value)
    return flat


def _decode(body: bytes, status: int) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseBodyError(
            f"Could not decode response body (status {status}): {e}",
            status_code=status,
            body=body,
        ) from e


def _decode_continuation_token(token: Optional[str], status: int) -> Any:
    if token is None:
        return None
    return _decode(token.encode('utf-8'), status)


def build_result(status: int, headers: Iterable[Tuple[str, str]], body: bytes) -> ResultEnvelope:
    """
    Build the result envelope for a response with a mapped status.

    Raises:
        MalformedResponseBodyError: If the body or continuation header is not JSON
    """
    flat = flatten_headers(headers)
    decoded = _decode(body, status)

    properties = {
        "request_charge": flat.get(HEADER_REQUEST_CHARGE),
        "request_duration": flat.get(HEADER_REQUEST_DURATION),
    }

    if isinstance(decoded, dict) and decoded.keys() >= {"Documents", "_count", "_rid"}:
        properties["continuation_token"] = _decode_continuation_token(
            flat.get(HEADER_CONTINUATION), status
        )
        return ResultEnvelope(
            body={"Documents": decoded["Documents"]},
            properties=properties,
            count=decoded["_count"],
            resource_id=decoded["_rid"],
        )

    return ResultEnvelope(body=decoded, properties=properties, count=1)


def classify(raw: RawResponse) -> Outcome:
    """
    Classify a response by status.

    Returns:
        ``(kind, ResultEnvelope)`` for mapped statuses, or
        ``(OutcomeKind.ERROR, UnexpectedStatusError)`` for anything else

    Raises:
        MalformedResponseBodyError: If a mapped response has an undecodable body
    """
    kind = STATUS_OUTCOMES.get(raw.status)
    if kind is None:
        logger.debug("Unmapped response status %s", raw.status)
        return OutcomeKind.ERROR, UnexpectedStatusError(raw.status, raw.headers, raw.body)

    result = build_result(raw.status, raw.headers, raw.body)
    logger.debug("Response %s (%s), request charge %s",
                 raw.status, kind.value, result.request_charge)
    return kind, result
