"""
Document identity.

Documents written to a container must carry an id. Any object may
provide it by implementing ``get_id()``; plain mappings and objects with
an ``id`` attribute are handled without that.
"""

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .exceptions import InvalidInputError


@runtime_checkable
class Identifiable(Protocol):
    """Anything that can report its own document id."""

    def get_id(self) -> Optional[str]:
        ...


def get_id(document: Any) -> Optional[str]:
    """Return the id of a document, or None when it has none."""
    if isinstance(document, Identifiable):
        return document.get_id()
    if isinstance(document, Mapping):
        return document.get("id")
    return getattr(document, "id", None)


def to_json(document: Any) -> dict:
    """
    Convert a document to a dict ``json.dumps`` accepts.

    Raises:
        InvalidInputError: If the document cannot be turned into a dict
    """
    if isinstance(document, Mapping):
        data = dict(document)
    elif hasattr(document, "to_dict"):
        data = document.to_dict()
    elif hasattr(document, "_asdict"):
        data = dict(document._asdict())
    elif is_dataclass(document) and not isinstance(document, type):
        data = asdict(document)
    elif hasattr(document, "__dict__"):
        data = dict(vars(document))
    else:
        raise InvalidInputError(
            f"Cannot convert a {type(document).__name__} document to JSON."
        )

    if not isinstance(data, dict):
        raise InvalidInputError(
            f"Document of type {type(document).__name__} did not convert to a JSON object."
        )
    return data


def document_body(document: Any) -> dict:
    """
    Return the JSON object to send for a new document.

    The id resolved through ``get_id`` is written into the body when the
    body does not carry one.

    Raises:
        InvalidInputError: If the document has no id or cannot be converted
    """
    if document is None:
        raise InvalidInputError("Cannot create a document without a document.")

    doc_id = get_id(document)
    if not doc_id:
        raise InvalidInputError("Cannot create a document without an id.")

    body = to_json(document)
    body.setdefault("id", doc_id)
    return body
