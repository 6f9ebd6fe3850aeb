"""Span serialization: JSON round-trip for parse results.

Spans serialize to the wire shape ``{"text": str, "elementType": int}``
consumed by rendering layers; documents wrap them as
``{"source": str, "elements": [...]}``. Output is deterministic (sorted
keys) for cache-key stability.

Example:
    from spanmark import parse
    from spanmark.serialization import to_json, from_json

    doc = parse("***Hello*** @world")
    restored = from_json(to_json(doc))
    assert restored == doc

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from typing import Any

from spanmark.elements import Document, ElementType, Span


def span_to_dict(span: Span, *, include_offsets: bool = False) -> dict[str, Any]:
    """Convert a span to its wire dict.

    Args:
        span: Span to convert.
        include_offsets: Also emit ``start``/``end`` source offsets.

    """
    result: dict[str, Any] = {"text": span.text, "elementType": int(span.element_type)}
    if include_offsets:
        result["start"] = span.start
        result["end"] = span.end
    return result


def span_from_dict(data: dict[str, Any]) -> Span:
    """Rebuild a span from its wire dict.

    Raises:
        ValueError: If ``text`` or ``elementType`` is missing or invalid.

    """
    try:
        text = data["text"]
        raw_type = data["elementType"]
    except KeyError as e:
        msg = f"Missing {e.args[0]!r} field in serialized span"
        raise ValueError(msg) from e
    if not isinstance(text, str):
        msg = f"Span text must be a string, got {type(text).__name__}"
        raise ValueError(msg)
    if not isinstance(raw_type, int) or isinstance(raw_type, bool) or raw_type < 0:
        msg = f"Invalid elementType: {raw_type!r}"
        raise ValueError(msg)
    return Span(
        text=text,
        element_type=ElementType(raw_type),
        start=data.get("start", 0),
        end=data.get("end", 0),
    )


def to_dict(doc: Document, *, include_offsets: bool = False) -> dict[str, Any]:
    """Convert a Document to a JSON-compatible dict."""
    return {
        "source": doc.source,
        "elements": [span_to_dict(s, include_offsets=include_offsets) for s in doc.spans],
    }


def from_dict(data: dict[str, Any]) -> Document:
    """Reconstruct a Document from a dict produced by to_dict.

    Raises:
        ValueError: If ``elements`` is missing or not a list.

    """
    elements = data.get("elements")
    if not isinstance(elements, list):
        msg = "Serialized document needs an 'elements' list"
        raise ValueError(msg)
    return Document(
        source=data.get("source", ""),
        spans=tuple(span_from_dict(item) for item in elements),
    )


def to_json(doc: Document, *, indent: int | None = None, include_offsets: bool = False) -> str:
    """Serialize a Document to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation (None for compact output).
        include_offsets: Also emit span source offsets.

    """
    return json.dumps(
        to_dict(doc, include_offsets=include_offsets),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )


def from_json(json_str: str) -> Document:
    """Deserialize a Document from a JSON string."""
    return from_dict(json.loads(json_str))


__all__ = [
    "from_dict",
    "from_json",
    "span_from_dict",
    "span_to_dict",
    "to_dict",
    "to_json",
]
