"""Shareable link encoding for outfit suggestions.

A shared suggestion travels as one query parameter: the suggestion without
image references, JSON-serialised and base64 encoded.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from stilo_app.logging_config import get_logger, log_event
from logic.errors import DecodeFailure
from logic.validation import suggestion_from_payload
from models.outfit import OutfitSuggestion

LOGGER = get_logger(__name__)

SHARE_PARAM = "share"


def encode_share_token(suggestion: OutfitSuggestion) -> str:
    """Serialise a suggestion without its images into a base64 token."""

    document = json.dumps(suggestion.to_dict(include_images=False), separators=(",", ":"))
    return base64.b64encode(document.encode("utf-8")).decode("ascii")


def decode_share_token(token: str) -> OutfitSuggestion:
    """Reverse :func:`encode_share_token`.

    Accepts the standard and URL-safe alphabets, missing padding, and ``+``
    characters that a query string turned into spaces. Raises
    :class:`DecodeFailure` for anything that does not decode into a suggestion.
    """

    if not token or not token.strip():
        raise DecodeFailure("Share token is empty")
    cleaned = token.strip().replace(" ", "+").replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        raise DecodeFailure(f"Share token is not a base64 JSON document: {exc}") from exc
    return suggestion_from_payload(data, include_images=False)


def build_share_url(suggestion: OutfitSuggestion, base_url: str) -> str:
    """Return ``base_url`` with the encoded suggestion as the ``share`` parameter."""

    parts = urlsplit(base_url)
    query = parse_qs(parts.query)
    query[SHARE_PARAM] = [encode_share_token(suggestion)]
    return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))


def extract_shared_suggestion(url: str) -> Optional[OutfitSuggestion]:
    """Read a shared suggestion from a URL, or ``None`` when absent or unusable."""

    values = parse_qs(urlsplit(url).query).get(SHARE_PARAM)
    if not values:
        return None
    try:
        return decode_share_token(values[0])
    except DecodeFailure as exc:
        log_event(LOGGER, logging.WARNING, "share_decode_failed", reason=str(exc))
        return None


__all__ = [
    "SHARE_PARAM",
    "encode_share_token",
    "decode_share_token",
    "build_share_url",
    "extract_shared_suggestion",
]
