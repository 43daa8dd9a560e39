"""Normalize response bodies into Python text exactly once."""

from __future__ import annotations

import logging
from email.message import Message

from bs4 import UnicodeDammit

logger = logging.getLogger(__name__)


def declared_charset(content_type: str | None) -> str | None:
    """Extract the ``charset`` parameter of a Content-Type header, if any."""

    if not content_type:
        return None
    message = Message()
    message["Content-Type"] = content_type
    return message.get_content_charset()


def to_internal(raw: bytes, content_type: str | None = None) -> str:
    """Decode ``raw`` using the declared charset, falling back to sniffing.

    The declared charset wins when it decodes cleanly. Otherwise the
    byte-order mark, any HTML/XML meta declaration, UTF-8 and a statistical
    guess are tried in that order. Bytes that nothing decodes are replaced.
    """

    if not raw:
        return ""

    charset = declared_charset(content_type)
    is_html = bool(content_type) and "html" in content_type.lower()
    dammit = UnicodeDammit(
        raw,
        known_definite_encodings=[charset] if charset else [],
        is_html=is_html,
        user_encodings=["utf-8"],
    )
    if dammit.unicode_markup is None:
        logger.debug("No encoding decoded the body cleanly (declared=%s)", charset)
        return raw.decode("utf-8", errors="replace")

    if charset and dammit.original_encoding != charset:
        logger.debug(
            "Declared charset %s rejected, decoded as %s",
            charset,
            dammit.original_encoding,
        )
    return dammit.unicode_markup


__all__ = ["declared_charset", "to_internal"]
