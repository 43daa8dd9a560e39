"""POST body shapes accepted by the web user agent.

A body is either an ordered sequence of ``(key, value)`` pairs or a mapping.
Both become a :class:`FormBody`; anything else is rejected by
:func:`coerce_form_body` returning ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union
from urllib.parse import urlencode

FormValue = Union[str, bytes]
Pair = Tuple[FormValue, FormValue]


@dataclass(frozen=True)
class FormBody:
    """Normalized form fields in submission order."""

    pairs: Tuple[Pair, ...]

    @property
    def encoded(self) -> str:
        """The ``application/x-www-form-urlencoded`` request body."""

        return urlencode(self.pairs)


def _text(value: Any) -> FormValue:
    # bytes are percent-encoded as-is
    if isinstance(value, bytes):
        return value
    return "" if value is None else str(value)


def _pairs_from_mapping(data: Mapping) -> List[Pair]:
    pairs: List[Pair] = []
    for key, value in data.items():
        # list values submit the same field repeatedly
        if isinstance(value, (list, tuple)):
            pairs.extend((_text(key), _text(item)) for item in value)
        else:
            pairs.append((_text(key), _text(value)))
    return pairs


def _pairs_from_sequence(data: Sequence) -> Optional[List[Pair]]:
    pairs: List[Pair] = []
    for item in data:
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence):
            return None
        if len(item) != 2:
            return None
        key, value = item
        pairs.append((_text(key), _text(value)))
    return pairs


def coerce_form_body(data: Any) -> Optional[FormBody]:
    """Return a FormBody for a mapping or pair sequence, otherwise None."""

    if isinstance(data, Mapping):
        return FormBody(tuple(_pairs_from_mapping(data)))

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        pairs = _pairs_from_sequence(data)
        if pairs is not None:
            return FormBody(tuple(pairs))

    return None


__all__ = ["FormBody", "coerce_form_body"]
