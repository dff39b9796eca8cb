"""Incremental JSON array encoder.

The writer emits the opening bracket, each serialized element with its
separator, and the closing bracket as separate steps, so a collection can be
written page by page without holding it in memory. Output is identical to
``json.dumps(list(elements), separators=(",", ":"), ensure_ascii=False)``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from enum import Enum
from typing import Any, TextIO

from ..core.exceptions import SinkError

_SEPARATORS = (",", ":")


class _State(Enum):
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"


class JSONArrayWriter:
    """Writes a JSON array to a text stream one element at a time."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._state = _State.PENDING
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    @property
    def closed(self) -> bool:
        return self._state is _State.CLOSED

    def begin(self) -> None:
        if self._state is not _State.PENDING:
            raise SinkError(f"cannot begin array: writer is {self._state.value}")
        self._stream.write("[")
        self._state = _State.OPEN

    def write(self, element: Any) -> None:
        if self._state is not _State.OPEN:
            raise SinkError(f"cannot write element: writer is {self._state.value}")
        # Encode before touching the stream so a bad element leaves no separator.
        encoded = encode_document(element)
        if self._count:
            self._stream.write(",")
        self._stream.write(encoded)
        self._count += 1

    def extend(self, elements: Iterable[Any]) -> None:
        for element in elements:
            self.write(element)

    def end(self) -> None:
        if self._state is not _State.OPEN:
            raise SinkError(f"cannot end array: writer is {self._state.value}")
        self._stream.write("]")
        self._state = _State.CLOSED


def encode_document(document: Any) -> str:
    """Serialize one document as compact JSON."""
    try:
        return json.dumps(document, ensure_ascii=False, separators=_SEPARATORS)
    except (TypeError, ValueError) as exc:
        raise SinkError(f"document is not JSON serializable: {exc}") from exc


def dump_array(elements: Iterable[Any], stream: TextIO) -> int:
    """Write ``elements`` to ``stream`` as one compact JSON array.

    Returns:
        Number of elements written
    """
    writer = JSONArrayWriter(stream)
    writer.begin()
    writer.extend(elements)
    writer.end()
    return writer.count
