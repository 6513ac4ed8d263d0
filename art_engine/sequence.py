"""CSI parameter accumulator."""

from __future__ import annotations

import re

# Decimal integer as accepted for a CSI parameter
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int | None:
    if _INT_RE.fullmatch(text):
        return int(text)
    return None


class Sequence:
    """Collects the parameter bytes of a control sequence.

    Bytes are buffered until ``flush()`` closes the current parameter (on
    ``;`` or the final byte). Parameters are kept as strings and parsed on
    demand, so malformed values degrade instead of failing.
    """

    def __init__(self) -> None:
        self.params: list[str] = []
        self._buf = bytearray()

    def buffer(self, byte: int) -> None:
        self._buf.append(byte)

    def flush(self) -> None:
        self.params.append(self._buf.decode("latin-1"))
        self._buf = bytearray()

    def reset(self) -> None:
        self.params = []
        self._buf = bytearray()

    def int_at(self, n: int) -> int:
        """Decimal value of parameter n; 0 when missing or malformed."""
        if 0 <= n < len(self.params):
            value = _parse_int(self.params[n])
            if value is not None:
                return value
        return 0

    def param(self, n: int, default: int) -> int:
        """Like int_at, but absent or empty parameters yield default."""
        if n >= len(self.params) or not self.params[n]:
            return default
        return self.int_at(n)

    def ints(self) -> list[int]:
        """All parameters that parse as integers, in order."""
        values = []
        for text in self.params:
            value = _parse_int(text)
            if value is not None:
                values.append(value)
        return values

    def __len__(self) -> int:
        return len(self.params)

    def __str__(self) -> str:
        return ";".join(self.params)
