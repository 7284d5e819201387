"""
Conversions from option argument text to numbers, vectors and matrices.

Vectors are comma separated, matrices are semicolon separated rows of
vectors (``1,2,3;4,5,6``). Rows of a matrix may differ in length, so
matrices are returned as a list of row vectors rather than a 2-D array.
"""

from __future__ import annotations

import re

import numpy as np

VECTOR_DELIMITER = ","
MATRIX_DELIMITER = ";"
SPECIES_DELIMITER = ":"

RGBA = tuple[int, int, int, int]

# plain decimal notation; no nan, inf or digit separators
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

COLOR_KEYS: dict[str, RGBA] = {
    "black": (0, 0, 0, 255),
    "blue": (0, 0, 255, 255),
    "cyan": (0, 255, 255, 255),
    "darkgray": (64, 64, 64, 255),
    "gray": (128, 128, 128, 255),
    "green": (0, 255, 0, 255),
    "lightgray": (192, 192, 192, 255),
    "magenta": (255, 0, 255, 255),
    "orange": (255, 200, 0, 255),
    "pink": (255, 175, 175, 255),
    "red": (255, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "yellow": (255, 255, 0, 255),
}


def _split(text: str, sep: str) -> list[str]:
    # trailing empty entries are dropped ("1,2," is the vector 1,2)
    entries = text.split(sep)
    while entries and entries[-1] == "":
        entries.pop()
    return entries


def _to_float(text: str) -> float:
    entry = text.strip()
    if not _NUMBER.fullmatch(entry):
        raise ValueError(f"not a number: {text!r}")
    return float(entry)


def parse_integer(text: str | None) -> int:
    """Parse ``text`` as an int; ``None`` yields 0."""
    if text is None:
        return 0
    return int(text)


def parse_float(text: str | None) -> float:
    """Parse ``text`` as a float; ``None`` or empty text yields 0.0."""
    if text is None or len(text) == 0:
        return 0.0
    return _to_float(text)


def parse_dim(text: str) -> int:
    """
    Parse a dimension. ``"<n>x"`` (or ``"<n>X"``) denotes the side of a square
    and returns ``n*n``; digits after the ``x`` are ignored (``"42x37"`` is 1764).
    """
    idx = text.lower().find("x")
    if idx >= 0:
        size = parse_integer(text[:idx])
        return size * size
    return parse_integer(text)


def parse_vector(text: str | None, sep: str = VECTOR_DELIMITER) -> np.ndarray | None:
    """
    Parse ``text`` as a float vector.

    Returns an empty vector for ``None`` or blank text and ``None`` if any
    entry is not a number.
    """
    if text is None:
        return np.zeros(0)
    text = text.strip()
    if not text:
        return np.zeros(0)
    try:
        values = [_to_float(entry) for entry in _split(text, sep)]
    except ValueError:
        return None
    return np.asarray(values, dtype=float)


def parse_matrix(text: str | None) -> list[np.ndarray] | None:
    """
    Parse ``text`` as a matrix given as ``;`` separated rows of ``,`` separated entries.

    Returns an empty list for ``None`` or blank text and ``None`` if any entry
    is not a number.
    """
    if text is None:
        return []
    text = text.strip()
    if not text:
        return []
    rows: list[np.ndarray] = []
    for entry in _split(text, MATRIX_DELIMITER):
        row = parse_vector(entry)
        if row is None:
            return None
        rows.append(row)
    return rows


def looks_numeric(text: str) -> bool:
    """True if ``text`` parses as a non-empty number, vector or matrix."""
    rows = parse_matrix(text)
    return rows is not None and len(rows) > 0


def parse_int_vector(text: str | None) -> np.ndarray:
    """Parse ``text`` as an int vector; raises ValueError on malformed entries."""
    if text is None or not text.strip():
        return np.zeros(0, dtype=int)
    return np.asarray([int(entry) for entry in _split(text.strip(), VECTOR_DELIMITER)], dtype=int)


def parse_bool_vector(text: str | None) -> np.ndarray:
    """Parse ``text`` as a bool vector; only ``true`` (any case) is True."""
    if text is None or not text.strip():
        return np.zeros(0, dtype=bool)
    entries = _split(text.strip(), VECTOR_DELIMITER)
    return np.asarray([entry.strip().lower() == "true" for entry in entries], dtype=bool)


def parse_color(text: str | None) -> RGBA | None:
    """
    Parse a color given by name, as ``(g)`` grey level, ``(r,g,b)`` or ``(r,g,b,a)``.

    Components are in [0, 255]. Returns None for malformed input.
    """
    if text is None:
        return None
    text = text.strip().lower()
    if not text:
        return None
    named = COLOR_KEYS.get(text)
    if named is not None:
        return named
    if not (text.startswith("(") and text.endswith(")")):
        return None
    try:
        parts = [int(part) for part in text[1:-1].split(",")]
    except ValueError:
        return None
    if any(not 0 <= part <= 255 for part in parts):
        return None
    if len(parts) == 1:
        grey = parts[0]
        return (grey, grey, grey, 255)
    if len(parts) == 3:
        return (parts[0], parts[1], parts[2], 255)
    if len(parts) == 4:
        return (parts[0], parts[1], parts[2], parts[3])
    return None


__all__ = [
    "VECTOR_DELIMITER",
    "MATRIX_DELIMITER",
    "SPECIES_DELIMITER",
    "COLOR_KEYS",
    "looks_numeric",
    "parse_bool_vector",
    "parse_color",
    "parse_dim",
    "parse_float",
    "parse_int_vector",
    "parse_integer",
    "parse_matrix",
    "parse_vector",
]
