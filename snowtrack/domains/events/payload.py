"""Parameter encoding for the collector's flat key-value protocol.

Each semantic field maps to one short key and one string value. Nothing in
here raises: values are stringified best-effort, and absent values are
dropped rather than written out empty.
"""

import base64
import json
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence

from pydantic import BaseModel


def encode_value(value: Any) -> Optional[str]:
    """Render one field value, or ``None`` when it should be omitted.

    ``None`` and ``""`` are omitted. Booleans use the collector's ``1``/``0``
    convention; floats are written in plain decimal notation; every other
    value goes through ``str()``.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return format_float(value)
    encoded = value if isinstance(value, str) else str(value)
    if encoded == "":
        return None
    return encoded


def dimensions(width: Any, height: Any) -> str:
    """Encode a width/height pair as ``<width>x<height>``."""
    return f"{width}x{height}"


def format_float(value: float) -> str:
    """Plain decimal form of a float: ``1e16`` becomes ``10000000000000000``.

    Integral floats keep Python's ``.0`` suffix; ``nan`` and ``inf`` use ``str()``.
    """
    text = repr(value)
    if not math.isfinite(value) or ("e" not in text and "E" not in text):
        return text
    return format(Decimal(text), "f")


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    return str(value)


def to_json(value: Any) -> str:
    """Compact JSON text: no whitespace, key order preserved, non-ASCII kept.

    Any ``Mapping`` or ``Sequence`` is serialized as an object or array, and
    pydantic models as their dumped fields; other values fall back to ``str()``.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def base64url(text: str) -> str:
    """URL-safe base64 without padding, as collectors expect for ``cx``/``ue_px``."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


class Payload(Mapping[str, str]):
    """Canonical parameter set for a single event.

    Built fresh per event. Read-only from the outside once assembled; use
    ``as_dict`` to get an independent copy.
    """

    def __init__(self, encode_base64: bool = False) -> None:
        """Initialize an empty parameter set."""
        self._encode_base64 = encode_base64
        self._params: Dict[str, str] = {}

    def add(self, key: str, value: Any) -> None:
        """Add one pair, skipping absent values."""
        encoded = encode_value(value)
        if encoded is not None:
            self._params[key] = encoded

    def add_dict(self, values: Mapping[str, Any]) -> None:
        """Add every pair of ``values``, in order."""
        for key, value in values.items():
            self.add(key, value)

    def add_json(self, key_if_encoded: str, key_if_not_encoded: str, value: Any) -> None:
        """Serialize ``value`` to JSON under the key matching the encoding mode.

        Args:
            key_if_encoded: Key used when base64 encoding is on (e.g. ``cx``).
            key_if_not_encoded: Key used for raw JSON (e.g. ``co``).
            value: Any JSON-serializable structure; ``None`` or empty is skipped.
        """
        if value is None or value == {} or value == []:
            return
        text = to_json(value)
        if self._encode_base64:
            self._params[key_if_encoded] = base64url(text)
        else:
            self._params[key_if_not_encoded] = text

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the parameters."""
        return dict(self._params)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"Payload({self._params!r})"
