"""Event domain types.

Context entries and unstructured payloads are opaque self-describing JSON:
the tracker serializes them but never looks inside.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

# A ``{"schema": ..., "data": ...}`` object supplied by the caller.
SelfDescribingJson = Mapping[str, Any]

Contexts = Optional[Sequence[SelfDescribingJson]]


@dataclass(frozen=True)
class Envelope:
    """Fixed-schema wrapper around a payload."""

    schema: str
    data: Any

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape, ``schema`` first."""
        return {"schema": self.schema, "data": self.data}


class TransactionItem(BaseModel):
    """One line item of an e-commerce transaction.

    Each item becomes its own ``ti`` event. ``context`` overrides the
    transaction's contexts for that item's event. Numeric skus, names and
    categories are accepted and sent as their string form.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    sku: str
    price: Union[int, float, str]
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[Union[int, float, str]] = None
    context: Optional[List[Dict[str, Any]]] = Field(
        None, description="Context entries attached to this item's event only"
    )
