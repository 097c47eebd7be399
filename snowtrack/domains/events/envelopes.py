"""Envelope builders for contexts and unstructured events."""

from typing import Any, Optional

from snowtrack.domains.events.schemas import (
    CONTEXTS_SCHEMA,
    SCREEN_VIEW_SCHEMA,
    UNSTRUCT_EVENT_SCHEMA,
)
from snowtrack.domains.events.types import Contexts, Envelope, SelfDescribingJson


def wrap_contexts(entries: Contexts = None) -> Optional[Envelope]:
    """Wrap context entries in the contexts envelope.

    Returns ``None`` for no entries so that no context parameter is emitted at
    all; any entries are always sent in the wrapped-array form.
    """
    if not entries:
        return None
    return Envelope(schema=CONTEXTS_SCHEMA, data=list(entries))


def wrap_unstruct(payload: SelfDescribingJson) -> Envelope:
    """Wrap a self-describing event payload in the unstructured-event envelope.

    The payload is trusted to already carry its own schema and data.
    """
    return Envelope(schema=UNSTRUCT_EVENT_SCHEMA, data=payload)


def screen_view(name: Any, screen_id: Any = None) -> SelfDescribingJson:
    """Build the self-describing payload for a screen view."""
    data = {"name": name}
    if screen_id is not None:
        data["id"] = screen_id
    return {"schema": SCREEN_VIEW_SCHEMA, "data": data}
