"""Event assembly: typed tracking calls to canonical parameter sets.

Each ``build_*`` method validates its required fields, encodes the event's
own fields, embeds the context envelope, and stamps tracker identity, the
subject snapshot, a fresh event id and the assembly time. A transaction
returns several independent parameter sets, one per dispatch.
"""

import time
import uuid
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from snowtrack.core.exceptions import InvalidArgumentError
from snowtrack.domains.events import envelopes
from snowtrack.domains.events.payload import Payload
from snowtrack.domains.events.subject import Subject
from snowtrack.domains.events.types import Contexts, SelfDescribingJson, TransactionItem
from snowtrack.version import TRACKER_VERSION


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_event_id() -> str:
    return str(uuid.uuid4())


def _require(field_name: str, value: Any) -> None:
    if value is None or value == "":
        raise InvalidArgumentError(field_name)


class EventAssembler:
    """Builds parameter sets for every supported event type."""

    def __init__(
        self,
        subject: Subject,
        namespace: Optional[str] = None,
        app_id: Optional[str] = None,
        encode_base64: bool = False,
        clock: Callable[[], int] = _now_ms,
        id_factory: Callable[[], str] = _new_event_id,
    ) -> None:
        """Initialize with tracker identity and the subject to snapshot.

        Args:
            subject: Mutable subject state, read once per event.
            namespace: Tracker namespace (``tna``).
            app_id: Application id (``aid``).
            encode_base64: Send JSON fields base64-encoded (``cx``/``ue_px``).
            clock: Returns the current time in epoch milliseconds.
            id_factory: Returns a fresh event id.
        """
        self._subject = subject
        self._namespace = namespace
        self._app_id = app_id
        self._encode_base64 = encode_base64
        self._clock = clock
        self._id_factory = id_factory

    # ------------------------------------------------------------------
    # Event types
    # ------------------------------------------------------------------

    def build_page_view(
        self,
        url: str,
        page_title: Optional[str] = None,
        referrer: Optional[str] = None,
        contexts: Contexts = None,
    ) -> Payload:
        """Build a page view (``e=pv``); ``url`` is required."""
        _require("url", url)
        payload = self._new_payload("pv")
        payload.add("url", url)
        payload.add("page", page_title)
        payload.add("refr", referrer)
        return self._complete(payload, contexts)

    def build_struct_event(
        self,
        category: str,
        action: str,
        label: Optional[str] = None,
        property_: Optional[str] = None,
        value: Optional[Union[int, float]] = None,
        contexts: Contexts = None,
    ) -> Payload:
        """Build a structured event (``e=se``); category and action are required."""
        _require("category", category)
        _require("action", action)
        payload = self._new_payload("se")
        payload.add("se_ca", category)
        payload.add("se_ac", action)
        payload.add("se_la", label)
        payload.add("se_pr", property_)
        payload.add("se_va", value)
        return self._complete(payload, contexts)

    def build_unstruct_event(
        self,
        event_json: SelfDescribingJson,
        contexts: Contexts = None,
    ) -> Payload:
        """Build a self-describing event; the payload is sent as ``ue_pr``."""
        if not event_json:
            raise InvalidArgumentError("event_json")
        payload = self._new_payload("ue")
        payload.add_json("ue_px", "ue_pr", envelopes.wrap_unstruct(event_json).to_dict())
        return self._complete(payload, contexts)

    def build_screen_view(
        self,
        name: str,
        screen_id: Optional[str] = None,
        contexts: Contexts = None,
    ) -> Payload:
        """Build a screen view as a self-describing event; ``name`` is required."""
        _require("name", name)
        return self.build_unstruct_event(envelopes.screen_view(name, screen_id), contexts)

    def build_ecommerce_transaction_item(
        self,
        order_id: str,
        sku: str,
        name: Optional[str],
        category: Optional[str],
        price: Union[int, float, str],
        quantity: Optional[Union[int, float, str]] = None,
        currency: Optional[str] = None,
        contexts: Contexts = None,
    ) -> Payload:
        """Build one transaction item (``e=ti``); order id, sku and price are required."""
        _require("order_id", order_id)
        _require("sku", sku)
        _require("price", price)
        payload = self._new_payload("ti")
        payload.add("ti_id", order_id)
        payload.add("ti_sk", sku)
        payload.add("ti_nm", name)
        payload.add("ti_ca", category)
        payload.add("ti_pr", price)
        payload.add("ti_qu", quantity)
        payload.add("ti_cu", currency)
        return self._complete(payload, contexts)

    def build_ecommerce_transaction(
        self,
        order_id: str,
        affiliation: Optional[str],
        total_value: Union[int, float, str],
        tax_value: Optional[Union[int, float, str]] = None,
        shipping: Optional[Union[int, float, str]] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        country: Optional[str] = None,
        currency: Optional[str] = None,
        items: Optional[Iterable[Union[TransactionItem, Mapping[str, Any]]]] = None,
        contexts: Contexts = None,
    ) -> List[Payload]:
        """Build the transaction event followed by one item event per item.

        Every item is validated before any parameter set is built, so a bad
        item means nothing gets sent.

        Returns:
            ``[transaction, item_1, ..., item_n]``, each with its own event id
            and timestamp.
        """
        _require("order_id", order_id)
        _require("total_value", total_value)
        parsed_items = [self._parse_item(index, item) for index, item in enumerate(items or [])]

        payload = self._new_payload("tr")
        payload.add("tr_id", order_id)
        payload.add("tr_af", affiliation)
        payload.add("tr_tt", total_value)
        payload.add("tr_tx", tax_value)
        payload.add("tr_sh", shipping)
        payload.add("tr_ci", city)
        payload.add("tr_st", state)
        payload.add("tr_co", country)
        payload.add("tr_cu", currency)
        payloads = [self._complete(payload, contexts)]

        for item in parsed_items:
            payloads.append(
                self.build_ecommerce_transaction_item(
                    order_id,
                    item.sku,
                    item.name,
                    item.category,
                    item.price,
                    item.quantity,
                    currency,
                    item.context if item.context is not None else contexts,
                )
            )
        return payloads

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_item(
        index: int, item: Union[TransactionItem, Mapping[str, Any]]
    ) -> TransactionItem:
        if isinstance(item, TransactionItem):
            parsed = item
        else:
            try:
                parsed = TransactionItem.model_validate(item)
            except ValidationError as e:
                raise InvalidArgumentError(
                    f"items[{index}]", f"Invalid transaction item at index {index}: {e}"
                ) from e
        _require(f"items[{index}].sku", parsed.sku)
        _require(f"items[{index}].price", parsed.price)
        return parsed

    def _new_payload(self, event_type: str) -> Payload:
        payload = Payload(encode_base64=self._encode_base64)
        payload.add("e", event_type)
        return payload

    def _complete(self, payload: Payload, contexts: Contexts) -> Payload:
        """Attach contexts, identity, subject snapshot, event id and timestamp."""
        context_envelope = envelopes.wrap_contexts(contexts)
        if context_envelope is not None:
            payload.add_json("cx", "co", context_envelope.to_dict())
        payload.add("tv", TRACKER_VERSION)
        payload.add("tna", self._namespace)
        payload.add("aid", self._app_id)
        payload.add_dict(self._subject.snapshot())
        payload.add("eid", self._id_factory())
        payload.add("dtm", self._clock())
        return payload
