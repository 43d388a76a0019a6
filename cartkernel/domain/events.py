"""Domain events for the cart aggregate.

Events are delivered synchronously to listeners subscribed through the
cart's change notifier. They describe one applied mutation each, whether
it came from a fresh operation, an undo, a redo or a snapshot restore.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from cartkernel.domain.base import DomainEvent
from cartkernel.domain.value_objects import CartItem


class CartEventType(str, Enum):
    """Kinds of change a cart announces."""

    ITEM_ADDED = "itemAdded"
    ITEM_REMOVED = "itemRemoved"
    QUANTITY_CHANGED = "quantityChanged"
    CLEARED = "cleared"


@dataclass(frozen=True, kw_only=True)
class CartEvent(DomainEvent):
    """Event raised when the cart's item collection changes.

    Attributes:
        type: What happened.
        item: The affected line, if the change concerns a single line.
    """

    aggregate_type: ClassVar[str] = "Cart"

    type: CartEventType
    item: CartItem | None = None

    @property
    def name(self) -> str:
        return self.type.value

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        if self.item is None:
            return {"item": None}
        return {
            "item": {
                "id": self.item.id,
                "name": self.item.name,
                "price": self.item.price,
                "quantity": self.item.quantity,
            }
        }
