"""Shopping cart aggregate.

The cart owns one item collection and routes every mutation through the
same path: the change is wrapped in a command, executed by the command
ledger, and followed by a snapshot of the whole collection. Events are
emitted from inside the commands, so undo and redo announce the changes
they make just like the original operation did.

Two histories track the collection:

- the command ledger, the primary fine-grained history used by
  :meth:`ShoppingCart.undo` and :meth:`ShoppingCart.redo`;
- the snapshot caretaker, the coarse whole-state history used by
  :meth:`ShoppingCart.restore_previous_snapshot` and
  :meth:`ShoppingCart.restore_next_snapshot`.

Every successful ledger operation appends a snapshot, so both histories
advance together. Restoring a snapshot replaces the collection wholesale
and then clears the ledger, because the ledger's stacks no longer
describe the state they would be reverting.

State changes derived from the collection (EMPTY to ACTIVE on the first
item, back to EMPTY when the last one goes) are applied directly to the
state gate and are not commands of their own. Undoing an item change
re-derives the state from the restored collection instead.
"""

from collections.abc import Callable
from uuid import uuid4

import structlog

from cartkernel.domain.commands import Command, CommandLedger
from cartkernel.domain.events import CartEvent, CartEventType
from cartkernel.domain.exceptions import InvalidQuantityError, InvalidStateTransitionError
from cartkernel.domain.notifier import ChangeNotifier
from cartkernel.domain.snapshots import CartSnapshot, SnapshotCaretaker
from cartkernel.domain.state_machines import (
    CartStatus,
    StateGate,
    StateTransition,
    validate_cart_transition,
)
from cartkernel.domain.strategies import PricingContext, PricingRule, Strategy, StrategySelector
from cartkernel.domain.value_objects import CartItem
from cartkernel.infrastructure.config import settings

logger = structlog.get_logger()

CartListener = Callable[[CartEvent], None]
PriceStrategy = Strategy[PricingContext, float]


# ============================================================================
# Cart Commands
# ============================================================================


class AddItemCommand:
    """Insert a line, replacing any line with the same id.

    The line being replaced, if any, is captured at construction so
    revert puts it back instead of just deleting the id.
    """

    def __init__(self, cart: "ShoppingCart", item: CartItem) -> None:
        self._cart = cart
        self._item = item
        self._replaced = cart.get_item(item.id)

    def apply(self) -> None:
        self._cart._put_item(self._item)

    def revert(self) -> None:
        if self._replaced is not None:
            self._cart._put_item(self._replaced)
        else:
            self._cart._delete_item(self._item.id)


class RemoveItemCommand:
    """Remove a line that exists at construction time."""

    def __init__(self, cart: "ShoppingCart", item: CartItem) -> None:
        self._cart = cart
        self._item = item

    def apply(self) -> None:
        self._cart._delete_item(self._item.id)

    def revert(self) -> None:
        self._cart._put_item(self._item)


class UpdateQuantityCommand:
    """Set a line's quantity.

    The previous quantity is read when the command is built, so revert
    restores that exact value no matter what happened in between.
    """

    def __init__(self, cart: "ShoppingCart", item_id: str, quantity: int) -> None:
        self._cart = cart
        self._item_id = item_id
        self._quantity = quantity
        current = cart.get_item(item_id)
        self._previous_quantity = current.quantity if current is not None else 0

    @property
    def previous_quantity(self) -> int:
        return self._previous_quantity

    def apply(self) -> None:
        self._cart._set_quantity(self._item_id, self._quantity)

    def revert(self) -> None:
        self._cart._set_quantity(self._item_id, self._previous_quantity)


class ClearCartCommand:
    """Remove every line at once."""

    def __init__(self, cart: "ShoppingCart") -> None:
        self._cart = cart
        self._items = cart.get_items()

    def apply(self) -> None:
        self._cart._replace_items(())

    def revert(self) -> None:
        self._cart._replace_items(self._items)


# ============================================================================
# Shopping Cart Aggregate
# ============================================================================


class ShoppingCart:
    """Shopping cart aggregate root.

    Example usage:
        cart = ShoppingCart()
        cart.add_item(CartItem(id="1", name="Phone", price=100, quantity=1))
        cart.update_quantity("1", 2)
        cart.undo()                       # quantity back to 1
        cart.redo()                       # quantity 2 again
        cart.calculate_total()            # 200
        cart.set_price_strategy(PricingRule.DISCOUNTED)
        cart.calculate_total(discount=0.1)  # 180.0
        cart.proceed_to_checkout()
        cart.complete()
    """

    def __init__(
        self,
        cart_id: str | None = None,
        price_strategy: PriceStrategy = PricingRule.REGULAR,
        history_limit: int | None = None,
    ) -> None:
        """Create an empty cart.

        Args:
            cart_id: Identifier used in events and logs. Generated if omitted.
            price_strategy: Initial pricing strategy.
            history_limit: Maximum undo depth. Falls back to
                ``settings.history_limit``; unbounded when both are unset.
        """
        self.id = cart_id or str(uuid4())
        limit = history_limit if history_limit is not None else settings.history_limit

        self._items: dict[str, CartItem] = {}
        self._notifier: ChangeNotifier[CartEvent] = ChangeNotifier()
        self._pricing: StrategySelector[PricingContext, float] = StrategySelector(price_strategy)
        self._gate: StateGate[CartStatus] = StateGate(
            CartStatus.EMPTY, entity_type="Cart", entity_id=self.id
        )
        self._ledger = CommandLedger(max_depth=limit)
        # One extra slot for the baseline snapshot of the empty cart.
        self._caretaker: SnapshotCaretaker[CartSnapshot] = SnapshotCaretaker(
            max_depth=limit + 1 if limit is not None else None
        )
        self._save_snapshot()

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def get_item(self, item_id: str) -> CartItem | None:
        """Find a line by id.

        Args:
            item_id: Line identifier.

        Returns:
            CartItem if present, None otherwise.
        """
        return self._items.get(item_id)

    def get_items(self) -> tuple[CartItem, ...]:
        """Get all lines.

        Returns:
            Immutable tuple of the current lines.
        """
        return tuple(self._items.values())

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get_cart_state(self) -> CartStatus:
        """Get the current lifecycle state."""
        return self._gate.get_state()

    @property
    def can_undo(self) -> bool:
        return self._ledger.can_undo

    @property
    def can_redo(self) -> bool:
        return self._ledger.can_redo

    @property
    def snapshot_count(self) -> int:
        """Number of snapshots currently held, baseline included."""
        return len(self._caretaker)

    @property
    def current_snapshot(self) -> CartSnapshot | None:
        return self._caretaker.current

    # -------------------------------------------------------------------------
    # Cart Item Operations
    # -------------------------------------------------------------------------

    def add_item(self, item: CartItem) -> None:
        """Add a line, overwriting any line with the same id.

        An EMPTY cart becomes ACTIVE.

        Args:
            item: Line to add.
        """
        self._run(AddItemCommand(self, item))

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity of an existing line.

        Unknown ids are ignored: nothing is recorded, snapshotted or
        announced. Setting the current quantity again is still recorded
        as a step of history.

        Args:
            item_id: Line identifier.
            quantity: New quantity.

        Raises:
            InvalidQuantityError: If quantity is negative for an existing line.
        """
        if item_id not in self._items:
            logger.debug("Quantity update for unknown item ignored", cart_id=self.id, item_id=item_id)
            return
        if quantity < 0:
            raise InvalidQuantityError(quantity)
        self._run(UpdateQuantityCommand(self, item_id, quantity))

    def remove_item(self, item_id: str) -> None:
        """Remove a line. Unknown ids are ignored.

        Removing the last line moves the cart back to EMPTY when the
        current state allows it.

        Args:
            item_id: Line identifier.
        """
        item = self._items.get(item_id)
        if item is None:
            logger.debug("Removal of unknown item ignored", cart_id=self.id, item_id=item_id)
            return
        self._run(RemoveItemCommand(self, item))

    def clear(self) -> None:
        """Remove every line as a single undoable step."""
        self._run(ClearCartCommand(self))

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def undo(self) -> bool:
        """Revert the last command.

        Returns:
            True if something was undone.
        """
        if not self._ledger.undo():
            return False
        self._save_snapshot()
        logger.debug("Cart undo", cart_id=self.id)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone command.

        Returns:
            True if something was redone.
        """
        if not self._ledger.redo():
            return False
        self._save_snapshot()
        logger.debug("Cart redo", cart_id=self.id)
        return True

    def restore_previous_snapshot(self) -> bool:
        """Jump back to the previous whole-cart snapshot.

        Clears the command ledger on success.

        Returns:
            True if a snapshot was restored, False at the start of history.

        Raises:
            InvalidStateTransitionError: If the state the snapshot implies
                is not reachable from the current state. Nothing changes.
        """
        snapshot = self._caretaker.undo()
        if snapshot is None:
            return False
        try:
            self._apply_snapshot(snapshot)
        except InvalidStateTransitionError:
            self._caretaker.redo()
            raise
        self._ledger.clear()
        return True

    def restore_next_snapshot(self) -> bool:
        """Jump forward to the next whole-cart snapshot.

        Clears the command ledger on success.

        Returns:
            True if a snapshot was restored, False at the end of history.

        Raises:
            InvalidStateTransitionError: If the state the snapshot implies
                is not reachable from the current state. Nothing changes.
        """
        snapshot = self._caretaker.redo()
        if snapshot is None:
            return False
        try:
            self._apply_snapshot(snapshot)
        except InvalidStateTransitionError:
            self._caretaker.undo()
            raise
        self._ledger.clear()
        return True

    def create_snapshot(self) -> CartSnapshot:
        """Capture the current collection."""
        return CartSnapshot.capture(self._items.values())

    def restore_snapshot(self, snapshot: CartSnapshot) -> None:
        """Replace the collection with the snapshot's contents.

        The restored collection is recorded as a new snapshot and the
        command ledger is cleared, so undo never reverts across the jump.

        Args:
            snapshot: Snapshot to restore.

        Raises:
            InvalidStateTransitionError: If the target state is not
                reachable from the current state. Nothing changes.
        """
        self._apply_snapshot(snapshot)
        self._ledger.clear()
        self._save_snapshot()

    def _apply_snapshot(self, snapshot: CartSnapshot) -> None:
        # Target is ACTIVE with lines, EMPTY without; validated before items change.
        current = self._gate.get_state()
        target = CartStatus.EMPTY if snapshot.is_empty else CartStatus.ACTIVE
        if target is not current:
            validate_cart_transition(self.id, current, target)

        self._items = {item.id: item for item in snapshot.items}
        if target is not current:
            self._gate.set_state(target)
        logger.info("Cart snapshot restored", cart_id=self.id, item_count=len(self._items))
        self._emit(CartEventType.CLEARED)

    # -------------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------------

    def set_price_strategy(self, strategy: PriceStrategy) -> None:
        self._pricing.set_strategy(strategy)

    def calculate_total(self, discount: float | None = None) -> float:
        """Price the cart with the current strategy.

        Args:
            discount: Optional discount fraction passed to the strategy.

        Returns:
            Total computed by the strategy.
        """
        return self._pricing.execute(PricingContext.of(self.get_items(), discount))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def proceed_to_checkout(self) -> StateTransition[CartStatus]:
        """Move to CHECKOUT.

        Raises:
            InvalidStateTransitionError: If the cart is not ACTIVE.
        """
        transition = self._gate.set_state(CartStatus.CHECKOUT)
        logger.info("Cart checkout started", cart_id=self.id, item_count=self.item_count)
        return transition

    def return_to_shopping(self) -> StateTransition[CartStatus]:
        """Leave CHECKOUT and go back to ACTIVE.

        Raises:
            InvalidStateTransitionError: If the cart is not in CHECKOUT.
        """
        return self._gate.set_state(CartStatus.ACTIVE)

    def complete(self) -> StateTransition[CartStatus]:
        """Move to COMPLETED.

        Raises:
            InvalidStateTransitionError: If the cart is not in CHECKOUT.
        """
        transition = self._gate.set_state(CartStatus.COMPLETED)
        logger.info("Cart completed", cart_id=self.id)
        return transition

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: CartListener) -> None:
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: CartListener) -> None:
        self._notifier.unsubscribe(listener)

    # -------------------------------------------------------------------------
    # Internals used by commands
    # -------------------------------------------------------------------------

    def _run(self, command: Command) -> None:
        self._ledger.execute(command)
        self._save_snapshot()

    def _save_snapshot(self) -> None:
        self._caretaker.save(self.create_snapshot())

    def _put_item(self, item: CartItem) -> None:
        self._items[item.id] = item
        self._sync_state()
        logger.debug("Cart item added", cart_id=self.id, item_id=item.id, quantity=item.quantity)
        self._emit(CartEventType.ITEM_ADDED, item)

    def _delete_item(self, item_id: str) -> None:
        item = self._items.pop(item_id, None)
        if item is None:
            return
        logger.debug("Cart item removed", cart_id=self.id, item_id=item_id)
        self._emit(CartEventType.ITEM_REMOVED, item)
        self._sync_state()

    def _set_quantity(self, item_id: str, quantity: int) -> None:
        item = self._items.get(item_id)
        if item is None:
            return
        updated = item.with_quantity(quantity)
        self._items[item_id] = updated
        logger.debug(
            "Cart item quantity updated",
            cart_id=self.id,
            item_id=item_id,
            old_quantity=item.quantity,
            new_quantity=quantity,
        )
        self._emit(CartEventType.QUANTITY_CHANGED, updated)

    def _replace_items(self, items: tuple[CartItem, ...]) -> None:
        self._items = {item.id: item for item in items}
        self._sync_state()
        self._emit(CartEventType.CLEARED)

    def _sync_state(self) -> None:
        """Derive EMPTY/ACTIVE from the collection where the gate allows it."""
        state = self._gate.get_state()
        if self._items:
            if state is CartStatus.EMPTY:
                self._gate.set_state(CartStatus.ACTIVE)
        elif state is not CartStatus.EMPTY:
            if self._gate.can_transition_to(CartStatus.EMPTY):
                self._gate.set_state(CartStatus.EMPTY)
            else:
                logger.warning(
                    "Cart emptied but state kept",
                    cart_id=self.id,
                    state=state.value,
                )

    def _emit(self, event_type: CartEventType, item: CartItem | None = None) -> None:
        self._notifier.notify(CartEvent(type=event_type, item=item, aggregate_id=self.id))
