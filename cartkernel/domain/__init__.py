"""Domain layer - cart aggregate and the behavioral blocks it is built from.

This module exports:

- **Aggregate**: ShoppingCart and its commands
- **Value Objects**: CartItem, CartSnapshot, PricingContext
- **History**: CommandLedger (per-command undo/redo) and SnapshotCaretaker (whole-state history)
- **State Machine**: CartStatus and the StateGate that enforces it
- **Strategies**: StrategySelector and the PricingRule strategies
- **Notification**: ChangeNotifier and CartEvent
- **Exceptions**: Domain-specific errors

Example usage:
    from cartkernel.domain import CartItem, PricingRule, ShoppingCart

    cart = ShoppingCart()
    cart.add_item(CartItem(id="1", name="Phone", price=100, quantity=1))
    cart.update_quantity("1", 2)
    cart.undo()
    print(cart.calculate_total())  # 100
"""

# Base classes
from cartkernel.domain.base import DomainEvent, ValueObject

# History
from cartkernel.domain.commands import Command, CommandLedger

# Aggregate
from cartkernel.domain.entities import (
    AddItemCommand,
    ClearCartCommand,
    RemoveItemCommand,
    ShoppingCart,
    UpdateQuantityCommand,
)

# Domain Events
from cartkernel.domain.events import CartEvent, CartEventType

# Exceptions
from cartkernel.domain.exceptions import (
    CartError,
    DomainError,
    IllegalTransition,
    IllegalTransitionError,
    InvalidPriceError,
    InvalidQuantityError,
    InvalidStateTransitionError,
)

# Notification
from cartkernel.domain.notifier import ChangeNotifier
from cartkernel.domain.snapshots import CartSnapshot, SnapshotCaretaker

# State Machines
from cartkernel.domain.state_machines import (
    CartStatus,
    StateGate,
    StateTransition,
    validate_cart_transition,
)

# Strategies
from cartkernel.domain.strategies import PricingContext, PricingRule, Strategy, StrategySelector

# Value Objects
from cartkernel.domain.value_objects import CartItem

__all__ = [
    # Base
    "DomainEvent",
    "ValueObject",
    # Aggregate
    "ShoppingCart",
    "AddItemCommand",
    "ClearCartCommand",
    "RemoveItemCommand",
    "UpdateQuantityCommand",
    # Value Objects
    "CartItem",
    "CartSnapshot",
    "PricingContext",
    # History
    "Command",
    "CommandLedger",
    "SnapshotCaretaker",
    # State Machines
    "CartStatus",
    "StateGate",
    "StateTransition",
    "validate_cart_transition",
    # Strategies
    "PricingRule",
    "Strategy",
    "StrategySelector",
    # Notification
    "CartEvent",
    "CartEventType",
    "ChangeNotifier",
    # Exceptions
    "CartError",
    "DomainError",
    "IllegalTransition",
    "IllegalTransitionError",
    "InvalidPriceError",
    "InvalidQuantityError",
    "InvalidStateTransitionError",
]
