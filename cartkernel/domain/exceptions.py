"""Domain exceptions.

All domain-level errors that represent business rule violations.
These exceptions are raised by the cart aggregate and the state gate
when invariants are violated or invalid operations are attempted.

Ledger exhaustion and unknown item ids are not errors: undo/redo report
them through a ``False`` return value and item lookups are silent no-ops.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the caller.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when the state gate rejects a transition.

    The gate is left untouched; the caller must catch the error or
    pre-check with ``can_transition_to``.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Cart").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )
        self.from_state = current_state
        self.to_state = target_state
        self.allowed_transitions = allowed


# Short names used by callers that think in terms of the gate.
IllegalTransitionError = InvalidStateTransitionError
IllegalTransition = InvalidStateTransitionError


# ============================================================================
# Cart Errors
# ============================================================================


class CartError(DomainError):
    """Base class for cart-related errors."""

    pass


class InvalidQuantityError(CartError):
    """Raised when an invalid quantity is provided."""

    def __init__(self, quantity: int, reason: str = "Quantity must not be negative") -> None:
        """Initialize invalid quantity error.

        Args:
            quantity: The invalid quantity value.
            reason: Explanation of why the quantity is invalid.
        """
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            details={"quantity": quantity, "reason": reason},
        )


class InvalidPriceError(CartError):
    """Raised when an item is created with a negative price."""

    def __init__(self, price: float, reason: str = "Price must not be negative") -> None:
        super().__init__(
            f"Invalid price {price}: {reason}",
            details={"price": price, "reason": reason},
        )
