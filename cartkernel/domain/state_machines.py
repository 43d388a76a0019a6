"""State machines for the cart aggregate.

Deterministic state machine that defines valid state transitions for
carts, plus the gate that enforces them. Each state is a member of a
closed enum and its legal targets live in a transition table, so the set
of states and their transitions can be checked exhaustively.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

import structlog

from cartkernel.domain.exceptions import InvalidStateTransitionError

logger = structlog.get_logger()

# Type variable for state machine states
S = TypeVar("S", bound=Enum)


# ============================================================================
# Cart State Machine
# ============================================================================


class CartStatus(str, Enum):
    """Cart lifecycle states.

    State diagram:
        EMPTY ◄──────────────────────────────┐
          │  ▲                               │
          │  │ last item removed             │ new order
          ▼  │                               │
        ACTIVE ◄──────┐                      │
          │           │ return to shopping   │
          │ checkout  │                      │
          ▼           │                      │
        CHECKOUT ─────┘                      │
          │                                  │
          │ complete                         │
          ▼                                  │
        COMPLETED ───────────────────────────┘
    """

    EMPTY = "EMPTY"
    ACTIVE = "ACTIVE"
    CHECKOUT = "CHECKOUT"
    COMPLETED = "COMPLETED"

    def can_transition_to(self, target: "CartStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _CART_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["CartStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to, in declaration order.
        """
        allowed = _CART_TRANSITIONS.get(self, set())
        return [status for status in CartStatus if status in allowed]


# Cart state transitions (defined outside enum to avoid Enum restrictions)
_CART_TRANSITIONS: dict[CartStatus, set[CartStatus]] = {
    CartStatus.EMPTY: {CartStatus.ACTIVE},
    CartStatus.ACTIVE: {CartStatus.EMPTY, CartStatus.CHECKOUT},
    CartStatus.CHECKOUT: {CartStatus.ACTIVE, CartStatus.COMPLETED},
    CartStatus.COMPLETED: {CartStatus.EMPTY},
}


# ============================================================================
# State Transition Result
# ============================================================================


@dataclass(frozen=True)
class StateTransition(Generic[S]):
    """Represents an applied state transition.

    Attributes:
        from_state: Previous state.
        to_state: New state.
    """

    from_state: S
    to_state: S


# ============================================================================
# State Gate
# ============================================================================


class StateGate(Generic[S]):
    """Holds the current state and only lets legal transitions through.

    The state type must expose ``can_transition_to`` and
    ``allowed_transitions`` the way :class:`CartStatus` does.

    Example usage:
        gate = StateGate(CartStatus.EMPTY, entity_type="Cart", entity_id="c-1")
        gate.set_state(CartStatus.ACTIVE)
        gate.set_state(CartStatus.COMPLETED)  # raises InvalidStateTransitionError
    """

    def __init__(self, initial: S, entity_type: str = "Entity", entity_id: str = "") -> None:
        """Initialize the gate.

        Args:
            initial: Starting state.
            entity_type: Entity type name used in error messages.
            entity_id: Entity identifier used in error messages.
        """
        self._state = initial
        self._entity_type = entity_type
        self._entity_id = entity_id

    def get_state(self) -> S:
        """Return the current state marker."""
        return self._state

    def can_transition_to(self, target: S) -> bool:
        """Check whether ``target`` is reachable from the current state."""
        return self._state.can_transition_to(target)

    def set_state(self, target: S) -> StateTransition[S]:
        """Move to ``target`` if the current state allows it.

        Args:
            target: Candidate state.

        Returns:
            The applied transition.

        Raises:
            InvalidStateTransitionError: If the transition is not legal.
                The current state is left unchanged.
        """
        current = self._state
        if not current.can_transition_to(target):
            logger.warning(
                "Rejected state transition",
                entity_type=self._entity_type,
                entity_id=self._entity_id,
                from_state=current.value,
                to_state=target.value,
            )
            raise InvalidStateTransitionError(
                entity_type=self._entity_type,
                entity_id=self._entity_id,
                current_state=current.value,
                target_state=target.value,
                allowed_transitions=[s.value for s in current.allowed_transitions()],
            )
        self._state = target
        logger.debug(
            "State transition applied",
            entity_type=self._entity_type,
            entity_id=self._entity_id,
            from_state=current.value,
            to_state=target.value,
        )
        return StateTransition(from_state=current, to_state=target)


# ============================================================================
# State Machine Helpers
# ============================================================================


def validate_cart_transition(
    cart_id: str,
    current_status: CartStatus,
    target_status: CartStatus,
) -> None:
    """Validate and raise if cart state transition is invalid.

    Args:
        cart_id: Cart identifier for error message.
        current_status: Current cart status.
        target_status: Target cart status.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStateTransitionError(
            entity_type="Cart",
            entity_id=cart_id,
            current_state=current_status.value,
            target_state=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )
