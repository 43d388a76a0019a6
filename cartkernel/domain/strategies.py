"""Pluggable calculation strategies.

A strategy is any object with an ``execute(context)`` method that computes
a result from a context without side effects. The selector holds one
strategy at a time and delegates to it.

The reference pricing rules form the closed enum :class:`PricingRule`:

- ``REGULAR``: sum of ``price * quantity`` over all lines.
- ``DISCOUNTED``: the regular sum multiplied by ``1 - discount``.

The discount is not clamped. A value outside ``[0, 1]`` yields a
numerically consistent but negative or inflated total; keeping it in
range is the caller's job.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Protocol, TypeVar

from cartkernel.domain.base import ValueObject
from cartkernel.domain.value_objects import CartItem

C = TypeVar("C", contravariant=True)
R = TypeVar("R", covariant=True)
CtxT = TypeVar("CtxT")
ResT = TypeVar("ResT")


class Strategy(Protocol[C, R]):
    """Anything that can compute a result from a context."""

    def execute(self, context: C) -> R: ...


class StrategySelector(Generic[CtxT, ResT]):
    """Holds an exchangeable strategy and delegates evaluation to it.

    Swapping the strategy never touches results that were already
    returned.
    """

    def __init__(self, strategy: Strategy[CtxT, ResT]) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> Strategy[CtxT, ResT]:
        return self._strategy

    def set_strategy(self, strategy: Strategy[CtxT, ResT]) -> None:
        """Replace the current strategy. Always succeeds."""
        self._strategy = strategy

    def execute(self, context: CtxT) -> ResT:
        """Run the current strategy against ``context``."""
        return self._strategy.execute(context)


# ============================================================================
# Pricing
# ============================================================================


@dataclass(frozen=True)
class PricingContext(ValueObject):
    """Input to a pricing strategy.

    Attributes:
        items: Lines to price.
        discount: Optional discount fraction; ``None`` means no discount.
    """

    items: tuple[CartItem, ...]
    discount: float | None = None

    @classmethod
    def of(cls, items: Sequence[CartItem], discount: float | None = None) -> "PricingContext":
        return cls(items=tuple(items), discount=discount)

    @property
    def subtotal(self) -> float:
        return sum((item.line_total for item in self.items), 0)


class PricingRule(str, Enum):
    """Built-in pricing strategies."""

    REGULAR = "regular"
    DISCOUNTED = "discounted"

    def execute(self, context: PricingContext) -> float:
        """Compute the total for ``context`` under this rule.

        Args:
            context: Lines and optional discount.

        Returns:
            Total price.
        """
        if self is PricingRule.DISCOUNTED:
            discount = context.discount or 0
            return context.subtotal * (1 - discount)
        return context.subtotal
