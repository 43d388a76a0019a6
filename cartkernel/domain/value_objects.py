"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. Cart lines are modelled as value objects: a quantity
change produces a new ``CartItem`` that replaces the old one, so a line
handed out by the cart or captured in a snapshot can never change under
the holder's feet.
"""

from dataclasses import dataclass, replace
from typing import Self

from cartkernel.domain.base import ValueObject
from cartkernel.domain.exceptions import InvalidPriceError, InvalidQuantityError


@dataclass(frozen=True)
class CartItem(ValueObject):
    """A line in a shopping cart.

    Attributes:
        id: Unique key within the cart.
        name: Display name of the product.
        price: Unit price, never negative.
        quantity: Number of units, never negative. Zero is allowed.
    """

    id: str
    name: str
    price: float
    quantity: int

    def __post_init__(self) -> None:
        """Validate item constraints."""
        if self.price < 0:
            raise InvalidPriceError(self.price)
        if self.quantity < 0:
            raise InvalidQuantityError(self.quantity)

    @property
    def line_total(self) -> float:
        """Calculate total price for this line.

        Returns:
            Unit price multiplied by quantity.
        """
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> Self:
        """Return a copy of this item with a different quantity.

        Args:
            quantity: New quantity.

        Returns:
            New CartItem.

        Raises:
            InvalidQuantityError: If quantity is negative.
        """
        return replace(self, quantity=quantity)
