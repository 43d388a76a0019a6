"""Sample cart session.

Walks a cart through the full flow: two items added, a quantity change
undone and redone, a discounted total, checkout and completion.
"""

import structlog

from cartkernel.domain import CartEvent, CartItem, PricingRule, ShoppingCart

logger = structlog.get_logger()


def log_cart_event(event: CartEvent) -> None:
    """Listener that writes every cart event to the log."""
    logger.info("Cart changed", **event.to_dict())


def build_sample_cart() -> tuple[ShoppingCart, float]:
    """Run the sample session.

    Returns:
        The completed cart and the total computed with a 10% discount.
    """
    cart = ShoppingCart()

    cart.add_item(CartItem(id="1", name="Phone", price=1000, quantity=1))
    cart.add_item(CartItem(id="2", name="Headphones", price=200, quantity=2))

    cart.subscribe(log_cart_event)

    cart.update_quantity("1", 2)
    cart.undo()
    cart.redo()

    cart.set_price_strategy(PricingRule.DISCOUNTED)
    total = cart.calculate_total(0.1)

    cart.proceed_to_checkout()
    cart.complete()

    return cart, total


if __name__ == "__main__":
    from cartkernel.infrastructure.logging import configure_logging

    configure_logging()
    _, sample_total = build_sample_cart()
    logger.info("Sample cart completed", total=sample_total)
