"""Tests for the sample cart session."""

import pytest

from cartkernel.domain import CartStatus
from cartkernel.sample import build_sample_cart


class TestBuildSampleCart:
    """Tests for build_sample_cart."""

    def test_sample_flow(self) -> None:
        """The sample ends completed with the discounted total."""
        cart, total = build_sample_cart()

        assert cart.get_cart_state() is CartStatus.COMPLETED
        assert cart.get_item("1").quantity == 2
        assert total == pytest.approx(2160)
