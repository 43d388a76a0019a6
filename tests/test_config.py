"""Tests for settings and logging setup."""

from collections.abc import Iterator

import pytest
import structlog
from pydantic import ValidationError

from cartkernel.domain import CartItem, ShoppingCart
from cartkernel.infrastructure.config import Settings
from cartkernel.infrastructure.logging import configure_logging


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after a test configures it."""
    yield
    structlog.reset_defaults()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults apply when nothing is set."""
        monkeypatch.delenv("CARTKERNEL_LOG_LEVEL", raising=False)
        monkeypatch.delenv("CARTKERNEL_HISTORY_LIMIT", raising=False)

        config = Settings(_env_file=None)

        assert config.log_level == "INFO"
        assert config.log_json is False
        assert config.history_limit is None

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables with the CARTKERNEL_ prefix are used."""
        monkeypatch.setenv("CARTKERNEL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CARTKERNEL_HISTORY_LIMIT", "10")

        config = Settings(_env_file=None)

        assert config.log_level == "DEBUG"
        assert config.history_limit == 10

    def test_history_limit_must_be_positive(self) -> None:
        """Zero history limit is rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, history_limit=0)

    def test_cart_uses_configured_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Carts fall back to the module settings for their history limit."""
        monkeypatch.setattr(
            "cartkernel.domain.entities.settings",
            Settings(_env_file=None, history_limit=1),
        )
        cart = ShoppingCart()

        for quantity in (1, 2, 3):
            cart.add_item(CartItem(id="1", name="Phone", price=1, quantity=quantity))

        assert cart.undo()
        assert cart.undo() is False
        assert cart.snapshot_count == 2


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_renderer(self, reset_structlog: None) -> None:
        """JSON output ends the processor chain with the JSON renderer."""
        configure_logging(Settings(_env_file=None, log_json=True))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self, reset_structlog: None) -> None:
        """Console output is the default."""
        configure_logging(Settings(_env_file=None))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
