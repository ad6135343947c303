"""Value formatting shared by the order templates."""

from datetime import datetime

from orders import config


def format_amount(amount) -> str:
    """Render an amount as currency, e.g. ``R$ 150.50``."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        value = 0.0
    return f"{config.currency_symbol()} {value:,.2f}"


def format_timestamp(value) -> str:
    """Render an ISO timestamp for humans; ``N/A`` when absent."""
    if not value:
        return "N/A"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%d/%m/%Y %H:%M UTC")
