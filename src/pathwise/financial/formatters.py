"""Display formatting for money, percentages and schedule months."""

from datetime import date


def format_currency(value: float) -> str:
    """``-1234.5`` -> ``-$1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """Whole-number percent in, e.g. ``22.456`` -> ``22.5%``."""
    return f"{value:.{decimals}f}%"


def format_compact_currency(value: float) -> str:
    if value >= 1000:
        return f"${value / 1000:.1f}k"
    return format_currency(value)


def add_months(start: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    next_first = date(year + (month == 12), month % 12 + 1, 1)
    last_day = (next_first - date(year, month, 1)).days
    return date(year, month, min(start.day, last_day))


def format_month_label(months_from_now: int, start: date | None = None) -> str:
    """Schedule month as ``Mar 2027``."""
    return add_months(start or date.today(), months_from_now).strftime("%b %Y")
