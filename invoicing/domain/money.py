from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP


def _round_financial(value: float, precision: int = 2) -> float:
    """Round money with consistent half-up behaviour using Decimal."""
    if value == 0:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal('0.' + '0' * precision), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int | float | None) -> float:
    """Stored amounts are integer cents; forms and charts want dollars."""
    return _round_financial(float(cents or 0) / 100, 2)


def dollars_to_cents(dollars: int | float | str) -> int:
    return int(Decimal(str(dollars)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(cents: int | float | None) -> str:
    """
    Render an amount in cents as en-US dollars.

    >>> format_currency(123456)
    '$1,234.56'
    >>> format_currency(-500)
    '-$5.00'
    """
    dollars = Decimal(str(float(cents or 0))) / 100
    dollars = dollars.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(value: str | date) -> str:
    """'2022-12-06' -> 'Dec 6, 2022'"""
    if isinstance(value, str):
        value = datetime.strptime(value[:10], "%Y-%m-%d").date()
    return f"{value:%b} {value.day}, {value.year}"


def generate_y_axis(revenue: list[dict]) -> tuple[list[str], int]:
    """
    Y-axis labels for the revenue chart, in $K steps from the top down to $0K.
    The top label is the highest monthly revenue rounded up to the next 1000.
    """
    highest = max((float(r["revenue"]) for r in revenue), default=0.0)
    top_label = int(math.ceil(highest / 1000) * 1000)
    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label


def page_offset(page: int, per_page: int) -> int:
    page = max(int(page or 1), 1)
    return (page - 1) * per_page


def total_pages(count: int, per_page: int) -> int:
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    return int(math.ceil(int(count) / per_page))


def generate_pagination(current_page: int, total: int) -> list[int | str]:
    """
    Page buttons for the invoices table; "..." marks an elided range.

    Seven pages or fewer are all shown. Otherwise the first and last pages
    stay visible alongside a window around the current one.
    """
    if total <= 7:
        return list(range(1, total + 1))
    if current_page <= 3:
        return [1, 2, 3, "...", total - 1, total]
    if current_page >= total - 2:
        return [1, 2, "...", total - 2, total - 1, total]
    return [1, "...", current_page - 1, current_page, current_page + 1, "...", total]
