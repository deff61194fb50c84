from datetime import datetime
from typing import Optional

from babel.dates import format_datetime as _fmt_datetime

DATE_LOCALE = "en_US"

PATTERNS = {
    "short": "MMM dd, y HH:mm",
    "time": "h:mm a",
    "created": "MMMM dd, y 'at' h:mm a",
}


def _ordinal(day: int) -> str:
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_datetime(value: Optional[datetime], style: str = "short") -> str:
    """
    Formata datas para exibição.

    Estilos:
        short:   Jan 05, 2025 18:30
        long:    Sunday, January 5th, 2025
        time:    6:30 PM
        created: January 05, 2025 at 6:30 PM
    """
    if value is None:
        return ""
    if style == "long":
        # CLDR não tem sufixo ordinal para o dia
        weekday_month = _fmt_datetime(value, "EEEE, MMMM", locale=DATE_LOCALE)
        return f"{weekday_month} {_ordinal(value.day)}, {value.year}"
    return _fmt_datetime(value, PATTERNS.get(style, PATTERNS["short"]), locale=DATE_LOCALE)
