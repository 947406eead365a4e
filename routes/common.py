from datetime import date
from typing import Optional

from services.errors import ValidationError
from utils.dates import normalize_date


def resolve_today(as_of_date: Optional[str]) -> date:
    """
    Reference date for a request.

    ``as_of_date`` (YYYY-MM-DD or MM/DD/YYYY) overrides the server's calendar
    date; the services never read the clock themselves.
    """
    if not as_of_date:
        return date.today()
    try:
        return normalize_date(as_of_date)
    except ValueError as exc:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.") from exc
