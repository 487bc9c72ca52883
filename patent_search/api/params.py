# patent_search/api/params.py
from datetime import date
from typing import Optional

from pydantic import ValidationError

from patent_search.core.config import settings
from patent_search.core.exceptions import InvalidParameter
from patent_search.schemas.patent import SearchFilter


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_positive_int(name: str, value: Optional[str], default: int) -> int:
    if _blank(value):
        return default
    try:
        number = int(value.strip(), 10)
    except ValueError:
        raise InvalidParameter(f"{name} must be a positive integer")
    if number < 1:
        raise InvalidParameter(f"{name} must be a positive integer")
    return number


def parse_date(name: str, value: Optional[str]) -> Optional[date]:
    """
    Parse an ISO calendar date. A time component (as in a full ISO
    timestamp) is accepted and dropped.
    """
    if _blank(value):
        return None
    try:
        return date.fromisoformat(value.strip().split("T")[0])
    except ValueError:
        raise InvalidParameter(f"{name} must be an ISO date (YYYY-MM-DD)")


def parse_search_filter(
    query: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    inventors: Optional[str] = None,
    page: Optional[str] = None,
    page_size: Optional[str] = None,
) -> SearchFilter:
    """
    Build a SearchFilter from raw query-string values.

    Raises:
        InvalidParameter: malformed page, pageSize or dates
    """
    try:
        return SearchFilter(
            query=query,
            start_date=parse_date("startDate", start_date),
            end_date=parse_date("endDate", end_date),
            inventors=inventors,
            page=parse_positive_int("page", page, 1),
            page_size=parse_positive_int("pageSize", page_size, settings.DEFAULT_PAGE_SIZE),
        )
    except ValidationError as e:
        raise InvalidParameter(str(e)) from e
