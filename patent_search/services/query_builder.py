# patent_search/services/query_builder.py
"""
Filter-and-paginate search over the patents table.

The count and the page are read back-to-back in the same session
transaction. That is a best-effort snapshot: under READ COMMITTED a
concurrent write can land between the two reads. Set
DATABASE_ISOLATION_LEVEL to REPEATABLE READ (or stronger) for a strict one.
"""
import logging
import math
from typing import List

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from patent_search.core.exceptions import InvalidParameter, StoreUnavailable
from patent_search.models.model import Patent
from patent_search.schemas.patent import PatentSchema, SearchFilter, SearchResponse

logger = logging.getLogger(__name__)

# Relevance first, then identifier so that ties have a stable order
ORDERING = (Patent.relevance_score.desc(), Patent.id.asc())


def build_conditions(search_filter: SearchFilter) -> List[ColumnElement]:
    """
    Translate a SearchFilter into the list of SQL conditions to AND together.
    Absent fields contribute nothing.
    """
    conditions: List[ColumnElement] = []

    if search_filter.query:
        conditions.append(
            or_(
                Patent.title.icontains(search_filter.query, autoescape=True),
                Patent.abstract.icontains(search_filter.query, autoescape=True),
            )
        )
    if search_filter.start_date is not None:
        conditions.append(Patent.publication_date >= search_filter.start_date)
    if search_filter.end_date is not None:
        conditions.append(Patent.publication_date <= search_filter.end_date)
    if search_filter.inventors:
        conditions.append(
            Patent.inventors_text.icontains(search_filter.inventors.lower(), autoescape=True)
        )

    return conditions


def build_predicate(search_filter: SearchFilter):
    """The AND of all conditions, or None when the filter is empty."""
    conditions = build_conditions(search_filter)
    return and_(*conditions) if conditions else None


def page_offset(page: int, page_size: int) -> int:
    if page < 1:
        raise InvalidParameter("page must be a positive integer")
    if page_size < 1:
        raise InvalidParameter("pageSize must be a positive integer")
    return (page - 1) * page_size


def total_pages(total_results: int, page_size: int) -> int:
    if page_size < 1:
        raise InvalidParameter("pageSize must be a positive integer")
    return math.ceil(total_results / page_size)


def search_patents(db: Session, search_filter: SearchFilter) -> SearchResponse:
    """
    Run a filtered, paginated search ordered by relevance score descending.

    Args:
        db: Session on the patent store
        search_filter: Typed search parameters

    Returns:
        The page of patents together with the pagination metadata

    Raises:
        InvalidParameter: non-positive page or page size
        StoreUnavailable: any failure from the database
    """
    offset = page_offset(search_filter.page, search_filter.page_size)
    predicate = build_predicate(search_filter)

    count_stmt = select(func.count()).select_from(Patent)
    page_stmt = select(Patent).order_by(*ORDERING).offset(offset).limit(search_filter.page_size)
    if predicate is not None:
        count_stmt = count_stmt.where(predicate)
        page_stmt = page_stmt.where(predicate)

    try:
        total_results = db.execute(count_stmt).scalar_one()
        patents = db.execute(page_stmt).scalars().all()
    except SQLAlchemyError as e:
        logger.exception("Patent search failed for %s", search_filter)
        raise StoreUnavailable() from e

    logger.info(
        "Search %s matched %d patents (page %d, %d returned)",
        search_filter, total_results, search_filter.page, len(patents),
    )

    return SearchResponse(
        results=[PatentSchema.model_validate(p) for p in patents],
        total_results=total_results,
        total_pages=total_pages(total_results, search_filter.page_size),
        current_page=search_filter.page,
    )
