# patent_search/api/endpoints/search.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from patent_search.api.params import parse_search_filter
from patent_search.core.exceptions import PatentSearchError
from patent_search.db.database import get_db
from patent_search.schemas.patent import SearchResponse
from patent_search.services.query_builder import search_patents

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
def search(
    query: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    inventors: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    """
    Search patents by keyword, publication date range and inventor name,
    ordered by relevance score.
    """
    try:
        search_filter = parse_search_filter(query, start_date, end_date, inventors, page, page_size)
        return search_patents(db, search_filter)
    except PatentSearchError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
