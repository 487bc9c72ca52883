# patent_search/api/endpoints/similar.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from patent_search.core.exceptions import PatentSearchError
from patent_search.db.database import get_db
from patent_search.schemas.patent import SimilarityResponse
from patent_search.services.similarity_service import find_similar_patents

router = APIRouter(tags=["similar"])


@router.get("/similar", response_model=SimilarityResponse)
def similar(id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """
    Up to three patents whose abstracts share the most keywords with the given one.
    """
    if id is None or not id.strip():
        raise HTTPException(status_code=400, detail="A patent ID is required")

    try:
        return find_similar_patents(db, id)
    except PatentSearchError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
