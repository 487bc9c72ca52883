# patent_search/api/endpoints/patents.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from patent_search.core.exceptions import PatentSearchError
from patent_search.db.database import get_db
from patent_search.schemas.patent import PatentSchema
from patent_search.services.patent_service import get_patent

router = APIRouter(prefix="/patents", tags=["patents"])


@router.get("/{patent_id}", response_model=PatentSchema)
def read_patent(patent_id: str, db: Session = Depends(get_db)):
    try:
        return get_patent(db, patent_id)
    except PatentSearchError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
