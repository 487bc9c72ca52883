import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from patent_search.core.exceptions import NotFound, StoreUnavailable
from patent_search.models.model import Patent
from patent_search.schemas.patent import PatentSchema

logger = logging.getLogger(__name__)


def get_patent(db: Session, patent_id: str) -> PatentSchema:
    try:
        patent = db.get(Patent, patent_id)
    except SQLAlchemyError as e:
        logger.exception("Could not load patent %s", patent_id)
        raise StoreUnavailable() from e

    if patent is None:
        raise NotFound("Patent not found")
    return PatentSchema.model_validate(patent)
