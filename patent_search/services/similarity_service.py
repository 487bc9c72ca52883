# patent_search/services/similarity_service.py
"""
"Find similar" by keyword overlap between abstracts.

Every request scans the whole corpus (no index or keyword cache), which is
O(corpus size x abstract length). Fine for the mock dataset, a known
limitation for anything larger.
"""
import logging
import re
from typing import AbstractSet, Iterable, List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from patent_search.core.config import settings
from patent_search.core.exceptions import NotFound, StoreUnavailable
from patent_search.models.model import Patent
from patent_search.schemas.patent import PatentSchema, SimilarPatent, SimilarityResponse

logger = logging.getLogger(__name__)

_STRIPPED_CHARS = re.compile(r"[.,]")
_WHITESPACE = re.compile(r"\s+")

STOP_WORDS = frozenset(settings.SIMILARITY_STOP_WORDS)


def tokenize(text: str) -> Set[str]:
    """Lowercase, drop '.' and ',', split on whitespace runs, deduplicate."""
    cleaned = _STRIPPED_CHARS.sub("", (text or "").lower())
    return {token for token in _WHITESPACE.split(cleaned) if token}


def extract_keywords(
    text: str,
    min_length: int = settings.SIMILARITY_MIN_KEYWORD_LENGTH,
    stop_words: AbstractSet[str] = STOP_WORDS,
) -> Set[str]:
    """Tokens of at least min_length characters that are not stop words."""
    return {t for t in tokenize(text) if len(t) >= min_length and t not in stop_words}


def overlap_score(keywords: AbstractSet[str], candidate_tokens: AbstractSet[str]) -> int:
    return len(keywords & candidate_tokens)


def rank_candidates(
    source_abstract: str,
    candidates: Iterable[Patent],
    top_n: int = settings.SIMILARITY_TOP_N,
    min_score: int = settings.SIMILARITY_MIN_SCORE,
) -> List[Tuple[Patent, int]]:
    """
    Score each candidate against the source abstract and keep the best ones.

    Only the source side is filtered for length and stop words: candidate
    tokens are used as-is. Candidates are ordered by score descending, then
    by id ascending.

    Args:
        source_abstract: Abstract of the patent to compare against
        candidates: Every other patent in the corpus
        top_n: Maximum number of results
        min_score: Minimum number of shared keywords to be kept

    Returns:
        (patent, score) pairs, at most top_n of them
    """
    keywords = extract_keywords(source_abstract)
    if not keywords:
        return []

    scored = []
    for candidate in candidates:
        score = overlap_score(keywords, tokenize(candidate.abstract))
        if score >= min_score:
            scored.append((candidate, score))

    scored.sort(key=lambda pair: (-pair[1], pair[0].id))
    return scored[:top_n]


def _fetch_source_and_candidates(db: Session, patent_id: str) -> Tuple[Optional[Patent], List[Patent]]:
    try:
        source = db.get(Patent, patent_id)
        candidates = db.execute(
            select(Patent).where(Patent.id != patent_id).order_by(Patent.id.asc())
        ).scalars().all()
    except SQLAlchemyError as e:
        logger.exception("Could not load similarity candidates for %s", patent_id)
        raise StoreUnavailable() from e
    return source, list(candidates)


def find_similar_patents(db: Session, patent_id: str, **options) -> SimilarityResponse:
    """
    Find the patents whose abstracts share the most keywords with patent_id.

    Args:
        db: Session on the patent store
        patent_id: Identifier of the source patent
        **options: Overrides passed to rank_candidates (top_n, min_score, ...)

    Raises:
        NotFound: no patent with this identifier
        StoreUnavailable: any failure from the database
    """
    source, candidates = _fetch_source_and_candidates(db, patent_id)
    if source is None:
        raise NotFound("Source patent not found")

    ranked = rank_candidates(source.abstract, candidates, **options)
    logger.info(
        "Similarity for %s: %d candidates scanned, %d kept", patent_id, len(candidates), len(ranked)
    )

    return SimilarityResponse(
        results=[
            SimilarPatent(**PatentSchema.model_validate(patent).model_dump(), similarity=score)
            for patent, score in ranked
        ]
    )
