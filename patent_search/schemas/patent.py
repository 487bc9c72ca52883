# patent_search/schemas/patent.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from patent_search.models.model import PatentStatus


class PatentSchema(BaseModel):
    """A patent record as sent over the wire (camelCase keys)."""

    id: str
    title: str
    abstract: str
    inventors: List[str] = []
    inventors_text: str = ""
    publication_date: date
    relevance_score: float
    assignee: Optional[str] = None
    status: Optional[PatentStatus] = None
    cpc_codes: List[str] = []
    claims: List[str] = []

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class SimilarPatent(PatentSchema):
    similarity: int


class SearchFilter(BaseModel):
    """
    Typed search parameters. Every dimension is optional and an absent
    field imposes no constraint on the query.
    """

    query: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    inventors: Optional[str] = None
    page: int = 1
    page_size: int = 10

    @field_validator("query", "inventors")
    @classmethod
    def blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        # Whitespace only decides presence; the value is matched untrimmed
        if value is None or not value.strip():
            return None
        return value

    @field_validator("page", "page_size")
    @classmethod
    def positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value

    class Config:
        frozen = True


class SearchResponse(BaseModel):
    results: List[PatentSchema]
    total_results: int = Field(..., alias="totalResults")
    total_pages: int = Field(..., alias="totalPages")
    current_page: int = Field(..., alias="currentPage")

    class Config:
        populate_by_name = True


class SimilarityResponse(BaseModel):
    results: List[SimilarPatent] = []
