import enum

from sqlalchemy import Column, Date, Enum, Float, JSON, String, Text
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import validates

from patent_search.db.database import Base


class PatentStatus(str, enum.Enum):
    ACTIVE = "Active"
    PENDING = "Pending"
    EXPIRED = "Expired"


def inventors_search_text(inventors) -> str:
    """Lowercase, comma-joined inventor names used for substring search."""
    return ",".join(inventors or []).lower()


class InventorList(MutableList):
    """
    Inventor names tracked in place: append, remove and friends mark the
    row dirty and refresh the owner's inventors_text immediately.
    """

    def changed(self):
        for state in list(self._parents):
            owner = state.obj()
            if owner is not None:
                owner.inventors_text = inventors_search_text(self)
        super().changed()


class Patent(Base):
    __tablename__ = "patents"

    id = Column(String, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    abstract = Column(Text, nullable=False)
    inventors = Column(InventorList.as_mutable(JSON), nullable=False, default=list)
    # Derived from inventors, never set directly
    inventors_text = Column(String, nullable=False, default="", index=True)
    publication_date = Column(Date, nullable=False, index=True)
    relevance_score = Column(Float, nullable=False, default=0.0, index=True)
    assignee = Column(String, nullable=True)
    status = Column(
        Enum(PatentStatus, name="patent_status", values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    cpc_codes = Column(JSON, nullable=False, default=list)
    claims = Column(JSON, nullable=False, default=list)

    @validates("inventors")
    def _sync_inventors_text(self, key, inventors):
        if not isinstance(inventors, list):
            inventors = list(inventors or [])
        self.inventors_text = inventors_search_text(inventors)
        return inventors

    def __repr__(self):
        return f"<Patent {self.id}>"
