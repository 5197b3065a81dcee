# database/schemas/competition_schema.py
"""
Database model for competitions
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, PrimaryKeyConstraint, String
from sqlalchemy.sql import func

from database.base import Base


class Competition(Base):
    """
    One competition in one season.

    The source reuses a competition id across seasons for some cups, so
    the key is (ksi_competition_id, season_year).
    """

    __tablename__ = "competitions"

    ksi_competition_id = Column(String(50), nullable=False)
    season_year = Column(Integer, nullable=False)

    name = Column(String(255), nullable=False, doc="Display name, draft marker removed")
    gender = Column(String(20), nullable=True)
    category = Column(String(50), nullable=True, doc="Age category, e.g. 'Adults'")
    tier = Column(Integer, nullable=True, doc="Men's division rank, 1 = top flight")

    # ***> a phase (e.g. championship round) points at its parent <***
    is_phase = Column(Boolean, nullable=False, default=False)
    parent_competition_id = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (PrimaryKeyConstraint("ksi_competition_id", "season_year"),)

    def __repr__(self) -> str:
        return (
            f"<Competition(id='{self.ksi_competition_id}', "
            f"season={self.season_year}, tier={self.tier})>"
        )
