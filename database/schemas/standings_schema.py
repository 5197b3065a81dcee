# database/schemas/standings_schema.py
"""
Database models for scraped and computed league tables
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    PrimaryKeyConstraint,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from database.base import Base


class LeagueTable(Base):
    """
    One standings table of a competition page.

    Rows hang off the surrogate id so a table can be replaced wholesale
    without touching its siblings.
    """

    __tablename__ = "league_tables"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ksi_competition_id = Column(String(50), nullable=False)
    season_year = Column(Integer, nullable=False)
    phase_name = Column(String(255), nullable=False, default="")
    table_index = Column(Integer, nullable=False)
    variant = Column(String(20), nullable=True)
    headers = Column(JSON, nullable=True)
    scraped_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "ksi_competition_id",
            "season_year",
            "phase_name",
            "table_index",
            name="uq_league_tables_natural",
        ),
    )


class LeagueTableRow(Base):
    __tablename__ = "league_table_rows"

    league_table_id = Column(
        Integer, ForeignKey("league_tables.id", ondelete="CASCADE"), nullable=False
    )
    row_idx = Column(Integer, nullable=False)

    position = Column(Integer, nullable=True)
    ksi_team_id = Column(String(50), nullable=True)
    team_name = Column(String(255), nullable=False)
    played = Column(Integer, nullable=True)
    wins = Column(Integer, nullable=True)
    draws = Column(Integer, nullable=True)
    losses = Column(Integer, nullable=True)
    goals_for = Column(Integer, nullable=True)
    goals_against = Column(Integer, nullable=True)
    goal_diff = Column(Integer, nullable=True)
    points = Column(Integer, nullable=True)
    raw = Column(JSON, nullable=True)

    __table_args__ = (PrimaryKeyConstraint("league_table_id", "row_idx"),)


class ComputedStanding(Base):
    """
    Table derived from stored match results, replaced per competition season.
    """

    __tablename__ = "computed_standings"

    ksi_competition_id = Column(String(50), nullable=False)
    season_year = Column(Integer, nullable=False)
    ksi_team_id = Column(String(50), nullable=False)

    position = Column(Integer, nullable=False)
    played = Column(Integer, nullable=False, default=0)
    wins = Column(Integer, nullable=False, default=0)
    draws = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    goals_for = Column(Integer, nullable=False, default=0)
    goals_against = Column(Integer, nullable=False, default=0)
    goal_diff = Column(Integer, nullable=False, default=0)
    points = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        PrimaryKeyConstraint("ksi_competition_id", "season_year", "ksi_team_id"),
    )
