# database/schemas/match_schema.py
"""
Database models for matches, lineups and match events
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    PrimaryKeyConstraint,
    String,
    Text,
)

from database.base import Base


class Match(Base):
    """
    Match row, created by discovery with identifying fields only and
    enriched in place by the overview and report passes.
    """

    __tablename__ = "matches"

    ksi_match_id = Column(String(50), primary_key=True)
    ksi_competition_id = Column(String(50), nullable=False, index=True)
    season_year = Column(Integer, nullable=False, index=True)

    kickoff_at = Column(DateTime(timezone=True), nullable=True)
    venue = Column(String(255), nullable=True)
    home_team_ksi_id = Column(String(50), ForeignKey("teams.ksi_team_id"), nullable=True)
    away_team_ksi_id = Column(String(50), ForeignKey("teams.ksi_team_id"), nullable=True)

    # ***> both null or both set <***
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)

    scraped_overview_at = Column(DateTime(timezone=True), nullable=True)
    scraped_report_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Match(id='{self.ksi_match_id}', season={self.season_year})>"


class MatchLineup(Base):
    __tablename__ = "match_lineups"

    ksi_match_id = Column(String(50), ForeignKey("matches.ksi_match_id"), nullable=False)
    side = Column(String(4), nullable=False)
    squad = Column(String(5), nullable=False)
    lineup_idx = Column(Integer, nullable=False)

    ksi_team_id = Column(String(50), ForeignKey("teams.ksi_team_id"), nullable=True)
    ksi_player_id = Column(String(50), nullable=True)
    player_name = Column(String(255), nullable=False)
    shirt_number = Column(Integer, nullable=True)
    is_gk = Column(Boolean, nullable=True)
    minute_in = Column(Integer, nullable=True)
    minute_out = Column(Integer, nullable=True)
    raw = Column(JSON, nullable=True)

    __table_args__ = (
        PrimaryKeyConstraint("ksi_match_id", "side", "squad", "lineup_idx"),
        Index("ix_match_lineups_player", "ksi_player_id"),
    )


class MatchEvent(Base):
    __tablename__ = "match_events"

    ksi_match_id = Column(String(50), ForeignKey("matches.ksi_match_id"), nullable=False)
    event_idx = Column(Integer, nullable=False)

    minute = Column(Integer, nullable=False)
    stoppage = Column(Integer, nullable=True)
    event_type = Column(String(20), nullable=False)
    ksi_team_id = Column(String(50), ForeignKey("teams.ksi_team_id"), nullable=True)
    ksi_player_id = Column(String(50), nullable=True)
    player_name = Column(String(255), nullable=True)
    sub_on_ksi_player_id = Column(String(50), nullable=True)
    sub_off_ksi_player_id = Column(String(50), nullable=True)
    sub_on_name = Column(String(255), nullable=True)
    sub_off_name = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    raw = Column(JSON, nullable=True)

    __table_args__ = (
        PrimaryKeyConstraint("ksi_match_id", "event_idx"),
        Index("ix_match_events_type", "event_type"),
    )
