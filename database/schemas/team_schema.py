# database/schemas/team_schema.py
"""
Database models for teams and players
"""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from database.base import Base


class Team(Base):
    """
    Team known by its ksi.is id.

    Created on first reference from a match or lineup; the name is filled
    opportunistically and may stay empty.
    """

    __tablename__ = "teams"

    ksi_team_id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Team(id='{self.ksi_team_id}', name='{self.name}')>"


class Player(Base):
    __tablename__ = "players"

    ksi_player_id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=True)
    birth_year = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Player(id='{self.ksi_player_id}', birth_year={self.birth_year})>"
