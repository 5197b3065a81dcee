# database/repositories/team_repository.py
"""
Team and player repositories.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

TeamRef = Tuple[Optional[str], Optional[str]]


class TeamRepository(BaseRepository):
    """
    Keeps the ``teams`` table ahead of every row that references it.
    """

    table = "teams"
    conflict_columns = ("ksi_team_id",)

    def __init__(self, store, overwrite_names: bool = False):
        """
        Args:
            store: Row store
            overwrite_names: Replace stored names instead of only filling
                empty ones
        """
        super().__init__(store)
        self.overwrite_names = overwrite_names

    def ensure_teams(self, teams: Iterable[TeamRef]) -> int:
        """
        Upsert (team id, name) pairs so foreign keys to them hold.

        Pairs without an id are ignored. A known name is never replaced by
        None; with ``overwrite_names`` off, an existing name is kept too.

        Returns:
            Number of distinct team ids written
        """
        names: Dict[str, Optional[str]] = {}
        for team_id, name in teams:
            if not team_id:
                continue
            if names.get(team_id) is None:
                names[team_id] = name or None

        if not names:
            return 0

        named = [{"ksi_team_id": tid, "name": name} for tid, name in names.items() if name]
        unnamed = [{"ksi_team_id": tid} for tid, name in names.items() if not name]

        if named:
            if self.overwrite_names:
                self.upsert_rows(named)
            else:
                self.upsert_rows(named, only_missing=("name",))
        if unnamed:
            self.upsert_rows(unnamed, update_columns=())

        logger.debug("ensured %d teams", len(names))
        return len(names)

    def names_by_id(self, team_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        ids = sorted({tid for tid in team_ids if tid})
        if not ids:
            return {}
        rows = self.select({"ksi_team_id": ("in", ids)})
        return {row["ksi_team_id"]: row["name"] for row in rows}


class PlayerRepository(BaseRepository):
    table = "players"
    conflict_columns = ("ksi_player_id",)

    def upsert_players(self, players: List[Dict]) -> int:
        """
        Upsert player rows (ksi_player_id, name, birth_year); a None birth
        year does not erase a stored one.
        """
        return self.upsert_rows(players, only_missing=("birth_year", "name"))

    def known_birth_years(self) -> Dict[str, Optional[int]]:
        rows = self.select_all(columns=["ksi_player_id", "birth_year"])
        return {row["ksi_player_id"]: row["birth_year"] for row in rows}
