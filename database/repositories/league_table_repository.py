# database/repositories/league_table_repository.py
"""
Scraped and computed standings repositories.

Standings are only meaningful as a complete set, so tables are replaced
wholesale: parent row upserted, its rows deleted, the new set inserted.
A run killed between the delete and the insert leaves that table empty
until the next run.
"""

import logging
from typing import Dict, List, Sequence

from exceptions import DatabaseOperationError
from logger import StandingsTable

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class StandingsRepository(BaseRepository):
    table = "league_tables"
    conflict_columns = ("ksi_competition_id", "season_year", "phase_name", "table_index")

    rows_table = "league_table_rows"

    def replace_table(self, competition_id: str, season_year: int, standings: StandingsTable) -> int:
        """
        Store one standings table, replacing whatever rows it had.

        Returns:
            Number of rows inserted
        """
        key = {
            "ksi_competition_id": competition_id,
            "season_year": season_year,
            "phase_name": standings.phase_name or "",
            "table_index": standings.table_index,
        }
        self.upsert_rows(
            [{**key, "variant": standings.variant, "headers": list(standings.headers)}]
        )

        parents = self.select(key, columns=["id"])
        if not parents:
            raise DatabaseOperationError("league table row missing after upsert", table=self.table)
        table_id = parents[0]["id"]

        self.store.delete(self.rows_table, {"league_table_id": table_id})

        rows = []
        for row_idx, row in enumerate(standings.rows):
            payload = row.to_row()
            payload.update({"league_table_id": table_id, "row_idx": row_idx})
            rows.append(payload)
        inserted = self.store.insert(self.rows_table, rows) if rows else 0

        logger.debug(
            "league table %s/%s #%d '%s': %d rows",
            competition_id,
            season_year,
            standings.table_index,
            standings.phase_name,
            inserted,
        )
        return inserted

    def tables_for(self, competition_id: str, season_year: int) -> List[Dict]:
        return self.select(
            {"ksi_competition_id": competition_id, "season_year": season_year},
            order_by=["table_index"],
        )

    def rows_for(self, table_id: int) -> List[Dict]:
        return self.store.select(
            self.rows_table, {"league_table_id": table_id}, order_by=["row_idx"]
        )


class ComputedStandingsRepository(BaseRepository):
    table = "computed_standings"
    conflict_columns = ("ksi_competition_id", "season_year", "ksi_team_id")

    def replace(self, competition_id: str, season_year: int, rows: Sequence[Dict]) -> int:
        self.store.delete(
            self.table, {"ksi_competition_id": competition_id, "season_year": season_year}
        )
        if not rows:
            return 0
        return self.upsert_rows(
            [
                {**row, "ksi_competition_id": competition_id, "season_year": season_year}
                for row in rows
            ]
        )

    def for_competition(self, competition_id: str, season_year: int) -> List[Dict]:
        return self.select(
            {"ksi_competition_id": competition_id, "season_year": season_year},
            order_by=["position"],
        )
