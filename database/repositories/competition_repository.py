# database/repositories/competition_repository.py
"""
Competition repository.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from logger import Competition

from .base_repository import BaseRepository


class CompetitionRepository(BaseRepository):
    table = "competitions"
    conflict_columns = ("ksi_competition_id", "season_year")

    def upsert_competitions(self, competitions: Iterable[Competition]) -> int:
        """
        Upsert competitions; the last record seen for a key wins.
        """
        by_key: Dict[tuple, Dict] = {}
        for competition in competitions:
            row = competition.to_row()
            by_key[(row["ksi_competition_id"], row["season_year"])] = row
        return self.upsert_rows(list(by_key.values()))

    def list_competitions(
        self,
        season_from: Optional[int] = None,
        season_to: Optional[int] = None,
        gender: Optional[str] = "Male",
        category: Optional[str] = "Adults",
        tiers: Optional[Sequence[int]] = (1, 2, 3, 4, 5, 6),
        competition_ids: Optional[Sequence[str]] = None,
    ) -> List[Dict]:
        """
        Competitions in scope, ordered by season then tier.
        """
        filters: Dict = {}
        if gender is not None:
            filters["gender"] = gender
        if category is not None:
            filters["category"] = category
        if tiers is not None:
            filters["tier"] = ("in", list(tiers))
        if competition_ids:
            filters["ksi_competition_id"] = ("in", list(competition_ids))
        _season_filter(filters, season_from, season_to)
        return self.select_all(filters, order_by=["season_year", "tier", "ksi_competition_id"])


def _season_filter(filters: Dict, season_from: Optional[int], season_to: Optional[int]):
    """
    Season bounds; one column takes one operator, so a closed range
    becomes an explicit year list.
    """
    if season_from is not None and season_to is not None:
        filters["season_year"] = ("in", list(range(season_from, season_to + 1)))
    elif season_from is not None:
        filters["season_year"] = ("gte", season_from)
    elif season_to is not None:
        filters["season_year"] = ("lte", season_to)
