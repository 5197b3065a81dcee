"""
Ingestion pipelines: normalisation, backfill, aggregation and the
per-command orchestrators.
"""

from .aggregation import (
    compute_standings,
    likely_xi,
    minutes_from_lineup_row,
    player_season_rows,
    recent_appearances,
    store_computed_standings,
    team_season_summary,
)
from .backfill import MinutePatch, backfill_substitution_minutes
from .normalization import (
    assign_lineup_slots,
    chunked,
    dedupe_by_key,
    records_frame,
    sort_and_index_events,
)
from .orchestrators import (
    CompetitionOrchestrator,
    MatchOrchestrator,
    OrchestratorConfig,
    PlayerOrchestrator,
)

__all__ = [
    "assign_lineup_slots",
    "sort_and_index_events",
    "dedupe_by_key",
    "chunked",
    "records_frame",
    "MinutePatch",
    "backfill_substitution_minutes",
    "minutes_from_lineup_row",
    "player_season_rows",
    "team_season_summary",
    "likely_xi",
    "compute_standings",
    "recent_appearances",
    "store_computed_standings",
    "CompetitionOrchestrator",
    "MatchOrchestrator",
    "PlayerOrchestrator",
    "OrchestratorConfig",
]
