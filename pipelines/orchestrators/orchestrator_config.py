# pipelines/orchestrators/orchestrator_config.py
"""
Configuration constants for orchestrator classes.
Centralizes values shared by the ingestion pipelines.
"""

from typing import Tuple


class OrchestratorConfig:
    """
    Configuration constants for orchestrator operations.
    """

    # ***> Client tags sent in the User-Agent of each pipeline <***
    COMPETITION_SCRIPT_NAME: str = "competitions"
    MATCH_SCRIPT_NAME: str = "matches"
    PLAYER_SCRIPT_NAME: str = "players"

    # ***> Competitions in scope for match, standings and table passes <***
    SCOPE_GENDER: str = "Male"
    SCOPE_CATEGORY: str = "Adults"
    SCOPE_TIERS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)

    # ***> Competition listing category when none is given <***
    DEFAULT_CATEGORY: str = "Adults"

    # ***> Dry-run and debug previews <***
    PREVIEW_ROWS: int = 5
