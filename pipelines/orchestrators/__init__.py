# pipelines/orchestrators/__init__.py
"""
Orchestrator module initialization.
Exports main orchestrator classes.
"""

from .base_orchestrator import BaseOrchestrator
from .competition_orchestrator import CompetitionOrchestrator
from .match_orchestrator import MatchOrchestrator
from .orchestrator_config import OrchestratorConfig
from .player_orchestrator import PlayerOrchestrator

__all__ = [
    "BaseOrchestrator",
    "CompetitionOrchestrator",
    "MatchOrchestrator",
    "PlayerOrchestrator",
    "OrchestratorConfig",
]
