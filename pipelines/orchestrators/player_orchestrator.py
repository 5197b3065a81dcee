# pipelines/orchestrators/player_orchestrator.py
"""
Player-specific orchestrator: birth years from player profile pages.
"""

import logging

from extractors import extract_birth_year
from logger import RunStats

from .base_orchestrator import BaseOrchestrator
from .orchestrator_config import OrchestratorConfig

logger = logging.getLogger(__name__)


class PlayerOrchestrator(BaseOrchestrator):
    """
    Scrapes profiles of players seen in lineups whose birth year is unknown.
    """

    SCRIPT_NAME = OrchestratorConfig.PLAYER_SCRIPT_NAME

    def scrape_players(self) -> RunStats:
        names = self.repositories.lineups.player_names()
        known = self.repositories.players.known_birth_years()
        todo = sorted(pid for pid in names if known.get(pid) is None)
        logger.info(
            "player ids total=%d | with birth year=%d | to scrape=%d",
            len(names),
            sum(1 for year in known.values() if year is not None),
            len(todo),
        )

        def work(player_id: str, stats: RunStats) -> None:
            url = self.fetcher.urls.player_url(player_id)
            birth_year = extract_birth_year(self.fetcher.fetch_soup(url))

            if birth_year is None:
                logger.info("  no birth year found")
                stats.add("no_birth_year")
            else:
                logger.info("  birth_year=%d", birth_year)
                stats.add("birth_years")

            if self.dry_run:
                return
            self.repositories.players.upsert_players(
                [
                    {
                        "ksi_player_id": player_id,
                        "name": names.get(player_id),
                        "birth_year": birth_year,
                    }
                ]
            )

        return self.run_units(
            "scrape-players", todo, lambda player_id: "player %s" % player_id, work
        )
