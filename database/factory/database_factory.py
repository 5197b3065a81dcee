# database/factory/database_factory.py
"""
Database factory using the configuration system.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from configurations.settings_database import DatabaseConfig

from ..core.database_manager import DatabaseManager
from ..repositories import (
    CompetitionRepository,
    ComputedStandingsRepository,
    EventRepository,
    LineupRepository,
    MatchRepository,
    PlayerRepository,
    StandingsRepository,
    TeamRepository,
)
from ..store import SqlAlchemyTableStore, TableStore


@dataclass
class Repositories:
    """
    Every repository of one run, sharing a single store.
    """

    store: TableStore
    teams: TeamRepository
    players: PlayerRepository
    competitions: CompetitionRepository
    matches: MatchRepository
    lineups: LineupRepository
    events: EventRepository
    standings: StandingsRepository
    computed_standings: ComputedStandingsRepository

    @classmethod
    def build(cls, store: TableStore, overwrite_team_names: bool = False) -> "Repositories":
        teams = TeamRepository(store, overwrite_names=overwrite_team_names)
        return cls(
            store=store,
            teams=teams,
            players=PlayerRepository(store),
            competitions=CompetitionRepository(store),
            matches=MatchRepository(store, teams),
            lineups=LineupRepository(store, teams),
            events=EventRepository(store, teams),
            standings=StandingsRepository(store),
            computed_standings=ComputedStandingsRepository(store),
        )


class DatabaseFactory:
    """
    Creates and caches database managers per database URL.
    """

    _manager_instances: Dict[str, DatabaseManager] = {}

    @classmethod
    def create_database_manager(
        cls, config: DatabaseConfig, create_tables: bool = True
    ) -> DatabaseManager:
        """
        Create or retrieve a database manager for a configuration.

        In-memory SQLite databases are never cached: each one is private
        to its manager.
        """
        cache_key = config.database_url
        manager = None if config.database_url.endswith(":memory:") else cls._manager_instances.get(cache_key)

        if manager is None:
            manager = DatabaseManager.from_config(config)
            if create_tables:
                manager.create_tables()
            if not manager.is_memory:
                cls._manager_instances[cache_key] = manager
        return manager

    @classmethod
    def create_table_store(
        cls,
        config: DatabaseConfig,
        batch_size: int = 500,
        page_size: int = 1000,
    ) -> SqlAlchemyTableStore:
        return SqlAlchemyTableStore(
            cls.create_database_manager(config), batch_size=batch_size, page_size=page_size
        )

    @classmethod
    def create_repositories(cls, scraper_config, store: Optional[TableStore] = None) -> Repositories:
        """
        Repositories for a ScraperConfig, on its database unless a store
        is supplied.
        """
        store = store or cls.create_table_store(
            scraper_config.database,
            batch_size=scraper_config.batch_size,
            page_size=scraper_config.select_page_size,
        )
        return Repositories.build(store, scraper_config.overwrite_team_names)

    @classmethod
    def clear_instances(cls) -> None:
        for manager in cls._manager_instances.values():
            manager.dispose()
        cls._manager_instances.clear()
