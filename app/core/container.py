"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. Handlers resolve their collaborators through
the module-level ``container`` so tests can override individual providers.
"""

from dependency_injector import containers, providers

from app.bot.album_aggregator import AlbumAggregator
from app.bot.content_pipeline import ContentPipeline
from app.bot.dispatcher import Dispatcher
from app.bot.link_extractor import LinkExtractor
from app.config import config as app_config
from app.services.settings_store import JsonFileSettingsStore
from app.services.shortener import ShortenerClient


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Configuration()

    # Services
    settings_store = providers.Singleton(JsonFileSettingsStore, db_path=config.storage.db_path)
    shortener = providers.Singleton(ShortenerClient)

    # Bot components
    link_extractor = providers.Singleton(LinkExtractor)
    content_pipeline = providers.Singleton(
        ContentPipeline,
        settings_store=settings_store,
        shortener=shortener,
        extractor=link_extractor,
        powered_by=config.shortener.powered_by,
    )
    dispatcher = providers.Singleton(Dispatcher, settings_store=settings_store)
    album_aggregator = providers.Singleton(
        AlbumAggregator,
        pipeline=content_pipeline,
        dispatcher=dispatcher,
        debounce_seconds=config.album.debounce_seconds,
    )


def create_container() -> Container:
    """Build a container configured from the global application config."""
    container = Container()
    container.config.from_dict(
        {
            "storage": {"db_path": app_config.storage.db_path},
            "shortener": {"powered_by": app_config.shortener.powered_by},
            "album": {"debounce_seconds": app_config.album.debounce_seconds},
        }
    )
    return container


container = create_container()
