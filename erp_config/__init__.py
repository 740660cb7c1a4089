"""
erp_config -- single public entrypoint for runtime settings.

Responsibility:
    Provides ``get_active_settings()``, the one way services obtain their
    configuration, plus seed-data loading and store construction from
    settings.  YAML parsing lives in ``loader`` and is not called directly.

Architecture position:
    Configuration -- sits above ``erp_kernel`` and ``erp_modules`` (it
    builds their config dataclasses) and below ``erp_services``.  The
    kernel never imports from ``erp_config``.

Failure modes:
    - ``FileNotFoundError`` -- explicit settings path does not exist.
    - ``ValueError`` -- unknown section or key, or an invalid value.

Audit relevance:
    Every ``get_active_settings()`` call emits an ``ERP_CONFIG_TRACE`` log
    entry with the settings checksum and the source file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.orm import sessionmaker

from erp_config.loader import load_settings
from erp_config.schema import ErpSettings, StoreSettings
from erp_config.seed import DEFAULT_SEED_PATH, load_seed, seed_store
from erp_kernel.db.engine import build_engine, create_tables
from erp_kernel.store.base import CollectionStore
from erp_kernel.store.memory import InMemoryStore
from erp_kernel.store.sql import SqlCollectionStore

_logger = logging.getLogger("erp_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults" / "settings.yaml"


def get_active_settings(path: Path | str | None = None) -> ErpSettings:
    """The ONLY public settings entrypoint.

    Args:
        path: A settings YAML file.  ``None`` uses the bundled defaults.
    """
    source = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    settings = load_settings(source)
    _logger.info(
        "ERP_CONFIG_TRACE",
        extra={
            "source": str(source),
            "checksum": settings.checksum,
            "store_backend": settings.store.backend,
        },
    )
    return settings


def build_store(settings: StoreSettings) -> CollectionStore:
    """Construct the configured collection store (tables created if missing)."""
    if settings.backend == "memory":
        return InMemoryStore()

    engine = build_engine(settings.database_url, echo=settings.echo)
    create_tables(engine)
    return SqlCollectionStore(sessionmaker(bind=engine, expire_on_commit=False))


__all__ = [
    "DEFAULT_SEED_PATH",
    "DEFAULT_SETTINGS_PATH",
    "ErpSettings",
    "StoreSettings",
    "build_store",
    "get_active_settings",
    "load_seed",
    "seed_store",
]
