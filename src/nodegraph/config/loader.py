from __future__ import annotations

from functools import lru_cache
import logging
from typing import Iterable, Optional

from dynaconf import Dynaconf

from nodegraph.config.constants import DEFAULTS
from nodegraph.config.settings import GraphConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def build_settings(settings_files: Optional[Iterable[str]] = None) -> Dynaconf:
    """
    Dynaconf settings seeded with DEFAULTS; NODEGRAPH_* environment
    variables and any settings files override them.
    """
    settings = Dynaconf(
        envvar_prefix="NODEGRAPH",
        load_dotenv=True,
        settings_files=list(settings_files or []),
    )
    for key, value in DEFAULTS.items():
        if settings.get(key) is None:
            settings.set(key, value)
    return settings


def load_config(settings: Optional[Dynaconf] = None) -> GraphConfig:
    settings = settings if settings is not None else build_settings()

    config = GraphConfig(
        auto_materialize_endpoints=_parse_bool(
            settings.get("AUTO_MATERIALIZE_ENDPOINTS", True)
        ),
        relay_node_updates=_parse_bool(settings.get("RELAY_NODE_UPDATES", True)),
        structure_max_depth=int(settings.get("STRUCTURE_MAX_DEPTH", 0)),
        log_level=str(settings.get("LOG_LEVEL", "WARNING")).upper(),
    )
    logging.getLogger("nodegraph.config").debug("loaded %s", config)
    return config


@lru_cache
def get_config() -> GraphConfig:
    return load_config()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or get_config().log_level).upper(),
        format=LOG_FORMAT,
    )
