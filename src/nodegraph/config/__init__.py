"""
Configuration layer for nodegraph.

GraphConfig is the policy object passed to a GraphManager. It is plain
and immutable; load_config builds one from NODEGRAPH_* environment
variables (and optional settings files) through Dynaconf.
"""

from nodegraph.config.settings import GraphConfig
from nodegraph.config.loader import (
    build_settings,
    configure_logging,
    get_config,
    load_config,
)

__all__ = [
    "GraphConfig",
    "build_settings",
    "configure_logging",
    "get_config",
    "load_config",
]
