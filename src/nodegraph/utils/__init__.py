"""
Utility functions for nodegraph.

Low-level helpers for treating sync and async backends alike.
No domain logic should live here.
"""

from nodegraph.utils.helpers import collect, iterate, resolve

__all__ = [
    "collect",
    "iterate",
    "resolve",
]
