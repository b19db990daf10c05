"""
Script Studio Storage Package

History and account stores. Both backends implement the ScriptStore and
UserStore protocols from ``scriptstudio.core.abc``.
"""

from typing import Tuple

from ..config.schema import StudioConfig
from .errors import DuplicateUserError
from .memory import InMemoryScriptStore, InMemoryUserStore
from .sqlite import SQLiteScriptStore, SQLiteUserStore

def create_stores(config: StudioConfig) -> Tuple[object, object]:
    """Build (script_store, user_store) for the configured history backend."""
    if config.history.backend == "sqlite":
        return SQLiteScriptStore(config.history.path), SQLiteUserStore(config.history.path)
    return InMemoryScriptStore(), InMemoryUserStore()

__all__ = [
    'DuplicateUserError',
    'InMemoryScriptStore',
    'InMemoryUserStore',
    'SQLiteScriptStore',
    'SQLiteUserStore',
    'create_stores',
]
