"""Core subpackage.

- config: INI-backed ConfigManager
- state: thread-safe and file-persisted key/value stores
- errors: error taxonomy shared by all layers
- logging_setup: session-based logging
- worker: the decision-cycle loop thread
"""
from .config import ConfigManager
from .errors import CommitError, ConfigFetchError, PlacekeeperError, SampleError, UnknownColorError
from .state import PersistentStateManager, StateManager

__all__ = [
    "ConfigManager",
    "StateManager",
    "PersistentStateManager",
    "PlacekeeperError",
    "ConfigFetchError",
    "SampleError",
    "CommitError",
    "UnknownColorError",
]
