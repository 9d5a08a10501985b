"""
State Management Module
Handles internal state and the persisted key-value store.
"""

import json
import logging
import os
import threading
from pathlib import Path


class StateManager:
    """Thread-safe state manager."""

    def __init__(self):
        self.lock = threading.Lock()
        self._state = {}

    def set(self, key, value):
        """Thread-safe setter for global state."""
        with self.lock:
            self._state[key] = value

    def get(self, key, default=None):
        """Thread-safe getter for global state."""
        with self.lock:
            return self._state.get(key, default)

    def remove(self, key):
        """Thread-safe remover for global state."""
        with self.lock:
            if key in self._state:
                del self._state[key]

    def clear(self):
        """Thread-safe clear for global state."""
        with self.lock:
            self._state.clear()


class PersistentStateManager(StateManager):
    """StateManager that survives restarts by mirroring itself to a JSON file.

    Values must be JSON serialisable. Every mutation rewrites the file via a
    temporary sibling and an atomic replace.
    """

    def __init__(self, path):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logging.getLogger(__name__).warning("state: unreadable store %s, starting empty", self.path)
            return
        if isinstance(data, dict):
            self._state.update(data)

    def _flush(self, state):
        # Caller holds self.lock; memory is only updated once the write succeeded
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(state, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp, self.path)

    def set(self, key, value):
        with self.lock:
            updated = dict(self._state)
            updated[key] = value
            self._flush(updated)
            self._state = updated

    def remove(self, key):
        with self.lock:
            if key in self._state:
                updated = dict(self._state)
                del updated[key]
                self._flush(updated)
                self._state = updated

    def clear(self):
        with self.lock:
            self._flush({})
            self._state = {}
