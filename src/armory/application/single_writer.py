"""Serializes every ledger mutation in the process.

A mutation and the admission scan it triggers run under the same
(re-entrant) lock, so a sufficiency check is never separated from the
write that depends on it by another request's write.  Handlers built
without an explicit writer all share ``SingleWriter.shared()``.

The lock is per process: separate ``armory`` processes writing the same
data directory are not serialized against each other.
"""

from __future__ import annotations

import threading


class SingleWriter:

    _shared: SingleWriter | None = None
    _shared_guard = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @classmethod
    def shared(cls) -> SingleWriter:
        """The process-wide writer."""
        with cls._shared_guard:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    def __enter__(self) -> SingleWriter:
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()
