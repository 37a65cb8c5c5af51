"""
Identifier sources for scanned documents.

Any zero-argument callable returning a string can be passed to the scanner.
"""

import itertools
import threading
import uuid


class UuidIdGenerator:
    """Random UUID4 identifiers; the default."""

    def __call__(self) -> str:
        return str(uuid.uuid4())


class CounterIdGenerator:
    """Monotonic, thread-safe counter ids such as 'doc-1', 'doc-2'."""

    def __init__(self, prefix: str = "doc-", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}{value}"
