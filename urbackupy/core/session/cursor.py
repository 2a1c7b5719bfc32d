"""
Per-client recency cursor for live log retrieval.
"""
import asyncio
from typing import Dict, Iterable, Optional


class LogCursor:
    """
    Remembers the last delivered live-log entry id per client.

    The cursor has its own lock, independent of the login gate, so a
    read-modify-write cycle (read last id, fetch, store new last id)
    never races with a concurrent fetch for the same client.

    Example:
        >>> cursor = LogCursor()
        >>> async with cursor.lock:
        ...     last_id = cursor.get(3)
        ...     cursor.advance(3, [10, 11, 12])
    """

    def __init__(self):
        """Initialize an empty cursor."""
        self._last_ids: Dict[int, int] = {}
        self.lock = asyncio.Lock()

    def get(self, client_id: int) -> int:
        """Return the last seen entry id for a client (0 if none)."""
        return self._last_ids.get(client_id, 0)

    def advance(self, client_id: int, entry_ids: Iterable[int]) -> Optional[int]:
        """
        Move the cursor forward to the highest id in ``entry_ids``.

        The cursor never moves backwards and is untouched when
        ``entry_ids`` is empty.

        Returns:
            New cursor value, or None if unchanged
        """
        highest = max(entry_ids, default=None)
        if highest is None or highest <= self.get(client_id):
            return None
        self._last_ids[client_id] = highest
        return highest

    def reset(self, client_id: Optional[int] = None) -> None:
        """Forget the cursor for one client, or for all clients."""
        if client_id is None:
            self._last_ids.clear()
        else:
            self._last_ids.pop(client_id, None)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._last_ids

    def __len__(self) -> int:
        return len(self._last_ids)
