import threading
from contextlib import contextmanager
from typing import Dict, List


class MatchLocks:
    """One mutex per match id, held for a whole load-validate-persist cycle.

    Entries are reference counted and dropped once nobody holds or waits on
    them, so finished matches do not accumulate.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, List] = {}  # match_id -> [lock, holders]

    @contextmanager
    def hold(self, match_id: str):
        with self._guard:
            entry = self._locks.setdefault(match_id, [threading.Lock(), 0])
            entry[1] += 1
        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[match_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
