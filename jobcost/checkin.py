from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Deque, Dict, Iterable, List

from .core.logging import get_logger
from .errors import UnknownReferenceError
from .mutations import IdAllocator, PrefixedIdAllocator

logger = get_logger(__name__)

MAX_LOG_ENTRIES = 10


class CheckAction(str, Enum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class CheckLogEntry:
    id: str
    worker_id: str
    action: CheckAction
    time: str


class CheckInLog:
    """Session-only check-in/check-out activity, newest first.

    Nothing here feeds the cost figures; it is discarded with the session.
    """

    def __init__(
        self,
        worker_ids: Iterable[str],
        ids: IdAllocator | None = None,
        now: Callable[[], datetime] = datetime.now,
        limit: int = MAX_LOG_ENTRIES,
    ) -> None:
        self.worker_ids = set(worker_ids)
        self.ids = ids or PrefixedIdAllocator()
        self.now = now
        self._entries: Deque[CheckLogEntry] = deque(maxlen=limit)
        self._state: Dict[str, CheckAction] = {}

    def check_in(self, worker_id: str) -> CheckLogEntry:
        return self.toggle(worker_id, CheckAction.IN)

    def check_out(self, worker_id: str) -> CheckLogEntry:
        return self.toggle(worker_id, CheckAction.OUT)

    def toggle(self, worker_id: str, action: CheckAction | str) -> CheckLogEntry:
        if worker_id not in self.worker_ids:
            raise UnknownReferenceError("worker", worker_id)
        action = CheckAction(action)
        entry = CheckLogEntry(
            id=self.ids.allocate("log"),
            worker_id=worker_id,
            action=action,
            time=self.now().strftime("%H:%M"),
        )
        self._entries.appendleft(entry)
        self._state[worker_id] = action
        logger.info("worker_checked", worker_id=worker_id, action=action.value)
        return entry

    def is_checked_in(self, worker_id: str) -> bool:
        return self._state.get(worker_id) == CheckAction.IN

    def entries(self) -> List[CheckLogEntry]:
        return list(self._entries)
