import itertools
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional

DEFAULT_LOGGER_NAME = "cremasim.machine"

_machine_ids = itertools.count(1)


class RingBufferHandler(logging.Handler):
    """Keeps the latest machine events in memory, oldest dropped first."""

    def __init__(self, max_entries: int = 200):
        super().__init__()
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._events.maxlen

    def resize(self, max_entries: int) -> None:
        with self._lock:
            self._events = deque(self._events, maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "source": record.name,
            "details": getattr(record, "details", {}),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str = DEFAULT_LOGGER_NAME, ring_size: int = 200) -> logging.Logger:
    logger = logging.getLogger(name)
    handler = ring_buffer(logger)
    if handler is not None:
        if handler.max_entries != ring_size:
            handler.resize(ring_size)
        return logger
    logger.setLevel(logging.INFO)
    handler = RingBufferHandler(max_entries=ring_size)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def machine_logger(ring_size: int = 200) -> logging.Logger:
    """Create a logger with its own ring buffer for a single machine."""
    return create_logger(f"{DEFAULT_LOGGER_NAME}.{next(_machine_ids)}", ring_size)


def ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    for handler in logger.handlers:
        if isinstance(handler, RingBufferHandler):
            return handler
    return None


def get_events(logger: logging.Logger) -> List[Dict]:
    handler = ring_buffer(logger)
    return handler.get_events() if handler else []
