import logging
import threading
from contextlib import contextmanager

from gradedraft.exceptions import PickInProgress

logger = logging.getLogger(__name__)


class PickMutex:
    """Process-local guard allowing one in-flight pick per user.

    Contention fails fast with ``PickInProgress`` instead of queuing. Only
    suppresses duplicate submissions inside this process; the store's version
    check is what protects the league document itself.
    """

    def __init__(self):
        self._picking = set()
        self._lock = threading.Lock()

    def is_held(self, user_id) -> bool:
        with self._lock:
            return str(user_id) in self._picking

    @contextmanager
    def hold(self, user_id):
        key = str(user_id)
        with self._lock:
            if key in self._picking:
                logger.info("Duplicate pick request from user %s, rejecting", key)
                raise PickInProgress("Pick already in progress")
            self._picking.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._picking.discard(key)
