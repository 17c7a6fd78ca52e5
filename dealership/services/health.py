# dealership/services/health.py

import logging
import threading

from dealership.core.config import settings
from dealership.core.exceptions import ApiError

logger = logging.getLogger("dealership")


class ConnectionMonitor:
    """Polls the backend at a fixed interval and tracks whether it answers.

    ``is_connected`` is None until the first check has run.
    """

    def __init__(self, client, interval: float | None = None):
        self.client = client
        self.interval = interval if interval is not None else settings.HEALTH_CHECK_INTERVAL_SECONDS
        self.is_connected: bool | None = None

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def check(self) -> bool:
        try:
            self.client.motorcycles.list()
            connected = True
        except ApiError:
            connected = False

        if connected != self.is_connected:
            if connected:
                logger.info(f"Connected to API at {self.client.base_url}")
            else:
                logger.warning(f"No connection to API at {self.client.base_url}")

        self.is_connected = connected
        return connected

    def _run(self):
        self.check()
        while not self._stop_event.wait(self.interval):
            self.check()

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="connection-monitor",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float | None = None):
        self._stop_event.set()

        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
