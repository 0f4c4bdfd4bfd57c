"""Initialization manager for loading the manual listing in the background."""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum

from .manpage import ManEntry, ManualsError

log = logging.getLogger(__name__)

Listing = List[Tuple[ManEntry, str]]


class InitStage(Enum):
    """Stages of initialization."""
    NOT_STARTED = "not_started"
    LISTING = "listing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class InitStatus:
    """Current initialization status."""
    stage: InitStage
    message: str
    count: int = 0
    error: Optional[str] = None


class InitializationManager:
    """Runs the (slow) apropos listing in a thread and reports its status."""

    def __init__(self):
        self._status = InitStatus(InitStage.NOT_STARTED, "Starting up...")
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._status_callbacks = []
        self._listing: Listing = []

    def add_status_callback(self, callback: Callable[[InitStatus], None]):
        """Add a callback to be notified of status changes."""
        with self._lock:
            self._status_callbacks.append(callback)

    def get_status(self) -> InitStatus:
        """Get current initialization status."""
        with self._lock:
            return self._status

    def get_listing(self) -> Listing:
        """Get the loaded listing (empty until loading completes)."""
        with self._lock:
            return list(self._listing)

    def is_complete(self) -> bool:
        """Check if initialization is complete."""
        with self._lock:
            return self._status.stage == InitStage.COMPLETE

    def is_error(self) -> bool:
        """Check if there was an error."""
        with self._lock:
            return self._status.stage == InitStage.ERROR

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self, timeout: Optional[float] = None):
        """Block until the background load finishes."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _update_status(self, stage: InitStage, message: str, count: int = 0, error: Optional[str] = None):
        """Update status and notify callbacks."""
        with self._lock:
            self._status = InitStatus(stage, message, count, error)
            status = self._status
            callbacks = self._status_callbacks.copy()

        # Call callbacks outside lock to avoid deadlocks
        for callback in callbacks:
            try:
                callback(status)
            except Exception:
                log.exception("Status callback failed")

    def start_initialization(self, load_fn: Callable[[], Listing]):
        """Start loading the listing in a background thread.

        Args:
            load_fn: Function returning (entry, line) pairs for every page.
        """
        if self.is_running():
            return  # Already running

        def run_init():
            """Run initialization in background."""
            self._update_status(InitStage.LISTING, "Listing manual pages...")
            try:
                listing = load_fn()
            except ManualsError as e:
                log.warning("Listing failed: %s", e)
                self._update_status(InitStage.ERROR, "Listing failed", error=str(e))
                return
            except Exception as e:
                log.exception("Listing crashed")
                self._update_status(InitStage.ERROR, "Listing failed", error=str(e))
                return

            with self._lock:
                self._listing = listing
            self._update_status(InitStage.COMPLETE, f"{len(listing)} pages", count=len(listing))

        self._thread = threading.Thread(target=run_init, daemon=True)
        self._thread.start()
