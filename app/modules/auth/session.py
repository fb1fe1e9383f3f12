"""
Session loading state machine.

    idle -> loading -> authenticated | anonymous | failed

A loader is created per request and handed around through the FastAPI
dependency that resolves the current user. Transient errors from the
auth backend are retried up to `max_attempts` times, and no new attempt
starts once `timeout_seconds` have passed since loading began. A token
the backend rejects ends in `anonymous` right away.
"""
from enum import Enum
from typing import Any, Callable, Dict, Optional
import logging
import time

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    FAILED = "failed"


class InvalidTokenError(Exception):
    pass


class SessionLoader:
    def __init__(
        self,
        fetch_user: Callable[[str], Optional[Dict[str, Any]]],
        max_attempts: int = 3,
        timeout_seconds: float = 10.0,
        retry_delay_seconds: float = 0.2,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetch_user = fetch_user
        self.max_attempts = max(1, max_attempts)
        self.timeout_seconds = timeout_seconds
        self.retry_delay_seconds = retry_delay_seconds
        self.clock = clock
        self.sleep = sleep
        self.state = SessionState.IDLE
        self.attempts = 0
        self.user: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    def load(self, token: str) -> Optional[Dict[str, Any]]:
        if self.state != SessionState.IDLE:
            return self.user
        self.state = SessionState.LOADING
        deadline = self.clock() + self.timeout_seconds

        while self.attempts < self.max_attempts:
            self.attempts += 1
            try:
                user = self.fetch_user(token)
            except InvalidTokenError as e:
                self.error = str(e)
                self.state = SessionState.ANONYMOUS
                return None
            except Exception as e:
                self.error = str(e)
                logger.warning(f"Session load attempt {self.attempts}/{self.max_attempts} failed: {e}")
                remaining = deadline - self.clock()
                if remaining <= 0:
                    logger.error(f"Session load timed out after {self.attempts} attempt(s)")
                    break
                if self.attempts < self.max_attempts:
                    self.sleep(min(self.retry_delay_seconds * self.attempts, remaining))
                continue

            if not user:
                self.state = SessionState.ANONYMOUS
                return None
            self.user = user
            self.state = SessionState.AUTHENTICATED
            return user

        self.state = SessionState.FAILED
        return None
