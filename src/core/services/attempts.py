"""Attempt counter shared by the validation and session loops."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.domain.exit_codes import ExitCode
from core.errors import AttemptsExhaustedError

logger = logging.getLogger(__name__)


@dataclass
class AttemptCounter:
    """Bounds the retry loop and remembers why the last attempt failed.

    `last_failure` decides the exit code when input closes mid-run.
    """

    limit: int
    used: int = 0
    last_failure: ExitCode = ExitCode.OK

    def tick(self) -> int:
        """Start a new attempt; raise once the ceiling is exceeded."""

        if self.used >= self.limit:
            raise AttemptsExhaustedError(self.limit)
        self.used += 1
        logger.debug("attempt %d/%d", self.used, self.limit)
        return self.used

    def fail(self, cause: ExitCode) -> None:
        self.last_failure = cause
