"""
Retry policy for upload jobs.

Attempts are numbered from 1.  After a failed attempt ``n`` the job waits
``backoff[n - 1]`` seconds (the last entry repeats) before attempt
``n + 1``, until ``max_attempts`` is reached.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from django.conf import settings


class JobState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    RETRYING = "retrying"
    PERMANENTLY_FAILED = "permanently_failed"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    backoff: tuple[int, ...] = (10, 30, 60)

    @classmethod
    def from_settings(cls, max_attempts: int | None = None) -> "RetryPolicy":
        return cls(
            max_attempts=max_attempts or getattr(settings, "IMAGE_UPLOAD_MAX_ATTEMPTS", 3),
            backoff=tuple(getattr(settings, "IMAGE_UPLOAD_BACKOFF", (10, 30, 60))),
        )

    @property
    def max_retries(self) -> int:
        return max(self.max_attempts - 1, 0)

    def countdown(self, attempt: int) -> int:
        if not self.backoff:
            return 0
        index = min(max(attempt, 1), len(self.backoff)) - 1
        return self.backoff[index]

    def next_state(self, attempt: int, failed: bool) -> JobState:
        if not failed:
            return JobState.SUCCEEDED
        if attempt < self.max_attempts:
            return JobState.RETRYING
        return JobState.PERMANENTLY_FAILED
