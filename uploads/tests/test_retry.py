import pytest
from django.test import override_settings

from uploads.retry import JobState, RetryPolicy


def test_backoff_per_attempt():
    policy = RetryPolicy(max_attempts=3, backoff=(10, 30, 60))
    assert [policy.countdown(n) for n in (1, 2, 3, 4)] == [10, 30, 60, 60]


@pytest.mark.parametrize(
    "attempt, failed, expected",
    [
        (1, False, JobState.SUCCEEDED),
        (1, True, JobState.RETRYING),
        (2, True, JobState.RETRYING),
        (3, True, JobState.PERMANENTLY_FAILED),
        (3, False, JobState.SUCCEEDED),
    ],
)
def test_state_transitions(attempt, failed, expected):
    assert RetryPolicy(max_attempts=3).next_state(attempt, failed) is expected


@override_settings(IMAGE_UPLOAD_MAX_ATTEMPTS=5, IMAGE_UPLOAD_BACKOFF=[1, 2])
def test_policy_from_settings():
    policy = RetryPolicy.from_settings()
    assert policy.max_attempts == 5
    assert policy.max_retries == 4
    assert policy.backoff == (1, 2)
    assert RetryPolicy.from_settings(max_attempts=2).max_attempts == 2
