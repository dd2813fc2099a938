"""Unit tests for the attempt counter."""

import pytest

from core.domain.exit_codes import ExitCode
from core.errors import AttemptsExhaustedError
from core.services.attempts import AttemptCounter


def test_ticks_up_to_the_limit():
    counter = AttemptCounter(limit=2)

    assert counter.tick() == 1
    assert counter.tick() == 2
    with pytest.raises(AttemptsExhaustedError) as excinfo:
        counter.tick()
    assert excinfo.value.limit == 2


def test_remembers_last_failure():
    counter = AttemptCounter(limit=5)
    counter.fail(ExitCode.LIBRARY_LOAD_FAILED)
    counter.fail(ExitCode.INIT_FAILED)

    assert counter.last_failure is ExitCode.INIT_FAILED
