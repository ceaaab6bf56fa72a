"""Tests for DebouncedSaver."""

import asyncio

import pytest

from tileweaver.core.errors import PersistenceError
from tileweaver.services.persistence import DebouncedSaver, DEFAULT_DEBOUNCE_SECONDS

DELAY = 0.1


class Recorder:
    """Write target that counts calls and can be told to fail."""

    def __init__(self):
        self.calls = 0
        self.fail = False

    def __call__(self):
        if self.fail:
            raise PersistenceError("disk full")
        self.calls += 1


@pytest.fixture
def recorder():
    return Recorder()


class TestDebouncedSaver:
    """Test debounce timing."""

    def test_default_delay(self, recorder):
        """The default quiet period is half a second."""
        assert DEFAULT_DEBOUNCE_SECONDS == 0.5
        assert DebouncedSaver(recorder).delay == 0.5

    def test_negative_delay_rejected(self, recorder):
        with pytest.raises(ValueError):
            DebouncedSaver(recorder, delay=-1)

    @pytest.mark.asyncio
    async def test_single_request_writes_after_delay(self, recorder):
        """One request produces one write after the delay."""
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.request_save()
        assert saver.pending
        assert recorder.calls == 0

        await asyncio.sleep(DELAY * 3)
        assert recorder.calls == 1
        assert not saver.pending
        assert saver.writes == 1

    @pytest.mark.asyncio
    async def test_burst_coalesces_into_one_write(self, recorder):
        """Requests closer together than the delay produce one write."""
        saver = DebouncedSaver(recorder, delay=DELAY)
        for _ in range(10):
            saver.request_save()
            await asyncio.sleep(DELAY / 10)
        assert recorder.calls == 0

        await asyncio.sleep(DELAY * 3)
        assert recorder.calls == 1

    @pytest.mark.asyncio
    async def test_separated_requests_write_twice(self, recorder):
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.request_save()
        await asyncio.sleep(DELAY * 3)
        saver.request_save()
        await asyncio.sleep(DELAY * 3)
        assert recorder.calls == 2

    @pytest.mark.asyncio
    async def test_cancel_discards_pending(self, recorder):
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.request_save()
        assert saver.cancel()
        await asyncio.sleep(DELAY * 3)
        assert recorder.calls == 0
        assert not saver.cancel()

    @pytest.mark.asyncio
    async def test_flush_writes_now(self, recorder):
        """Flush performs the pending write immediately and only once."""
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.request_save()
        assert saver.flush()
        assert recorder.calls == 1

        await asyncio.sleep(DELAY * 3)
        assert recorder.calls == 1

    def test_flush_without_pending_is_noop(self, recorder):
        saver = DebouncedSaver(recorder, delay=DELAY)
        assert not saver.flush()
        assert recorder.calls == 0

    def test_save_now_writes_unconditionally(self, recorder):
        saver = DebouncedSaver(recorder, delay=DELAY)
        assert saver.save_now()
        assert recorder.calls == 1


class TestSaveFailures:
    """Test that write failures are isolated."""

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, recorder):
        """A failed write is counted and reported; the timer loop survives."""
        errors = []
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.on_error(errors.append)
        recorder.fail = True

        saver.request_save()
        await asyncio.sleep(DELAY * 3)

        assert saver.failures == 1
        assert isinstance(saver.last_error, PersistenceError)
        assert len(errors) == 1
        assert recorder.calls == 0

    @pytest.mark.asyncio
    async def test_next_edit_retries(self, recorder):
        """After a failure, the next request writes again."""
        saved = []
        saver = DebouncedSaver(recorder, delay=DELAY)
        saver.on_saved(lambda: saved.append(True))
        recorder.fail = True
        saver.request_save()
        await asyncio.sleep(DELAY * 3)

        recorder.fail = False
        saver.request_save()
        await asyncio.sleep(DELAY * 3)

        assert recorder.calls == 1
        assert saver.last_error is None
        assert saved == [True]
