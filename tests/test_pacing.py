"""
Pacing Tests
============
"""

import pytest

from pixel_brush.worker import JitterSleeper


class TestJitterSleeper:
    """Tests for the jittered delay between pixels."""

    @pytest.mark.asyncio
    async def test_samples_within_bounds(self):
        pacing = JitterSleeper(65.0, 180.0, seed=5)
        samples = [await pacing.sample() for _ in range(200)]

        assert all(65.0 <= s <= 180.0 for s in samples)
        assert len(set(samples)) > 1

    @pytest.mark.asyncio
    async def test_seed_is_reproducible(self):
        a = JitterSleeper(65.0, 180.0, seed=42)
        b = JitterSleeper(65.0, 180.0, seed=42)

        assert [await a.sample() for _ in range(5)] == [await b.sample() for _ in range(5)]

    @pytest.mark.asyncio
    async def test_pause_sleeps_sampled_delay(self, sleep_recorder):
        pacing = JitterSleeper(1.0, 2.0, seed=9, sleep=sleep_recorder)

        delay = await pacing.pause()

        assert sleep_recorder.delays == [delay]
        assert 1.0 <= delay <= 2.0

    @pytest.mark.parametrize("low, high", [(10.0, 5.0), (-1.0, 5.0)])
    def test_invalid_bounds(self, low, high):
        with pytest.raises(ValueError):
            JitterSleeper(low, high)
