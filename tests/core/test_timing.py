"""
Tests for the phase Timer.
"""

import pytest

from pylinsolve.core.compute.timing import Timer


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('solve'):
            pass
        with timer.section('solve'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'solve'}
        assert result['solve'] >= 0.0
        assert result['total_seconds'] >= 0.0

    def test_section_recorded_on_error(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('solve'):
                raise ValueError("bad")
        timer.stop()
        assert 'solve' in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()
