"""Tests for the UniformEngine base class.

This module tests:
- next_long word order and unsigned widening
- raw() zero rejection and scaling
- next_double() boundary rejection and the exact affine mapping
- next_float() narrowing and rejection of 1.0f
- choose()/next_int_below() ranges, degenerate ranges and argument checks
- Determinism under replay
- clock_seed()
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import numpy as np
import pytest

from core.protocols import IntSource, UniformSource
from core.rng import UniformEngine, clock_seed
from core.types import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from engines.replay import ReplayEngine


class CountingEngine(UniformEngine):
    """Always returns the same word and counts draws."""

    def __init__(self, word: int) -> None:
        self.word = word
        self.calls = 0

    def next_int(self) -> int:
        self.calls += 1
        return self.word


# =============================================================================
# Tests for the abstract surface
# =============================================================================


class TestAbstractSurface:
    """Tests for the abstract primitive and protocols."""

    def test_cannot_instantiate_without_primitive(self) -> None:
        """UniformEngine itself is abstract."""
        with pytest.raises(TypeError):
            UniformEngine()  # type: ignore[abstract]

    def test_subclass_satisfies_protocols(self) -> None:
        """Any subclass provides the full derived surface."""
        engine = CountingEngine(1)
        assert isinstance(engine, IntSource)
        assert isinstance(engine, UniformSource)


# =============================================================================
# Tests for next_long
# =============================================================================


class TestNextLong:
    """Tests for 64-bit concatenation."""

    def test_first_word_is_high_word(self) -> None:
        """Words 1, 2 concatenate to 0x0000000100000002."""
        engine = ReplayEngine([0x00000001, 0x00000002])
        assert engine.next_long() == 0x0000000100000002
        assert engine.position == 2

    def test_low_word_is_not_sign_extended(self) -> None:
        """A negative low word only fills the low 32 bits."""
        assert ReplayEngine([0, -1]).next_long() == 0xFFFFFFFF

    def test_full_pattern(self) -> None:
        assert ReplayEngine([0x12345678, 0x9ABCDEF0]).next_long() == 0x123456789ABCDEF0

    def test_high_bit_makes_result_negative(self) -> None:
        assert ReplayEngine([0xFFFFFFFF, 0]).next_long() == -(2**32)
        assert ReplayEngine([0x80000000, 0]).next_long() == INT64_MIN
        assert ReplayEngine([-1, -1]).next_long() == -1

    def test_extremes(self) -> None:
        assert ReplayEngine([0x7FFFFFFF, 0xFFFFFFFF]).next_long() == INT64_MAX

    def test_signed_and_unsigned_words_agree(self) -> None:
        """Primitive words are used by bit pattern only."""
        signed = ReplayEngine([-2, -3]).next_long()
        unsigned = ReplayEngine([0xFFFFFFFE, 0xFFFFFFFD]).next_long()
        assert signed == unsigned


# =============================================================================
# Tests for raw
# =============================================================================


class TestRaw:
    """Tests for the 32-bit open-interval double."""

    def test_zero_word_is_discarded(self) -> None:
        """A zero draw is skipped; the next word decides the result."""
        engine = ReplayEngine([0, 1])
        assert engine.raw() == 2.0**-32
        assert engine.position == 2

    def test_several_zero_words_are_discarded(self) -> None:
        engine = ReplayEngine([0, 0, 0, INT32_MIN])
        assert engine.raw() == 0.5
        assert engine.position == 4

    def test_reference_mapping(self) -> None:
        assert ReplayEngine([INT32_MAX]).raw() == (2**31 - 1) / 2**32
        assert ReplayEngine([INT32_MIN]).raw() == 0.5
        assert ReplayEngine([INT32_MIN + 1]).raw() == (2**31 + 1) / 2**32
        assert ReplayEngine([2]).raw() == 2 / 2**32
        assert ReplayEngine([-2]).raw() == (2**32 - 2) / 2**32

    def test_max_word_stays_below_one(self) -> None:
        value = ReplayEngine([-1]).raw()
        assert value == (2**32 - 1) / 2**32
        assert value < 1.0

    def test_single_draw_for_nonzero_word(self) -> None:
        engine = CountingEngine(12345)
        engine.raw()
        assert engine.calls == 1

    def test_zero_redraw_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="core.rng"):
            ReplayEngine([0, 5]).raw()
        assert "drew zero" in caplog.text


# =============================================================================
# Tests for next_double
# =============================================================================


class TestNextDouble:
    """Tests for the 64-bit open-interval double."""

    def test_small_longs_map_to_half(self) -> None:
        """Longs near zero all round to 0.5."""
        for words in ([0, 1], [-1, -1], [0, 2], [-1, -2]):
            assert ReplayEngine(words).next_double() == 0.5

    def test_int64_max_is_rejected(self) -> None:
        """INT64_MAX rounds to 1.0 and is redrawn."""
        engine = ReplayEngine([0x7FFFFFFF, 0xFFFFFFFF, 0, 1])
        value = engine.next_double()
        assert value == 0.5
        assert value < 1.0
        assert engine.position == 4

    def test_int64_min_is_rejected(self) -> None:
        """INT64_MIN maps to 0.0 and is redrawn."""
        engine = ReplayEngine([0x80000000, 0, 0xFFFFFFFF, 0xFFFFFFFF])
        value = engine.next_double()
        assert value == 0.5
        assert value > 0.0
        assert engine.position == 4

    def test_near_extremes_are_rejected(self) -> None:
        """INT64_MAX - 1 and INT64_MIN + 1 also round onto the boundaries."""
        engine = ReplayEngine([0x7FFFFFFF, 0xFFFFFFFE, 0x80000000, 1, 0, 1])
        assert engine.next_double() == 0.5
        assert engine.position == 6

    def test_exact_affine_formula(self) -> None:
        """The result is (float(long) - float(INT64_MIN)) * 2**-64."""
        words = [0x12345678, 0x9ABCDEF0]
        long_value = ReplayEngine(words).next_long()
        expected = (float(long_value) + 2.0**63) * 2.0**-64
        assert ReplayEngine(words).next_double() == expected

    def test_offset_rounding(self) -> None:
        """2 + 100000 is rounded to a multiple of 2048 once offset by 2**63."""
        engine = ReplayEngine([0, 100002])
        assert engine.next_double() == 0.5 + 100352 * 2.0**-64

    def test_largest_accepted_values_are_inside(self) -> None:
        engine = ReplayEngine([0x7FFFFFFF, 0xFFFF0000])
        value = engine.next_double()
        assert 0.0 < value < 1.0

    def test_boundary_redraw_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="core.rng"):
            ReplayEngine([0x80000000, 0, 0, 1]).next_double()
        assert "next_double() rounded to 0.0" in caplog.text


# =============================================================================
# Tests for next_float
# =============================================================================


class TestNextFloat:
    """Tests for the single-precision open-interval value."""

    def test_one_f_is_rejected(self) -> None:
        """raw(-1) narrows to 1.0f; the draw is repeated."""
        engine = ReplayEngine([-1, 1])
        value = engine.next_float()
        assert value == 2.0**-32
        assert engine.position == 2

    def test_result_is_float32_representable(self) -> None:
        value = ReplayEngine([0x12345678]).next_float()
        assert float(np.float32(value)) == value
        assert 0.0 < value < 1.0

    def test_narrowing_rounds_to_nearest(self) -> None:
        """INT32_MAX maps just below 0.5 and narrows to exactly 0.5."""
        assert ReplayEngine([INT32_MAX]).next_float() == 0.5
        assert ReplayEngine([INT32_MIN]).next_float() == 0.5

    def test_zero_words_are_still_discarded(self) -> None:
        engine = ReplayEngine([0, -1, 0, 1])
        assert engine.next_float() == 2.0**-32
        assert engine.position == 4

    def test_returns_python_float(self) -> None:
        assert type(ReplayEngine([7]).next_float()) is float


# =============================================================================
# Tests for choose / next_int_below
# =============================================================================


class TestChoose:
    """Tests for inclusive integer ranges."""

    @pytest.mark.parametrize("x", [-5, 0, INT32_MAX, INT32_MIN])
    def test_degenerate_range_returns_lo(self, x: int) -> None:
        engine = ReplayEngine([1, -1, INT32_MIN, INT32_MAX], cycle=True)
        for _ in range(8):
            assert engine.choose(x, x) == x

    def test_die_extremes(self) -> None:
        """The smallest word gives lo, the largest gives hi, never hi + 1."""
        assert ReplayEngine([1]).choose(1, 6) == 1
        assert ReplayEngine([-1]).choose(1, 6) == 6
        assert ReplayEngine([INT32_MIN]).choose(1, 6) == 4

    def test_full_int32_range_does_not_overflow(self) -> None:
        """choose(INT32_MIN, INT32_MAX) maps word w to INT32_MIN + unsigned(w)."""
        assert ReplayEngine([1]).choose(INT32_MIN, INT32_MAX) == INT32_MIN + 1
        assert ReplayEngine([-1]).choose(INT32_MIN, INT32_MAX) == INT32_MAX
        assert ReplayEngine([INT32_MIN]).choose(INT32_MIN, INT32_MAX) == 0

    def test_single_argument_starts_at_one(self) -> None:
        assert ReplayEngine([1]).choose(6) == 1
        assert ReplayEngine([-1]).choose(6) == 6

    def test_negative_range(self) -> None:
        assert ReplayEngine([1]).choose(-10, -3) == -10
        assert ReplayEngine([-1]).choose(-10, -3) == -3

    def test_uses_one_draw(self) -> None:
        engine = CountingEngine(99)
        engine.choose(1, 100)
        assert engine.calls == 1

    def test_lo_greater_than_hi_raises(self) -> None:
        with pytest.raises(ValueError, match="lo <= hi"):
            ReplayEngine([1]).choose(5, 4)

    def test_single_argument_below_one_raises(self) -> None:
        with pytest.raises(ValueError, match="lo <= hi"):
            ReplayEngine([1]).choose(0)

    def test_limits_outside_int32_raise(self) -> None:
        with pytest.raises(ValueError, match="32-bit"):
            ReplayEngine([1]).choose(0, INT32_MAX + 1)
        with pytest.raises(ValueError, match="32-bit"):
            ReplayEngine([1]).choose(INT32_MIN - 1, 0)

    def test_frequencies_of_die(self) -> None:
        """Every face of choose(1, 6) appears close to 1/6 of the time."""
        words = np.random.default_rng(0).integers(INT32_MIN, INT32_MAX, size=60000, endpoint=True)
        engine = ReplayEngine((int(w) for w in words), cycle=True)
        values = [engine.choose(1, 6) for _ in range(60000)]
        counts = np.bincount(values, minlength=7)
        assert counts[0] == 0
        assert set(values) == {1, 2, 3, 4, 5, 6}
        for face in range(1, 7):
            assert abs(counts[face] / 60000 - 1 / 6) < 0.01


class TestNextIntBelow:
    """Tests for zero-based bounded draws."""

    def test_bound_one_is_always_zero(self) -> None:
        engine = ReplayEngine([1, -1, INT32_MIN, INT32_MAX], cycle=True)
        for _ in range(8):
            assert engine.next_int_below(1) == 0

    def test_range_is_zero_to_bound_minus_one(self) -> None:
        assert ReplayEngine([1]).next_int_below(10) == 0
        assert ReplayEngine([-1]).next_int_below(10) == 9
        assert ReplayEngine([INT32_MIN]).next_int_below(10) == 5

    def test_bound_below_one_raises(self) -> None:
        with pytest.raises(ValueError, match="bound must be >= 1"):
            ReplayEngine([1]).next_int_below(0)


# =============================================================================
# Determinism
# =============================================================================


class TestDeterminism:
    """Derived operations depend only on the primitive stream."""

    def test_replay_reproduces_every_operation(self) -> None:
        words = [0, 7, -1, INT32_MIN, 0x7FFFFFFF, 0xFFFFFFFF, 12345, -999, 1, 2]
        engine = ReplayEngine(words, cycle=True)

        def draw_all() -> list[object]:
            return [
                engine.next_int(),
                engine.next_long(),
                engine.raw(),
                engine.next_double(),
                engine.next_float(),
                engine.choose(-3, 3),
                engine.choose(10),
                engine.next_int_below(4),
            ]

        first = draw_all()
        engine.reset()
        second = draw_all()
        assert first == second


# =============================================================================
# clock_seed
# =============================================================================


class TestClockSeed:
    """Tests for the wall-clock seed helper."""

    def test_epoch_is_zero(self) -> None:
        assert clock_seed(datetime(1970, 1, 1, tzinfo=UTC)) == 0

    def test_milliseconds(self) -> None:
        when = datetime(2001, 9, 9, 1, 46, 40, 123000, tzinfo=UTC)
        assert clock_seed(when) == 1_000_000_000_123

    def test_current_time_is_monotone_enough(self) -> None:
        before = clock_seed()
        after = clock_seed()
        assert 0 < before <= after
