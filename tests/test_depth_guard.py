"""Tests for core/depth_guard.py.

Tests the DepthGuard context manager and depth_clamp().

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from icumessage.constants import MAX_DEPTH
from icumessage.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from icumessage.diagnostics import DiagnosticCode, RenderError

# ============================================================================
# Construction
# ============================================================================


class TestDepthGuardConstruction:
    """Test DepthGuard construction and defaults."""

    def test_default_construction(self) -> None:
        """DepthGuard uses MAX_DEPTH by default."""
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.current_depth == 0

    def test_max_depth_constant(self) -> None:
        """MAX_DEPTH is set to 100."""
        assert MAX_DEPTH == 100

    def test_post_init_clamps_max_depth(self) -> None:
        """__post_init__ clamps max_depth against recursion limit."""
        limit = sys.getrecursionlimit()
        guard = DepthGuard(max_depth=limit + 1000)

        assert guard.max_depth == limit - 50


# ============================================================================
# Context Manager
# ============================================================================


class TestDepthGuardContextManager:
    """Test enter/exit bookkeeping."""

    def test_enter_exit(self) -> None:
        """Depth rises inside the block and falls after it."""
        guard = DepthGuard(max_depth=3)
        with guard:
            assert guard.depth == 1
            with guard:
                assert guard.depth == 2
        assert guard.depth == 0

    def test_limit_raises(self) -> None:
        """Entering past max_depth raises DepthLimitExceededError."""
        guard = DepthGuard(max_depth=2)
        with guard, guard, pytest.raises(DepthLimitExceededError) as exc_info:
            guard.__enter__()
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.MAX_DEPTH_EXCEEDED

    def test_failed_enter_leaves_depth_unchanged(self) -> None:
        """A rejected enter does not leak depth."""
        guard = DepthGuard(max_depth=1)
        with guard:
            with pytest.raises(DepthLimitExceededError):
                guard.__enter__()
            assert guard.depth == 1
        assert guard.depth == 0

    def test_exit_on_exception(self) -> None:
        """Depth is restored when the block raises."""
        guard = DepthGuard(max_depth=5)
        with pytest.raises(KeyError), guard:
            raise KeyError("x")
        assert guard.depth == 0

    def test_is_render_error(self) -> None:
        """The depth error belongs to the render error family."""
        assert issubclass(DepthLimitExceededError, RenderError)

    @given(limit=st.integers(min_value=1, max_value=40))
    def test_exactly_limit_levels_allowed(self, limit: int) -> None:
        """Exactly max_depth nested enters succeed."""
        guard = DepthGuard(max_depth=limit)
        for _ in range(limit):
            guard.__enter__()
        assert guard.depth == limit
        with pytest.raises(DepthLimitExceededError):
            guard.__enter__()


# ============================================================================
# depth_clamp
# ============================================================================


class TestDepthClamp:
    """Test clamping against the recursion limit."""

    def test_within_limit_unchanged(self) -> None:
        """Small depths pass through."""
        assert depth_clamp(10) == 10

    def test_clamps_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        """Excessive depths are clamped with a warning."""
        limit = sys.getrecursionlimit()
        with caplog.at_level(logging.WARNING):
            result = depth_clamp(limit * 2)
        assert result == limit - 50
        assert any("Clamping" in record.message for record in caplog.records)

    def test_custom_reserve(self) -> None:
        """reserve_frames changes the ceiling."""
        limit = sys.getrecursionlimit()
        assert depth_clamp(limit, reserve_frames=100) == limit - 100
