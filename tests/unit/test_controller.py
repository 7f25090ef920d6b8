"""
Unit tests for the LevelController.

Tests click accounting, the level state machine, restarts and
score submission.
"""
import random

import numpy as np
import pytest
from minehunt.game import (
    GameState,
    InMemoryScoreReporter,
    InvalidTransition,
    LevelConfig,
    LevelController,
    LEVELS,
)


def _clear_level(controller: LevelController) -> None:
    """Click every mine of the active level."""
    for row, col in controller.board.mine_positions():
        controller.click(row, col)


def _safe_cell(controller: LevelController, zero: bool = False):
    """Find a hidden safe cell, optionally one with count 0."""
    board = controller.board
    mask = ~board.is_mine & ~board.revealed
    if zero:
        mask &= board.neighbor_count == 0
    row, col = np.argwhere(mask)[0]
    return int(row), int(col)


class FailingReporter:
    """Reporter whose storage is always down."""

    def __init__(self) -> None:
        self.calls = 0

    def submit(self, total_clicks: int) -> None:
        self.calls += 1
        raise OSError("storage unavailable")


# ============================================================================
# Initialization Tests
# ============================================================================

class TestControllerInitialization:
    """Test controller creation."""

    def test_starts_playing_first_level(self, controller: LevelController) -> None:
        """New sessions start at level 0 with no clicks."""
        assert controller.state == GameState.PLAYING
        assert controller.level_index == 0
        assert controller.total_clicks == 0
        assert controller.exploded_mines == 0

    def test_board_matches_level(self, controller: LevelController) -> None:
        """Board dimensions and mines follow the active level."""
        board = controller.board
        assert board.is_mine.shape == (8, 8)
        assert int(board.is_mine.sum()) == 5
        assert not board.revealed.any()

    def test_default_levels(self) -> None:
        """Without arguments the default sequence is used."""
        assert LevelController().levels == LEVELS

    def test_empty_levels_rejected(self) -> None:
        """A session needs at least one level."""
        with pytest.raises(ValueError):
            LevelController([])

    def test_start_level_out_of_range(self, controller: LevelController) -> None:
        """Unknown level index raises."""
        with pytest.raises(IndexError):
            controller.start_level(3)


# ============================================================================
# Click Accounting Tests
# ============================================================================

class TestClickAccounting:
    """Test which clicks are counted."""

    def test_safe_click_counts_once(self, controller: LevelController) -> None:
        """A safe click adds exactly one click."""
        snapshot = controller.click(*_safe_cell(controller))
        assert snapshot.total_clicks == 1
        assert snapshot.exploded_mines == 0
        assert snapshot.state == GameState.PLAYING

    def test_mine_click_counts_once(self, controller: LevelController) -> None:
        """A mine click adds one click and one exploded mine."""
        row, col = controller.board.mine_positions()[0]
        snapshot = controller.click(row, col)
        assert snapshot.total_clicks == 1
        assert snapshot.exploded_mines == 1
        assert snapshot.remaining_mines == 4

    def test_cascade_counts_once(self, controller: LevelController) -> None:
        """A cascade is still one click."""
        snapshot = controller.click(*_safe_cell(controller, zero=True))
        assert snapshot.total_clicks == 1
        assert int(snapshot.revealed.sum()) > 1

    def test_repeated_click_is_ignored(self, controller: LevelController) -> None:
        """Clicking a revealed cell changes nothing."""
        cell = _safe_cell(controller)
        controller.click(*cell)
        before = controller.snapshot()
        after = controller.click(*cell)
        assert after.total_clicks == before.total_clicks
        assert np.array_equal(after.revealed, before.revealed)

    def test_click_inside_opened_region_is_ignored(
        self, controller: LevelController
    ) -> None:
        """Any cell opened by a cascade is a no-op afterwards."""
        controller.click(*_safe_cell(controller, zero=True))
        opened = np.argwhere(controller.board.revealed)
        for row, col in opened:
            controller.click(int(row), int(col))
        assert controller.total_clicks == 1

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8)])
    def test_out_of_bounds_click_is_ignored(
        self, controller: LevelController, row: int, col: int
    ) -> None:
        """Clicks off the board are silently dropped."""
        snapshot = controller.click(row, col)
        assert snapshot.total_clicks == 0
        assert not snapshot.revealed.any()

    def test_revealed_cells_never_hide_again(
        self, controller: LevelController
    ) -> None:
        """The revealed grid only grows within a level."""
        previous = controller.board.revealed.copy()
        for row, col in [(r, c) for r in range(8) for c in range(8)][:30]:
            controller.click(row, col)
            if not controller.is_playing:
                break
            current = controller.board.revealed
            assert not (previous & ~current).any()
            previous = current.copy()


# ============================================================================
# Level Progression Tests
# ============================================================================

class TestLevelProgression:
    """Test the level state machine."""

    def test_last_mine_completes_level(self, controller: LevelController) -> None:
        """Finding all 5 mines of level 1 of 3 completes that level only."""
        _clear_level(controller)
        assert controller.state == GameState.LEVEL_COMPLETE
        assert controller.exploded_mines == 5
        assert controller.total_clicks == 5

    def test_no_clicks_after_level_complete(
        self, controller: LevelController
    ) -> None:
        """Completed levels ignore clicks."""
        _clear_level(controller)
        snapshot = controller.click(*_safe_cell(controller))
        assert snapshot.total_clicks == 5
        assert controller.valid_actions() == []

    def test_advance_starts_next_level(self, controller: LevelController) -> None:
        """Advancing keeps clicks and resets the per-level counters."""
        _clear_level(controller)
        controller.click(0, 0)
        snapshot = controller.advance_level()
        assert snapshot.level_index == 1
        assert snapshot.level == LEVELS[1]
        assert snapshot.total_clicks == 5
        assert snapshot.exploded_mines == 0
        assert snapshot.state == GameState.PLAYING
        assert controller.board.is_mine.shape == (10, 10)
        assert not controller.board.revealed.any()

    def test_advance_while_playing_raises(
        self, controller: LevelController
    ) -> None:
        """Advancing needs a cleared level."""
        with pytest.raises(InvalidTransition):
            controller.advance_level()

    def test_advance_after_all_complete_raises(
        self, single_level_controller: LevelController
    ) -> None:
        """There is nothing to advance to after the final clear."""
        _clear_level(single_level_controller)
        with pytest.raises(InvalidTransition):
            single_level_controller.advance_level()

    def test_full_session(
        self,
        controller: LevelController,
        reporter: InMemoryScoreReporter,
    ) -> None:
        """Clearing all three levels submits the grand total once."""
        for _ in range(len(LEVELS) - 1):
            _clear_level(controller)
            controller.advance_level()
        controller.click(*_safe_cell(controller))
        _clear_level(controller)

        assert controller.state == GameState.ALL_COMPLETE
        assert controller.total_clicks == 5 + 7 + 8 + 1
        assert reporter.submissions == [21]


# ============================================================================
# Final Level Tests
# ============================================================================

class TestFinalLevel:
    """Test completion of the last level."""

    def test_single_level_reaches_all_complete(
        self,
        single_level_controller: LevelController,
        reporter: InMemoryScoreReporter,
    ) -> None:
        """Only level cleared with mine clicks alone reports 5 clicks."""
        _clear_level(single_level_controller)
        assert single_level_controller.state == GameState.ALL_COMPLETE
        assert reporter.submissions == [5]

    def test_total_includes_triggering_click(
        self,
        single_level_controller: LevelController,
        reporter: InMemoryScoreReporter,
    ) -> None:
        """Safe clicks before the final mine are part of the total."""
        single_level_controller.click(*_safe_cell(single_level_controller))
        _clear_level(single_level_controller)
        assert single_level_controller.total_clicks == 6
        assert reporter.submissions == [6]

    def test_reporter_failure_keeps_win(self, first_level: LevelConfig) -> None:
        """A failing reporter is logged and the win stands."""
        failing = FailingReporter()
        controller = LevelController(
            (first_level,), reporter=failing, rng=random.Random(1)
        )
        _clear_level(controller)
        assert failing.calls == 1
        assert controller.state == GameState.ALL_COMPLETE
        assert controller.total_clicks == 5

    def test_reporter_failure_is_logged(
        self, first_level: LevelConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The failure shows up in the log with its traceback."""
        controller = LevelController(
            (first_level,), reporter=FailingReporter(), rng=random.Random(1)
        )
        _clear_level(controller)
        assert "Score submission of 5 clicks failed" in caplog.text

    def test_no_reporter_is_fine(self, first_level: LevelConfig) -> None:
        """Sessions can run without a reporter."""
        controller = LevelController((first_level,), rng=random.Random(2))
        _clear_level(controller)
        assert controller.state == GameState.ALL_COMPLETE


# ============================================================================
# Restart Tests
# ============================================================================

class TestRestart:
    """Test full restarts."""

    def test_restart_after_all_complete(
        self, single_level_controller: LevelController
    ) -> None:
        """Restart resets index, clicks and board."""
        _clear_level(single_level_controller)
        old_board = single_level_controller.board

        snapshot = single_level_controller.restart()

        assert snapshot.level_index == 0
        assert snapshot.total_clicks == 0
        assert snapshot.exploded_mines == 0
        assert snapshot.state == GameState.PLAYING
        assert single_level_controller.board is not old_board
        assert not single_level_controller.board.revealed.any()

    def test_restart_mid_session(self, controller: LevelController) -> None:
        """Restart from a later level goes back to the first one."""
        _clear_level(controller)
        controller.advance_level()
        controller.click(0, 0)
        controller.restart()
        assert controller.level_index == 0
        assert controller.total_clicks == 0
        assert controller.board.is_mine.shape == (8, 8)

    def test_restart_does_not_resubmit(
        self,
        single_level_controller: LevelController,
        reporter: InMemoryScoreReporter,
    ) -> None:
        """Each completed session is reported exactly once."""
        _clear_level(single_level_controller)
        single_level_controller.restart()
        _clear_level(single_level_controller)
        assert reporter.submissions == [5, 5]


# ============================================================================
# Snapshot Tests
# ============================================================================

class TestSnapshot:
    """Test snapshot isolation."""

    def test_snapshot_is_a_copy(self, controller: LevelController) -> None:
        """Later clicks do not change an earlier snapshot."""
        snapshot = controller.snapshot()
        controller.click(*_safe_cell(controller))
        assert not snapshot.revealed.any()
        assert np.all(snapshot.observation == -1)
