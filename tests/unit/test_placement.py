"""Unit tests for workspace offsets and window placement"""

import pytest

from autostarter.common.types import Geometry, ScreenResolution, WorkspaceGrid
from autostarter.session.placement import PlacementEngine, workspaceOffset_compute

SCREEN = ScreenResolution(width=1920, height=1080)


class TestWorkspaceOffsetCompute:
    """Workspace index to viewport offset"""

    @pytest.mark.parametrize("columns", [1, 2, 3, 4])
    @pytest.mark.parametrize("rows", [1, 2, 3])
    def test_offset_formula(self, columns, rows):
        """x uses index mod columns, y uses index div rows"""
        grid = WorkspaceGrid(columns=columns, rows=rows)
        for index in range(12):
            x, y = workspaceOffset_compute(index, grid, SCREEN)
            assert x == (index % columns) * 1920
            assert y == (index // rows) * 1080

    def test_single_row_two_columns(self):
        grid = WorkspaceGrid(columns=2, rows=1)
        assert workspaceOffset_compute(0, grid, SCREEN) == (0, 0)
        assert workspaceOffset_compute(1, grid, SCREEN) == (1920, 1080)

    def test_rows_divide_for_y_not_columns(self):
        """2x3 grid: index 5 is on row 5 // 3 == 1, not 5 // 2 == 2"""
        grid = WorkspaceGrid(columns=2, rows=3)
        assert workspaceOffset_compute(3, grid, SCREEN) == (1920, 1080)
        assert workspaceOffset_compute(5, grid, SCREEN) == (1920, 1080)
        assert workspaceOffset_compute(6, grid, SCREEN) == (0, 2160)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            workspaceOffset_compute(-1, WorkspaceGrid(columns=2, rows=2), SCREEN)


class TestPlacementEngine:
    """Requests sent to the window manager"""

    def test_workspace_origin_move_sends_viewport(self, fake_wm, recording_sleep):
        engine = PlacementEngine(fake_wm, sleep=recording_sleep)

        engine.workspaceOrigin_move(3, WorkspaceGrid(columns=2, rows=2), SCREEN)

        assert fake_wm.viewport_calls == [(1920, 1080)]
        assert recording_sleep.calls == []

    def test_window_place_sets_geometry_then_settles(self, fake_wm, recording_sleep):
        engine = PlacementEngine(fake_wm, settle_seconds=0.5, sleep=recording_sleep)
        geometry = Geometry(x=10, y=20, width=800, height=600)

        engine.window_place(0x400001, geometry)

        assert fake_wm.geometry_calls == [(0x400001, geometry)]
        assert recording_sleep.calls == [0.5]

    def test_window_manager_errors_propagate(self, recording_sleep):
        """Control failures are fatal and not retried"""

        class _FailingWM:
            calls = 0

            def windowGeometry_set(self, window_id, geometry):
                _FailingWM.calls += 1
                raise RuntimeError("BadWindow")

        engine = PlacementEngine(_FailingWM(), sleep=recording_sleep)
        with pytest.raises(RuntimeError, match="BadWindow"):
            engine.window_place(1, Geometry(x=0, y=0, width=1, height=1))
        assert _FailingWM.calls == 1
        assert recording_sleep.calls == []
