"""Tests for window and frame tracking."""

import pytest
from selenium.common.exceptions import NoSuchWindowException, TimeoutException

from testing_driver.constants import ROOT_FRAME
from testing_driver.context import BrowsingContext, ContextKind, ContextTracker
from _utils import FakeDriver, FakeElement


FRAME = "//iframe[@id='editor']"


class TestContextTracker:
    """Test ContextTracker against a fake remote session."""

    def setup_method(self):
        self.ctx = ContextTracker()

    def test_fresh_tracker_is_at_window_root(self):
        assert self.ctx.window_count == -1
        assert not self.ctx.in_frame
        assert self.ctx.frame_locator is None
        assert self.ctx.current == BrowsingContext(kind=ContextKind.WINDOW, window_index=0)

    def test_first_sync_focuses_the_only_window(self):
        driver = FakeDriver(handles=["main"])
        self.ctx.ensure_active_tab(driver)

        assert driver.switch_to.calls == [("window", "main")]
        assert self.ctx.window_count == 1
        assert self.ctx.window_index == 0

    def test_unchanged_window_count_does_not_switch(self):
        driver = FakeDriver(handles=["main"])
        self.ctx.ensure_active_tab(driver)
        self.ctx.ensure_active_tab(driver)
        assert driver.switch_to.calls == [("window", "main")]

    def test_newly_opened_tab_gets_focus(self):
        driver = FakeDriver(handles=["main"])
        self.ctx.ensure_active_tab(driver)

        driver.window_handles.append("popup")
        self.ctx.ensure_active_tab(driver)

        assert driver.current_window == "popup"
        assert self.ctx.window_count == 2
        assert self.ctx.window_index == 1

    def test_closed_tab_moves_focus_to_newest_remaining(self):
        driver = FakeDriver(handles=["main", "popup"])
        self.ctx.ensure_active_tab(driver)
        assert driver.current_window == "popup"

        # An alert on the popup closed it
        driver.switch_to.alert.closes_window = True
        driver.switch_to.alert.accept()
        self.ctx.ensure_active_tab(driver)

        assert driver.current_window == "main"
        assert self.ctx.window_count == 1
        assert self.ctx.window_index == 0

    def test_no_windows_left_is_ignored(self):
        driver = FakeDriver(handles=[])
        self.ctx.ensure_active_tab(driver)
        assert driver.switch_to.calls == []
        assert self.ctx.window_count == -1

    def test_window_switch_is_retried_when_window_vanishes(self, monkeypatch):
        from testing_driver.utils import retry as retry_module
        monkeypatch.setattr(retry_module.time, "sleep", lambda s: None)

        driver = FakeDriver(handles=["main"])
        real_window = driver.switch_to.window
        failures = [NoSuchWindowException("gone")]

        def _flaky(handle):
            if failures:
                raise failures.pop()
            real_window(handle)
        driver.switch_to.window = _flaky

        self.ctx.ensure_active_tab(driver)
        assert driver.current_window == "main"
        assert self.ctx.window_count == 1

    def test_frame_round_trip(self):
        frame = FakeElement(name="editor")
        driver = FakeDriver({FRAME: [frame]})

        self.ctx.switch_to_frame(driver, FRAME, timeout=1)
        assert self.ctx.in_frame
        assert self.ctx.frame_locator == FRAME
        assert ("frame", frame) in driver.switch_to.calls
        assert self.ctx.current.kind == ContextKind.FRAME

        self.ctx.switch_to_frame(driver, ROOT_FRAME, timeout=1)
        assert not self.ctx.in_frame
        assert driver.switch_to.calls[-1] == ("default_content",)

    def test_missing_frame_times_out_at_window_root(self):
        driver = FakeDriver()
        with pytest.raises(TimeoutException):
            self.ctx.switch_to_frame(driver, FRAME, timeout=0.2)
        assert not self.ctx.in_frame

    def test_sync_inside_frame_reenters_the_frame(self):
        frame = FakeElement(name="editor")
        driver = FakeDriver({FRAME: [frame]})
        self.ctx.switch_to_frame(driver, FRAME, timeout=1)
        driver.switch_to.calls.clear()

        self.ctx.ensure_active_tab(driver)

        assert driver.switch_to.calls == [("default_content",), ("frame", frame)]
        assert self.ctx.in_frame

    def test_sync_inside_vanished_frame_falls_back_to_root(self):
        frame = FakeElement(name="editor")
        driver = FakeDriver({FRAME: [frame]})
        self.ctx.switch_to_frame(driver, FRAME, timeout=1)

        driver.elements[FRAME] = []
        self.ctx.ensure_active_tab(driver)

        assert not self.ctx.in_frame
        assert driver.switch_to.calls[-1] == ("default_content",)

    def test_switch_to_tab_by_index(self):
        driver = FakeDriver(handles=["main", "second", "third"])
        self.ctx.switch_to_tab(driver, 1)

        assert driver.current_window == "second"
        assert self.ctx.window_index == 1
        assert self.ctx.window_count == 3

    def test_switch_to_tab_leaves_frame(self):
        driver = FakeDriver({FRAME: [FakeElement()]}, handles=["main", "second"])
        self.ctx.switch_to_frame(driver, FRAME, timeout=1)
        self.ctx.switch_to_tab(driver, 0)
        assert not self.ctx.in_frame

    def test_switch_to_missing_tab_raises_index_error(self):
        driver = FakeDriver(handles=["main"])
        with pytest.raises(IndexError):
            self.ctx.switch_to_tab(driver, 5)

    def test_negative_tab_index_raises_index_error(self):
        driver = FakeDriver(handles=["main", "second"])
        with pytest.raises(IndexError):
            self.ctx.switch_to_tab(driver, -1)
        assert driver.current_window == "main"
        assert self.ctx.window_count == -1

    def test_reset_forgets_everything(self):
        self.ctx.window_count = 3
        self.ctx.window_index = 2
        self.ctx.frame_path = (FRAME,)
        self.ctx.reset()
        assert self.ctx == ContextTracker()

    def test_trackers_are_independent(self):
        other = ContextTracker()
        self.ctx.frame_path = (FRAME,)
        assert not other.in_frame
