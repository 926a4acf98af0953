"""
Browsing context tracking.

One ContextTracker belongs to one session and records which window/tab and
which frame the session is focused on, so that every lookup is evaluated
against the active context instead of a stale one.

Thread Safety:
    The ContextTracker is NOT thread-safe. A session is driven from a single
    thread of control.

Usage:
    ctx = ContextTracker()
    ctx.ensure_active_tab(driver)      # follow newly opened/closed tabs
    ctx.switch_to_frame(driver, "//iframe[@id='editor']", timeout=5)
    ctx.switch_to_frame(driver, ROOT_FRAME, timeout=5)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from selenium.common.exceptions import NoSuchFrameException, StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from .constants import ROOT_FRAME, WINDOW_SWITCH_RETRIES, POLL_INTERVAL_SECS
from .utils.retry import retry_op

import logging
logger = logging.getLogger(__name__)


class ContextKind(Enum):
    WINDOW = "window"
    FRAME = "frame"


@dataclass(frozen=True)
class BrowsingContext:
    """Immutable description of the active browsing context."""

    kind: ContextKind
    window_index: int
    frame_path: Tuple[str, ...] = ()


def _frame_available_and_switch(locator: str):
    """Wait condition: the frame exists and we switched into it."""
    def _predicate(driver):
        frames = driver.find_elements(By.XPATH, locator)
        if not frames:
            return False
        driver.switch_to.frame(frames[0])
        return True
    return _predicate


@dataclass
class ContextTracker:
    """
    Encapsulates the browsing context state of one session.

    Attributes:
        window_count: Window handle count seen at the last sync (-1 = never synced)
        window_index: Index of the active window in the handle list
        frame_path: Frame locators entered from the window root, outermost first
    """

    window_count: int = -1
    window_index: int = 0
    frame_path: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def in_frame(self) -> bool:
        return bool(self.frame_path)

    @property
    def frame_locator(self):
        """Innermost recorded frame locator, or None at the window root."""
        return self.frame_path[-1] if self.frame_path else None

    @property
    def current(self) -> BrowsingContext:
        kind = ContextKind.FRAME if self.in_frame else ContextKind.WINDOW
        return BrowsingContext(kind=kind, window_index=self.window_index, frame_path=self.frame_path)

    def reset(self) -> None:
        """Forget everything (new remote session)."""
        self.window_count = -1
        self.window_index = 0
        self.frame_path = ()

    def reset_frame(self) -> None:
        """Drop frame state (full navigation or explicit return to root)."""
        self.frame_path = ()

    def ensure_active_tab(self, driver) -> None:
        """
        Keep the session focused on the right window.

        At a window root: when the number of open windows changed since the
        last sync (a link opened a tab, an alert closed one), focus the newest
        window. Inside a frame: re-enter the recorded frames, since some
        drivers fall back to the top document when focus changes.
        """
        if self.in_frame:
            self._reenter_frames(driver)
            return

        handles = list(driver.window_handles)
        count = len(handles)
        if count == self.window_count or count == 0:
            return

        newest = count - 1
        retry_op(lambda: driver.switch_to.window(handles[newest]), retries=WINDOW_SWITCH_RETRIES)
        self.window_count = count
        self.window_index = newest
        logger.debug(f"Focused window {newest} of {count}")

    def _reenter_frames(self, driver) -> None:
        driver.switch_to.default_content()
        for locator in self.frame_path:
            frames = driver.find_elements(By.XPATH, locator)
            if not frames:
                logger.debug(f"Frame {locator!r} is gone, staying at the window root")
                driver.switch_to.default_content()
                self.reset_frame()
                return
            driver.switch_to.frame(frames[0])

    def switch_to_frame(self, driver, locator: str, timeout: float) -> None:
        """
        Enter the frame at `locator`, or leave all frames for ROOT_FRAME.

        Raises:
            TimeoutException: if the frame is not available within `timeout`
        """
        self.ensure_active_tab(driver)
        driver.switch_to.default_content()

        if locator == ROOT_FRAME:
            self.reset_frame()
            return

        # Drop frame state first so a timeout leaves us at a consistent root.
        self.reset_frame()
        WebDriverWait(
            driver, timeout, poll_frequency=POLL_INTERVAL_SECS,
            ignored_exceptions=(NoSuchFrameException, StaleElementReferenceException),
        ).until(
            _frame_available_and_switch(locator),
            message=f"Frame {locator!r} was not available within {timeout}s",
        )
        self.frame_path = (locator,)

    def switch_to_tab(self, driver, index: int) -> None:
        """
        Focus the window at `index` of the live handle list.

        Raises:
            IndexError: if there is no window at `index` (indexes are zero-based,
                negative ones never match)
        """
        handles = list(driver.window_handles)
        if index < 0:
            raise IndexError(f"Tab index must be zero or positive, got {index}")
        handle = handles[index]
        driver.switch_to.window(handle)
        self.window_count = len(handles)
        self.window_index = handles.index(handle)
        self.reset_frame()


__all__ = [
    "ContextKind",
    "BrowsingContext",
    "ContextTracker",
]
