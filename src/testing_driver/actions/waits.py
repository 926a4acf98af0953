"""Blocking and one-shot element state waits."""

from typing import Callable, Optional

from selenium.common.exceptions import StaleElementReferenceException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from ..base import ElementState
from ..constants import CHECK_STATE_ATTEMPTS, POLL_INTERVAL_SECS
from .elements import ElementResolver, WaitBudget, locate_once

import logging
logger = logging.getLogger(__name__)


def _is_read_only(element) -> bool:
    # Some drivers cannot inspect the attribute; that counts as writable.
    try:
        value = element.get_attribute("readonly")
    except WebDriverException:
        return False
    if value is None:
        return False
    return str(value).strip().lower() not in ("false", "")


def element_matches_state(element, state: ElementState) -> bool:
    """
    Evaluate one state predicate against an element (None = not found).

    A reference that went stale while being inspected counts as not found.
    """
    try:
        if state == ElementState.INVISIBLE:
            return element is None or not element.is_displayed()
        if element is None:
            return False
        if state == ElementState.VISIBLE:
            return element.is_displayed()
        if state == ElementState.CLICKABLE:
            return element.is_displayed() and element.is_enabled() and not _is_read_only(element)
        if state == ElementState.DISABLED:
            return not element.is_enabled()
    except StaleElementReferenceException:
        return state == ElementState.INVISIBLE
    return False


def state_condition(locator: str, state: ElementState, js_command: str = "") -> Callable:
    """WebDriverWait condition: the element at `locator` is in `state`."""
    def _condition(driver):
        return element_matches_state(locate_once(driver, locator, js_command), state)
    return _condition


class WaitEngine:
    """
    Waits for element state transitions on top of an ElementResolver.

    `wait_for_state` is for states that must hold and raises on timeout.
    `check_state` is a quick snapshot for which absence is a fine answer.
    """

    def __init__(
        self,
        resolver: ElementResolver,
        timeout: float,
        loading_spinner: str = "",
        poll_interval: float = POLL_INTERVAL_SECS,
        check_attempts: int = CHECK_STATE_ATTEMPTS,
        before_wait: Optional[Callable[[], None]] = None,
    ):
        self.resolver = resolver
        self.timeout = timeout
        self.loading_spinner = loading_spinner
        self.poll_interval = poll_interval
        self.check_attempts = check_attempts
        self.before_wait = before_wait

    def _wait(self, driver, timeout: Optional[float]) -> WebDriverWait:
        return WebDriverWait(
            driver,
            self.timeout if timeout is None else timeout,
            poll_frequency=self.poll_interval,
            ignored_exceptions=(StaleElementReferenceException,),
        )

    def wait_for_loading_spinner(self, driver) -> None:
        """
        Block until the configured loading indicator is gone.

        Best effort: no indicator configured, or any failure while waiting,
        simply ends the wait.
        """
        if not self.loading_spinner:
            return
        try:
            self._wait(driver, None).until(state_condition(self.loading_spinner, ElementState.INVISIBLE))
        except Exception as e:
            logger.debug(f"Loading spinner wait ended without confirmation: {e}")

    def wait_for_state(self, driver, locator: str, state: ElementState,
                       timeout: Optional[float] = None, js_command: str = "") -> None:
        """
        Block until the element at `locator` is in `state`.

        Raises:
            TimeoutException: if the state does not hold within the timeout
        """
        if self.before_wait is not None:
            self.before_wait()
        else:
            self.wait_for_loading_spinner(driver)
        effective = self.timeout if timeout is None else timeout
        self._wait(driver, effective).until(
            state_condition(locator, state, js_command),
            message=f"Element {locator!r} was not {state.value} within {effective}s",
        )

    def check_state(self, driver, locator: str, state: ElementState, js_command: str = "") -> bool:
        """Snapshot of `state` after a short, attempt-bounded resolution."""
        element = self.resolver.resolve(
            driver,
            locator,
            js_command,
            budget=WaitBudget(timeout=self.timeout, attempts=self.check_attempts),
        )
        return element_matches_state(element, state)


__all__ = [
    "element_matches_state",
    "state_condition",
    "WaitEngine",
]
