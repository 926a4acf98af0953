"""Element finding and interaction."""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from ..constants import POLL_INTERVAL_SECS
from ..utils.retry import TRANSIENT_LOOKUP_ERRORS, is_transient_lookup_error

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaitBudget:
    """
    How long a resolution may keep polling.

    With `attempts` set, exactly that many lookups are made whatever the
    elapsed time. Otherwise lookups repeat while less than `timeout` seconds
    have elapsed.
    """

    timeout: float
    attempts: Optional[int] = None


def locate_once(driver, locator: str, js_command: str = ""):
    """
    Single lookup of `locator` in the active context.

    With a `js_command`, the matching elements are handed to the script as
    `arguments[0]` and whatever it returns is the result.
    """
    elements = driver.find_elements(By.XPATH, locator)
    if js_command:
        return driver.execute_script(js_command, elements)
    return elements[0] if elements else None


class ElementResolver:
    """
    Polls the remote session until an element matches or the budget runs out.

    Absence is a normal outcome: `resolve` returns None instead of raising.
    Lookup noise (stale references, "no such element") is retried silently;
    any other error is logged once per resolution and polling goes on.
    """

    def __init__(
        self,
        timeout: float,
        before_resolve: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = POLL_INTERVAL_SECS,
    ):
        self.timeout = timeout
        self.before_resolve = before_resolve
        self.clock = clock
        self.sleep = sleep
        self.poll_interval = poll_interval

    def default_budget(self) -> WaitBudget:
        return WaitBudget(timeout=self.timeout)

    def resolve(self, driver, locator: str, js_command: str = "", budget: Optional[WaitBudget] = None):
        """
        Find the element at `locator`.

        Args:
            driver: The remote session to query
            locator: XPath of the element
            js_command: Optional script narrowing the candidate list
            budget: Time or attempt budget (session timeout when omitted)

        Returns:
            The element, or None when the budget was exhausted
        """
        budget = budget or self.default_budget()

        # An element found while the page is still loading is unreliable.
        if self.before_resolve is not None:
            self.before_resolve()

        error_logged = False
        attempts_left = budget.attempts
        start = self.clock()

        while True:
            if attempts_left is not None:
                if attempts_left <= 0:
                    break
                attempts_left -= 1
            elif self.clock() - start >= budget.timeout:
                break

            try:
                element = locate_once(driver, locator, js_command)
                if element is not None:
                    return element
            except Exception as e:
                if not is_transient_lookup_error(e) and not error_logged:
                    error_logged = True
                    logger.error(f"Unexpected error while resolving {locator!r}: {e}")

            if attempts_left is not None:
                if attempts_left > 0:
                    self.sleep(self.poll_interval)
            elif self.clock() - start < budget.timeout:
                self.sleep(self.poll_interval)

        logger.debug(f"No element found for {locator!r} within {budget}")
        return None


def wait_clickable_element(driver, locator: str, timeout: float, js_command: str = ""):
    """
    Wait for the element at `locator` to be clickable (displayed and enabled).

    The element is looked up again on every poll, so a re-render that leaves
    a stale reference behind is picked up instead of surfacing.

    Returns:
        The fresh, clickable element

    Raises:
        TimeoutException: if no clickable element showed up within `timeout`
    """
    def _clickable(d):
        el = locate_once(d, locator, js_command)
        if el is not None and el.is_displayed() and el.is_enabled():
            return el
        return False

    return WebDriverWait(
        driver, timeout, poll_frequency=POLL_INTERVAL_SECS,
        ignored_exceptions=TRANSIENT_LOOKUP_ERRORS,
    ).until(_clickable, message=f"Element {locator!r} never became clickable")


__all__ = [
    "WaitBudget",
    "locate_once",
    "ElementResolver",
    "wait_clickable_element",
]
