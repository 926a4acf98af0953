"""
Browser automation for functional tests.

A `SeleniumDriver` is one browser session. Test code talks to it with XPath
locators and never touches Selenium directly:

    with SeleniumDriver(browser="chrome", timeout=5) as driver:
        driver.navigate_to_url("http://the-internet.herokuapp.com/")
        driver.click_element("//a[contains(text(),'Form Authentication')]")
        assert driver.check_for_element_state("//input[@id='username']", ElementState.VISIBLE)

Lookups poll for up to `timeout` seconds, follow newly opened tabs and
re-enter the frame the session was working in. Absence is reported as False
by the verify/check family and as ElementNotFoundError by the actions.
`quit()` always kills the driver process tree, even when the browser is wedged.
"""

from .base import Browser, ElementState, SessionState, TestingDriver, TestingDriverType
from .errors import (
    TestingDriverError,
    UnsupportedBrowserError,
    DriverInstantiationError,
    SessionNotStartedError,
    SessionTerminatedError,
    ElementNotFoundError,
)
from .selenium_driver import SeleniumDriver

__all__ = [
    "Browser",
    "ElementState",
    "SessionState",
    "TestingDriver",
    "TestingDriverType",
    "SeleniumDriver",
    "TestingDriverError",
    "UnsupportedBrowserError",
    "DriverInstantiationError",
    "SessionNotStartedError",
    "SessionTerminatedError",
    "ElementNotFoundError",
]
