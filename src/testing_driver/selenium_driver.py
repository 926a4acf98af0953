"""Selenium backed implementation of the TestingDriver interface."""

import time
from typing import Callable, List, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import Select

from .base import Browser, ElementState, SessionState, TestingDriver, TestingDriverType
from .browser.driver import create_webdriver, get_browser_type, service_pid
from .browser.process import ProcessPlatform, ProcessTree
from .config import get_env_config
from .constants import DEFAULT_ACTUAL_TIMEOUT_MINS, DEFAULT_TIMEOUT_SECS
from .context import ContextTracker
from .decorators import best_effort, ensure_session_ready
from .errors import (
    DriverInstantiationError,
    ElementNotFoundError,
    SessionTerminatedError,
    TestingDriverError,
)
from .actions import keyboard, navigation, screenshots
from .actions.elements import ElementResolver, wait_clickable_element
from .actions.waits import WaitEngine
from .utils.diagnostics import collect_diagnostics

import logging
logger = logging.getLogger(__name__)


JS_DEFERRED_CLICK = "var element=arguments[0]; setTimeout(function() {element.click();}, 100)"


class SeleniumDriver(TestingDriver):
    """
    Driver class for Selenium WebDriver.

    One instance is one session: it owns its remote connection, the driver
    process tree behind it and its browsing context state. Nothing is shared
    between instances, so parallel sessions cannot step on each other.

    The remote session is created lazily by the first `navigate_to_url` (or
    explicitly by `instantiate`) and torn down exactly once by `quit`.

    Usage:
        driver = SeleniumDriver(browser="chrome", timeout=5)
        try:
            driver.navigate_to_url("http://the-internet.herokuapp.com/")
            driver.click_element("//a[contains(text(),'Form Authentication')]")
        finally:
            driver.quit()
    """

    def __init__(
        self,
        browser: str = "chrome",
        timeout: float = DEFAULT_TIMEOUT_SECS,
        environment: str = "",
        url: str = "",
        screenshot_save_location: str = "./",
        actual_timeout: int = DEFAULT_ACTUAL_TIMEOUT_MINS,
        loading_spinner: str = "",
        error_container: str = "",
        remote_host: str = "",
        web_driver=None,
        browser_binary: Optional[str] = None,
        extensions_dir: Optional[str] = None,
        download_dir: Optional[str] = None,
        ie_native_events: bool = True,
        lowercase_attribute_names: bool = True,
        process_platform: Optional[ProcessPlatform] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            browser: Browser to launch ("chrome", "remote chrome", "edge", "firefox", "ie")
            timeout: Per-lookup poll budget, in seconds
            environment: Name of the environment under test
            url: Default url to navigate to
            screenshot_save_location: Folder screenshots are written to
            actual_timeout: Page load timeout, in minutes
            loading_spinner: XPath of a loading indicator to wait out before lookups
            error_container: XPath of an element showing application errors
            remote_host: Selenium server url, required for "remote chrome"
            web_driver: An already running WebDriver to use instead of launching one
            lowercase_attribute_names: Lower-case attribute names in verify_attribute

        Raises:
            UnsupportedBrowserError: if `browser` is not supported
        """
        self.browser_type: Browser = get_browser_type(browser)
        self.timeout = float(timeout)
        self.environment = environment
        self.url = url
        self.screenshot_save_location = screenshot_save_location
        self.actual_timeout = actual_timeout
        self.error_container = error_container
        self.remote_host = remote_host
        self.lowercase_attribute_names = lowercase_attribute_names
        self.config = {
            "browser": browser,
            "remote_host": remote_host,
            "browser_binary": browser_binary,
            "extensions_dir": extensions_dir,
            "download_dir": download_dir,
            "ie_native_events": ie_native_events,
        }

        self.context = ContextTracker()
        self.processes = ProcessTree(process_platform)
        self.resolver = ElementResolver(
            self.timeout,
            before_resolve=self.wait_for_loading_spinner,
            clock=clock,
            sleep=sleep,
        )
        self.waits = WaitEngine(
            self.resolver,
            self.timeout,
            loading_spinner=loading_spinner,
            before_wait=self.wait_for_loading_spinner,
        )

        self.web_driver = web_driver
        self._state = SessionState.READY if web_driver is not None else SessionState.UNSTARTED

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "SeleniumDriver":
        """Build a driver from TESTING_DRIVER_* environment variables (and .env)."""
        config = get_env_config(dotenv_path)
        config.update(overrides)
        return cls(**config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> TestingDriverType:
        return TestingDriverType.SELENIUM

    @property
    def state(self) -> SessionState:
        if self._state == SessionState.READY and self.context.in_frame:
            return SessionState.CROSS_CONTEXT
        return self._state

    @property
    @ensure_session_ready
    def current_url(self) -> str:
        return self.web_driver.current_url

    @property
    def loading_spinner(self) -> str:
        return self.waits.loading_spinner

    @loading_spinner.setter
    def loading_spinner(self, xpath: str) -> None:
        self.waits.loading_spinner = xpath or ""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def instantiate(self) -> None:
        """
        Start a fresh remote session, replacing the current one if any.

        Raises:
            SessionTerminatedError: if the session was already quit
            UnsupportedBrowserError / DriverInstantiationError: when the browser
                cannot be started. The session is terminated and every process
                started so far is killed before the error propagates.
        """
        if self._state == SessionState.TERMINATED:
            raise SessionTerminatedError("Cannot instantiate a session that was quit.")

        self._teardown_remote_session()
        self._state = SessionState.INSTANTIATING
        logger.info(f"Instantiating {self.browser_type.value} session")

        try:
            self.web_driver = create_webdriver(self.browser_type, self.config)
            self.processes.track(service_pid(self.web_driver))
            self.web_driver.set_page_load_timeout(self.actual_timeout * 60)
        except Exception as e:
            logger.error(
                "While trying to instantiate Selenium drivers, we were met with the following: "
                f"{e}\n{collect_diagnostics(self.web_driver, e, self.config, self.context, self.processes.tracked_pid)}"
            )
            self.quit()
            if isinstance(e, TestingDriverError):
                raise
            raise DriverInstantiationError(f"Could not start {self.browser_type.value}: {e}") from e

        self.context.reset()
        self._state = SessionState.READY

    def _teardown_remote_session(self) -> None:
        """Politely quit the current remote session, then kill its process tree."""
        try:
            if self.web_driver is not None:
                self.web_driver.quit()
        except Exception as e:
            logger.debug(f"Polite quit of the remote session failed: {e}")
        finally:
            self.web_driver = None
            self.force_kill_web_driver()

    def quit(self) -> None:
        """
        Quit the webdriver. Call this when you want the driver to be closed.

        Runs at most once; never raises. The driver process tree is killed
        whether or not the remote session accepted the quit.
        """
        if self._state in (SessionState.TERMINATED, SessionState.QUITTING):
            return
        self._state = SessionState.QUITTING
        try:
            self._teardown_remote_session()
        finally:
            self.context.reset()
            self._state = SessionState.TERMINATED
            logger.info("Session terminated")

    def force_kill_web_driver(self) -> None:
        try:
            killed = self.processes.kill_all()
            if killed:
                logger.info(f"Killed driver processes: {killed}")
        except Exception as e:
            logger.warning(f"Force kill of the web driver failed: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.quit()
        return False

    # ------------------------------------------------------------------
    # Element resolution
    # ------------------------------------------------------------------

    def _find(self, xpath: str, js_command: str = ""):
        element = self.resolver.resolve(self.web_driver, xpath, js_command)
        if element is None:
            raise ElementNotFoundError(xpath)
        return element

    @ensure_session_ready
    def get_web_element(self, xpath: str, js_command: str = ""):
        """The element at `xpath`, or None if it never showed up."""
        return self.resolver.resolve(self.web_driver, xpath, js_command)

    @best_effort
    @ensure_session_ready
    def wait_for_loading_spinner(self) -> None:
        self.context.ensure_active_tab(self.web_driver)
        self.waits.wait_for_loading_spinner(self.web_driver)

    @best_effort
    def check_error_container(self) -> None:
        if not self.error_container or self.web_driver is None:
            return
        found = self.web_driver.find_elements(By.XPATH, self.error_container)
        if found:
            logger.error(f"Found the following in the error container: {found[0].text}")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate_to_url(self, url: str = "", instantiate_new_driver: bool = False) -> bool:
        """
        Tell the browser to navigate to `url`.

        The remote session is started first when there is none yet, or when
        `instantiate_new_driver` asks for a fresh one.

        Returns:
            True if the navigation was successful

        Raises:
            SessionTerminatedError: after quit()
            UnsupportedBrowserError / DriverInstantiationError: if the session
                could not be started
        """
        if self._state == SessionState.TERMINATED:
            raise SessionTerminatedError("Cannot navigate: the session was quit.")

        url = url or self.url
        if instantiate_new_driver or self.web_driver is None:
            self.instantiate()

        try:
            self.web_driver.get(url)
            self.context.reset_frame()
            navigation.wait_document_ready(self.web_driver, timeout=self.timeout)
            return True
        except Exception as e:
            logger.error(f"Something went wrong while navigating to url: {e}")
            return False

    @ensure_session_ready
    def back(self) -> None:
        self.web_driver.back()
        self.context.reset_frame()

    @ensure_session_ready
    def forward(self) -> None:
        self.web_driver.forward()
        self.context.reset_frame()

    @ensure_session_ready
    def refresh_web_page(self) -> None:
        self.web_driver.refresh()
        self.context.reset_frame()

    @ensure_session_ready
    def get_all_links_url(self) -> List[str]:
        self.wait_for_loading_spinner()
        return navigation.get_all_links_url(self.web_driver)

    # ------------------------------------------------------------------
    # Element actions
    # ------------------------------------------------------------------

    @ensure_session_ready
    def click_element(self, xpath: str, by_js: bool = False, js_command: str = "") -> None:
        """
        Click the element at `xpath` once it is displayed and enabled.

        Raises:
            ElementNotFoundError: if no element matched within the timeout
            TimeoutException: if the element never became clickable
        """
        self._find(xpath, js_command)
        element = wait_clickable_element(self.web_driver, xpath, self.timeout, js_command)
        if by_js:
            self.web_driver.execute_script(JS_DEFERRED_CLICK, element)
        else:
            element.click()
        self.check_error_container()

    @ensure_session_ready
    def populate_element(self, xpath: str, value: str, js_command: str = "") -> None:
        self._find(xpath, js_command)
        element = wait_clickable_element(self.web_driver, xpath, self.timeout, js_command)
        element.click()
        element.clear()
        element.send_keys(value)
        self.check_error_container()

    @ensure_session_ready
    def select_value_in_element(self, xpath: str, value: str, js_command: str = "") -> None:
        """Select the option whose visible text is `value` in a drop down."""
        self._find(xpath, js_command)
        element = wait_clickable_element(self.web_driver, xpath, self.timeout, js_command)
        Select(element).select_by_visible_text(value)

    @ensure_session_ready(sync_context=True)
    def send_keys(self, keystroke: str) -> None:
        keyboard.send_keys(self.web_driver, keystroke)

    @ensure_session_ready
    def execute_js(self, js_command: str, *args):
        return self.web_driver.execute_script(js_command, *args)

    @ensure_session_ready
    def get_element_attribute(self, attribute: str, xpath: str, js_command: str = "") -> Optional[str]:
        return self._find(xpath, js_command).get_attribute(attribute)

    @ensure_session_ready
    def get_element_text(self, xpath: str, js_command: str = "") -> str:
        return self._find(xpath, js_command).text

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    @ensure_session_ready
    def verify_attribute(self, attribute: str, expected_value: str, xpath: str, js_command: str = "") -> bool:
        """
        Whether the element's attribute equals `expected_value`.

        The value comparison is case-sensitive. The attribute name is
        lower-cased unless `lowercase_attribute_names` is off.
        """
        element = self.resolver.resolve(self.web_driver, xpath, js_command)
        if element is None:
            return False
        if self.lowercase_attribute_names:
            attribute = attribute.lower()
        return element.get_attribute(attribute) == expected_value

    @ensure_session_ready
    def verify_element_text(self, expected: str, xpath: str, js_command: str = "") -> bool:
        element = self.resolver.resolve(self.web_driver, xpath, js_command)
        return element is not None and element.text == expected

    @ensure_session_ready
    def verify_element_selected(self, xpath: str, js_command: str = "") -> bool:
        element = self.resolver.resolve(self.web_driver, xpath, js_command)
        return element is not None and element.is_selected()

    @ensure_session_ready
    def verify_dropdown_content(self, expected: List[str], xpath: str, js_command: str = "") -> bool:
        element = self.resolver.resolve(self.web_driver, xpath, js_command)
        if element is None:
            return False
        actual = [option.text for option in Select(element).options]
        return all(value in actual for value in expected)

    # ------------------------------------------------------------------
    # Element state
    # ------------------------------------------------------------------

    @ensure_session_ready
    def check_for_element_state(self, xpath: str, state: ElementState, js_command: str = "") -> bool:
        return self.waits.check_state(self.web_driver, xpath, state, js_command)

    @ensure_session_ready
    def wait_for_element_state(self, xpath: str, state: ElementState,
                               timeout: Optional[float] = None, js_command: str = "") -> None:
        self.waits.wait_for_state(self.web_driver, xpath, state, timeout=timeout, js_command=js_command)

    # ------------------------------------------------------------------
    # Browsing context
    # ------------------------------------------------------------------

    @ensure_session_ready
    def switch_to_iframe(self, xpath: str) -> None:
        self.context.switch_to_frame(self.web_driver, xpath, self.timeout)

    @ensure_session_ready
    def switch_to_tab(self, tab: int) -> None:
        self.context.switch_to_tab(self.web_driver, tab)

    @ensure_session_ready
    def accept_alert(self) -> None:
        self.web_driver.switch_to.alert.accept()
        self.context.ensure_active_tab(self.web_driver)

    @ensure_session_ready
    def dismiss_alert(self) -> None:
        self.web_driver.switch_to.alert.dismiss()
        self.context.ensure_active_tab(self.web_driver)

    @ensure_session_ready
    def get_alert_text(self) -> str:
        return self.web_driver.switch_to.alert.text

    # ------------------------------------------------------------------
    # Browser window
    # ------------------------------------------------------------------

    @ensure_session_ready
    def maximize(self) -> None:
        self.web_driver.maximize_window()

    @ensure_session_ready
    def close_browser(self) -> None:
        self.web_driver.close()
        self.context.reset_frame()

    @best_effort
    @ensure_session_ready
    def take_screenshot(self) -> Optional[str]:
        return screenshots.take_screenshot(self.web_driver, self.screenshot_save_location)

    # ------------------------------------------------------------------
    # Timeouts
    # ------------------------------------------------------------------

    def set_timeout_threshold(self, seconds) -> None:
        """Set the lookup/wait timeout in seconds (accepts numeric strings)."""
        self.timeout = float(seconds)
        self.resolver.timeout = self.timeout
        self.waits.timeout = self.timeout

    @ensure_session_ready
    def wait(self, seconds: int) -> None:
        self.web_driver.implicitly_wait(seconds)


__all__ = ["SeleniumDriver"]
