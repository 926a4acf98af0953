"""The interface every testing driver implements."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional


class Browser(Enum):
    """Browsers that can back a session."""

    CHROME = "chrome"
    EDGE = "edge"
    FIREFOX = "firefox"
    IE = "ie"
    SAFARI = "safari"
    REMOTE_CHROME = "remote chrome"


class ElementState(Enum):
    """
    States an element can be checked or waited for.

    The states are independent predicates: a Visible element may also be
    Disabled.
    """

    INVISIBLE = "invisible"
    VISIBLE = "visible"
    CLICKABLE = "clickable"
    DISABLED = "disabled"


class SessionState(Enum):
    """
    Lifecycle of a session.

    UNSTARTED -> INSTANTIATING -> READY <-> CROSS_CONTEXT -> QUITTING -> TERMINATED.
    A failed instantiation goes straight to TERMINATED, which is absorbing.
    """

    UNSTARTED = "unstarted"
    INSTANTIATING = "instantiating"
    READY = "ready"
    CROSS_CONTEXT = "cross_context"
    QUITTING = "quitting"
    TERMINATED = "terminated"


class TestingDriverType(Enum):
    """The usable testing applications."""

    __test__ = False

    SELENIUM = "selenium"


class TestingDriver(ABC):
    """
    Mediates between test code and a remote browser-automation session.

    Locators are XPath expressions evaluated against the currently active
    browsing context. `js_command`, where accepted, is a script that receives
    the list of matching elements as `arguments[0]` and returns the one to use.
    """

    __test__ = False  # keep pytest from collecting this class

    @property
    @abstractmethod
    def name(self) -> TestingDriverType:
        """Which testing application backs this driver."""

    @property
    @abstractmethod
    def current_url(self) -> str:
        """Url of the page the driver is focused on."""

    # Navigation

    @abstractmethod
    def navigate_to_url(self, url: str = "", instantiate_new_driver: bool = False) -> bool:
        """Navigate to `url` (the configured default when empty)."""

    @abstractmethod
    def back(self) -> None: ...

    @abstractmethod
    def forward(self) -> None: ...

    @abstractmethod
    def refresh_web_page(self) -> None: ...

    @abstractmethod
    def get_all_links_url(self) -> List[str]:
        """Targets of every non-javascript link on the current page."""

    # Element actions

    @abstractmethod
    def click_element(self, xpath: str, by_js: bool = False, js_command: str = "") -> None: ...

    @abstractmethod
    def populate_element(self, xpath: str, value: str, js_command: str = "") -> None: ...

    @abstractmethod
    def select_value_in_element(self, xpath: str, value: str, js_command: str = "") -> None: ...

    @abstractmethod
    def send_keys(self, keystroke: str) -> None:
        """Type into the focused element. `{ENTER}` and `{TAB}` are special keys."""

    # Verification

    @abstractmethod
    def verify_attribute(self, attribute: str, expected_value: str, xpath: str, js_command: str = "") -> bool: ...

    @abstractmethod
    def verify_element_text(self, expected: str, xpath: str, js_command: str = "") -> bool: ...

    @abstractmethod
    def verify_element_selected(self, xpath: str, js_command: str = "") -> bool: ...

    @abstractmethod
    def verify_dropdown_content(self, expected: List[str], xpath: str, js_command: str = "") -> bool:
        """True when every expected string is one of the drop down's options."""

    # Element state

    @abstractmethod
    def check_for_element_state(self, xpath: str, state: ElementState, js_command: str = "") -> bool:
        """One-shot snapshot of an element state. Absence is not an error."""

    @abstractmethod
    def wait_for_element_state(self, xpath: str, state: ElementState,
                               timeout: Optional[float] = None, js_command: str = "") -> None:
        """Block until the state holds; raise TimeoutException otherwise."""

    @abstractmethod
    def wait_for_loading_spinner(self) -> None: ...

    @abstractmethod
    def check_error_container(self) -> None: ...

    # Browsing context

    @abstractmethod
    def switch_to_iframe(self, xpath: str) -> None:
        """Enter the frame at `xpath`; "root" leaves every frame."""

    @abstractmethod
    def switch_to_tab(self, tab: int) -> None: ...

    @abstractmethod
    def accept_alert(self) -> None: ...

    @abstractmethod
    def dismiss_alert(self) -> None: ...

    @abstractmethod
    def get_alert_text(self) -> str: ...

    # Browser window

    @abstractmethod
    def maximize(self) -> None: ...

    @abstractmethod
    def close_browser(self) -> None:
        """Close the current window, quitting the browser if it was the last one."""

    @abstractmethod
    def take_screenshot(self) -> Optional[str]: ...

    # Timeouts

    @abstractmethod
    def set_timeout_threshold(self, seconds) -> None: ...

    @abstractmethod
    def wait(self, seconds: int) -> None:
        """Set the implicit wait of the remote session."""

    # Lifecycle

    @abstractmethod
    def quit(self) -> None:
        """Tear the session down. Idempotent, never raises."""

    @abstractmethod
    def force_kill_web_driver(self) -> None:
        """Kill the driver process tree regardless of session state."""


__all__ = [
    "Browser",
    "ElementState",
    "SessionState",
    "TestingDriverType",
    "TestingDriver",
]
