"""Keyboard input."""

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys

SPECIAL_KEYSTROKES = {
    "{ENTER}": Keys.ENTER,
    "{TAB}": Keys.TAB,
}


def translate_keystroke(keystroke: str) -> str:
    """Map `{ENTER}` / `{TAB}` onto their key codes; other text is typed as is."""
    return SPECIAL_KEYSTROKES.get(keystroke, keystroke)


def send_keys(driver, keystroke: str) -> None:
    """Send keyboard input to whatever has focus."""
    ActionChains(driver).send_keys(translate_keystroke(keystroke)).perform()


__all__ = [
    "SPECIAL_KEYSTROKES",
    "translate_keystroke",
    "send_keys",
]
