"""Screenshot capture."""

import os
import datetime
from typing import Optional

from ..constants import SCREENSHOT_NAME_FORMAT


def screenshot_path(folder: str, now: Optional[datetime.datetime] = None) -> str:
    """Datestamped png path inside `folder`."""
    now = now or datetime.datetime.now()
    return os.path.join(folder or ".", f"{now.strftime(SCREENSHOT_NAME_FORMAT)}.png")


def take_screenshot(driver, folder: str) -> Optional[str]:
    """
    Save a screenshot of the current window into `folder`.

    Returns:
        The file path, or None if the driver reported a failure
    """
    path = screenshot_path(folder)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    if driver.save_screenshot(path) is False:
        return None
    return path


__all__ = [
    "screenshot_path",
    "take_screenshot",
]
