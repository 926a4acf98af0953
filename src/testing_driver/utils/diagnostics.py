"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional

import selenium


def collect_diagnostics(
    driver=None,
    exc: Optional[BaseException] = None,
    config: Optional[dict] = None,
    context=None,
    tracked_pid: Optional[int] = None,
) -> str:
    """
    Collect diagnostic information about the browser, driver, and environment.

    Args:
        driver: Selenium WebDriver instance (may be None before instantiation)
        exc: Exception that occurred (can be None)
        config: Session configuration dictionary
        context: ContextTracker of the session
        tracked_pid: Driver service pid tracked by the session

    Returns:
        str: Formatted diagnostic information
    """
    config = config or {}

    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
        f"Selenium          : {getattr(selenium, '__version__', '?')}",
        f"Browser           : {config.get('browser') or '<unknown>'}",
        f"Remote host       : {config.get('remote_host') or '<none>'}",
        f"Browser binary    : {config.get('browser_binary') or '<default>'}",
        f"Driver initialized: {driver is not None}",
        f"Service pid       : {tracked_pid if tracked_pid is not None else '<none>'}",
    ]

    if context is not None:
        parts.append(f"Active context    : {context.current}")

    if driver is not None:
        cap = getattr(driver, "capabilities", None) or {}
        if not isinstance(cap, dict):
            cap = {}
        parts.append(f"Browser name      : {cap.get('browserName') or '<unknown>'}")
        parts.append(f"Browser version   : {cap.get('browserVersion') or cap.get('version') or '<unknown>'}")
        try:
            parts.append(f"Window handles    : {len(driver.window_handles)}")
        except Exception:
            parts.append("Window handles    : <unavailable>")

    if exc is not None:
        parts += [
            "---- ERROR ----",
            f"Error type        : {type(exc).__name__}",
            f"Error message     : {exc}",
        ]

    return "\n".join(parts)


__all__ = ['collect_diagnostics']
