"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Element Resolution
# ============================================================================

DEFAULT_TIMEOUT_SECS = 5
"""Per-lookup poll budget when none is configured."""

POLL_INTERVAL_SECS = float(os.getenv("TESTING_DRIVER_POLL_INTERVAL", "0.1"))
"""Delay between two unsuccessful lookups of the same locator."""

CHECK_STATE_ATTEMPTS = int(os.getenv("TESTING_DRIVER_CHECK_STATE_ATTEMPTS", "3"))
"""Lookups performed by a one-shot element state check."""


# ============================================================================
# Browsing Context
# ============================================================================

ROOT_FRAME = "root"
"""Frame locator that means 'leave all frames'."""

WINDOW_SWITCH_RETRIES = int(os.getenv("TESTING_DRIVER_WINDOW_SWITCH_RETRIES", "2"))
"""Retries when a window disappears while we switch to it."""


# ============================================================================
# Session Lifecycle
# ============================================================================

DEFAULT_ACTUAL_TIMEOUT_MINS = 60
"""Page load timeout, in minutes."""

SCREENSHOT_NAME_FORMAT = "%Y_%m_%d-%I_%M_%S_%p"
"""strftime pattern used for screenshot file names."""


__all__ = [
    "DEFAULT_TIMEOUT_SECS",
    "POLL_INTERVAL_SECS",
    "CHECK_STATE_ATTEMPTS",
    "ROOT_FRAME",
    "WINDOW_SWITCH_RETRIES",
    "DEFAULT_ACTUAL_TIMEOUT_MINS",
    "SCREENSHOT_NAME_FORMAT",
]
