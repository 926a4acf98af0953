from .driver import (
    get_browser_type,
    create_webdriver,
    service_pid,
    build_chrome_options,
    build_edge_options,
    build_remote_chrome_options,
    build_firefox_options,
    build_ie_options,
)
from .process import ProcessPlatform, PsutilPlatform, ProcessTree

__all__ = [
    "get_browser_type",
    "create_webdriver",
    "service_pid",
    "build_chrome_options",
    "build_edge_options",
    "build_remote_chrome_options",
    "build_firefox_options",
    "build_ie_options",
    "ProcessPlatform",
    "PsutilPlatform",
    "ProcessTree",
]
