"""WebDriver creation for every supported browser kind."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.ie.options import Options as IeOptions
from selenium.webdriver.ie.service import Service as IeService

from ..base import Browser
from ..errors import DriverInstantiationError, UnsupportedBrowserError

import logging
logger = logging.getLogger(__name__)


CHROMIUM_ARGUMENTS = ("no-sandbox", "--log-level=3", "--silent")

FIREFOX_SAVE_TO_DISK_MIME_TYPES = (
    "application/msword, application/csv, application/ris, text/csv, image/png, "
    "application/pdf, text/html, text/plain, application/zip, application/x-zip, "
    "application/x-zip-compressed, application/download, application/octet-stream"
)


def get_browser_type(browser_name: str) -> Browser:
    """
    Map a free-form browser name onto a Browser.

    Raises:
        UnsupportedBrowserError: if the name matches no supported browser

    Safari is recognised but cannot be launched; `create_webdriver` rejects it.
    """
    name = (browser_name or "").lower()
    if "chrome" in name:
        return Browser.REMOTE_CHROME if "remote" in name else Browser.CHROME
    if "ie" in name:
        return Browser.IE
    if "firefox" in name:
        return Browser.FIREFOX
    if "edge" in name:
        return Browser.EDGE
    if "safari" in name:
        return Browser.SAFARI
    logger.error(f"Sorry we do not currently support the browser: {browser_name}")
    raise UnsupportedBrowserError(f"Unsupported browser: {browser_name!r}")


def _download_dir(config: dict) -> str:
    return config.get("download_dir") or tempfile.gettempdir()


def _extensions(config: dict):
    folder = config.get("extensions_dir")
    if not folder or not os.path.isdir(folder):
        return []
    return sorted(str(p) for p in Path(folder).iterdir() if p.is_file())


def _chromium_options(options, config: dict):
    """Apply the option set shared by Chrome and Chromium based Edge."""
    options.set_capability("unhandledPromptBehavior", "accept")
    for arg in CHROMIUM_ARGUMENTS:
        options.add_argument(arg)
    options.add_experimental_option("prefs", {
        "download.prompt_for_download": False,
        "download.default_directory": _download_dir(config),
        "disable-popup-blocking": True,
        "plugins.always_open_pdf_externally": True,
    })
    binary = config.get("browser_binary")
    if binary:
        options.binary_location = binary
    for extension in _extensions(config):
        options.add_extension(extension)
    return options


def build_chrome_options(config: dict) -> ChromeOptions:
    return _chromium_options(ChromeOptions(), config)


def build_edge_options(config: dict) -> EdgeOptions:
    return _chromium_options(EdgeOptions(), config)


def build_remote_chrome_options(config: dict) -> ChromeOptions:
    options = ChromeOptions()
    options.set_capability("unhandledPromptBehavior", "accept")
    for arg in CHROMIUM_ARGUMENTS:
        options.add_argument(arg)
    return options


def build_firefox_options(config: dict) -> FirefoxOptions:
    options = FirefoxOptions()
    prefs = {
        "browser.download.folderList": 2,
        "browser.download.dir": _download_dir(config),
        "browser.download.manager.alertOnEXEOpen": False,
        "browser.helperApps.neverAsk.saveToDisk": FIREFOX_SAVE_TO_DISK_MIME_TYPES,
        "browser.download.manager.showWhenStarting": False,
        "browser.download.manager.focusWhenStarting": False,
        "browser.download.useDownloadDir": True,
        "browser.helperApps.alwaysAsk.force": False,
        "browser.download.manager.closeWhenDone": True,
        "browser.download.manager.showAlertOnComplete": False,
        "browser.download.manager.useWindow": False,
        "services.sync.prefs.sync.browser.download.manager.showWhenStarting": False,
        "pdfjs.disabled": True,
    }
    for key, value in prefs.items():
        options.set_preference(key, value)
    binary = config.get("browser_binary")
    if binary:
        options.binary_location = binary
    return options


def build_ie_options(config: dict) -> IeOptions:
    # Ignoring the zoom level gives better results than the per-resolution default.
    options = IeOptions()
    options.ignore_protected_mode_settings = True
    options.ignore_zoom_level = True
    options.ensure_clean_session = True
    options.native_events = bool(config.get("ie_native_events", True))
    options.require_window_focus = True
    options.persistent_hover = True
    options.page_load_strategy = "normal"
    options.set_capability("unhandledPromptBehavior", "accept")
    return options


def create_webdriver(browser: Browser, config: dict):
    """
    Start a new remote session for `browser`.

    Local browsers spawn a driver service process whose pid is available
    through `service_pid`. Remote Chrome talks to `config['remote_host']` and
    spawns nothing locally.

    Raises:
        UnsupportedBrowserError: for browsers we cannot launch
        DriverInstantiationError: when remote chrome has no remote host
    """
    if browser == Browser.REMOTE_CHROME:
        remote_host = (config.get("remote_host") or "").strip()
        if not remote_host:
            raise DriverInstantiationError("Remote chrome requires a remote host.")
        return webdriver.Remote(command_executor=remote_host, options=build_remote_chrome_options(config))

    if browser == Browser.CHROME:
        return webdriver.Chrome(service=ChromeService(), options=build_chrome_options(config))

    if browser == Browser.EDGE:
        return webdriver.Edge(service=EdgeService(), options=build_edge_options(config))

    if browser == Browser.FIREFOX:
        return webdriver.Firefox(service=FirefoxService(), options=build_firefox_options(config))

    if browser == Browser.IE:
        return webdriver.Ie(service=IeService(), options=build_ie_options(config))

    raise UnsupportedBrowserError(f"We currently do not deal with {browser.value} yet.")


def service_pid(driver) -> Optional[int]:
    """Pid of the local driver service behind `driver`, if there is one."""
    service = getattr(driver, "service", None)
    process = getattr(service, "process", None)
    pid = getattr(process, "pid", None)
    return pid if isinstance(pid, int) else None


__all__ = [
    "get_browser_type",
    "build_chrome_options",
    "build_edge_options",
    "build_remote_chrome_options",
    "build_firefox_options",
    "build_ie_options",
    "create_webdriver",
    "service_pid",
]
