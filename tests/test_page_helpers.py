"""Tests for link extraction, keyboard mapping and screenshot naming."""

import datetime
import os

from selenium.webdriver.common.keys import Keys

from testing_driver.actions.keyboard import translate_keystroke
from testing_driver.actions.navigation import extract_link_urls, get_all_links_url, wait_document_ready
from testing_driver.actions.screenshots import screenshot_path, take_screenshot
from _utils import FakeDriver


PAGE = """
<html><body>
  <a href="/login">Login</a>
  <a href="https://example.org/docs">Docs</a>
  <a href="javascript:void(0)">Menu</a>
  <a name="anchor-without-href">Top</a>
  <a href="JavaScript:openPopup()">Popup</a>
  <a href="checkboxes">Checkboxes</a>
</body></html>
"""


class TestLinkExtraction:

    def test_links_are_absolute_and_javascript_is_skipped(self):
        urls = extract_link_urls(PAGE, "http://the-internet.herokuapp.com/")
        assert urls == [
            "http://the-internet.herokuapp.com/login",
            "https://example.org/docs",
            "http://the-internet.herokuapp.com/checkboxes",
        ]

    def test_without_base_url_hrefs_are_returned_as_is(self):
        assert extract_link_urls(PAGE) == ["/login", "https://example.org/docs", "checkboxes"]

    def test_empty_page(self):
        assert extract_link_urls("") == []

    def test_reads_current_page_of_driver(self):
        driver = FakeDriver(page_source=PAGE, current_url="http://localhost:8080/index.html")
        assert get_all_links_url(driver)[0] == "http://localhost:8080/login"

    def test_wait_document_ready_returns_on_complete(self):
        driver = FakeDriver()
        wait_document_ready(driver, timeout=0.5)
        assert driver.scripts == [("return document.readyState", ())]


class TestKeystrokes:

    def test_special_keys(self):
        assert translate_keystroke("{ENTER}") == Keys.ENTER
        assert translate_keystroke("{TAB}") == Keys.TAB

    def test_plain_text_is_typed_as_is(self):
        assert translate_keystroke("tomsmith") == "tomsmith"
        assert translate_keystroke("{enter}") == "{enter}"


class TestScreenshots:

    def test_path_is_datestamped(self):
        when = datetime.datetime(2024, 3, 9, 14, 5, 7)
        assert screenshot_path("shots", when) == os.path.join("shots", "2024_03_09-02_05_07_PM.png")

    def test_failed_capture_returns_none(self, tmp_path):
        driver = FakeDriver()
        driver.save_screenshot = lambda path: False
        assert take_screenshot(driver, str(tmp_path)) is None
