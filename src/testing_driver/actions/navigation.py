"""Navigation and page-level helpers."""

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from selenium.webdriver.support.ui import WebDriverWait


def wait_document_ready(driver, timeout: float = 10.0) -> None:
    """Wait for document to be ready."""
    try:
        WebDriverWait(driver, timeout).until(
            lambda d: d.execute_script("return document.readyState") in ("interactive", "complete")
        )
    except Exception:
        # Not fatal
        pass


def extract_link_urls(html: str, base_url: str = "") -> List[str]:
    """
    Every link target of `html`, made absolute against `base_url`.

    `javascript:` pseudo links are skipped.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    urls = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or "javascript" in href.lower():
            continue
        urls.append(urljoin(base_url, href) if base_url else href)
    return urls


def get_all_links_url(driver) -> List[str]:
    """Link targets of the page the driver currently shows."""
    return extract_link_urls(driver.page_source, driver.current_url or "")


__all__ = [
    "wait_document_ready",
    "extract_link_urls",
    "get_all_links_url",
]
