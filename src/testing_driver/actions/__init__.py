from .elements import WaitBudget, ElementResolver, locate_once, wait_clickable_element
from .waits import WaitEngine, element_matches_state, state_condition
from .navigation import wait_document_ready, extract_link_urls, get_all_links_url
from .keyboard import send_keys, translate_keystroke
from .screenshots import take_screenshot, screenshot_path

__all__ = [
    "WaitBudget",
    "ElementResolver",
    "locate_once",
    "wait_clickable_element",
    "WaitEngine",
    "element_matches_state",
    "state_condition",
    "wait_document_ready",
    "extract_link_urls",
    "get_all_links_url",
    "send_keys",
    "translate_keystroke",
    "take_screenshot",
    "screenshot_path",
]
