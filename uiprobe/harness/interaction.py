from typing import Optional

from playwright.sync_api import Locator, Page

FORM_CONTROLS = ("textarea", "input")


def navigate(page: Page, url: str, settle_ms: int = 1000):
    page.goto(url)
    page.wait_for_load_state("networkidle")
    page.wait_for_timeout(settle_ms)


def clear_field(page: Page, field: Locator, settle_ms: int = 500):
    """Clears the field the way a user would: focus, select all, delete."""
    field.click()
    page.keyboard.press("Control+A")
    page.keyboard.press("Delete")
    page.wait_for_timeout(settle_ms)


def type_text(field: Locator, text: str):
    field.fill(text)


def read_text(field: Locator, kind: Optional[str] = None, shared: bool = False) -> str:
    """
    Returns the rendered text of the field.
    textContent of a textarea only reflects its initial markup, so form
    controls fall back to their live value when textContent is empty.
    A shared input/output field never falls back: its value is what was typed.
    """
    text = field.text_content() or ""
    if not text and not shared and kind in FORM_CONTROLS:
        text = field.input_value() or ""
    return text


def read_value(field: Locator) -> str:
    return field.input_value() or ""
