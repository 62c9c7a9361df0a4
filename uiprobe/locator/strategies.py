from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import Locator, Page

TEXTAREA = "textarea"
TEXT_INPUT = 'input[type="text"]'


@dataclass
class FieldPair:
    input: Locator
    output: Locator
    strategy: str
    confidence: float
    input_kind: str = "textarea"
    output_kind: str = "textarea"

    @property
    def shared(self) -> bool:
        return self.input is self.output


class LocatorStrategy:
    """
    One named way of finding the translator's fields.
    Strategies only query the page; they never click, type or run scripts.
    """
    name = "base"
    confidence = 0.0

    def match(self, page: Page) -> Optional[FieldPair]:
        raise NotImplementedError

    def _pair(self, input_el: Locator, output_el: Locator, input_kind: str, output_kind: str) -> FieldPair:
        return FieldPair(
            input=input_el,
            output=output_el,
            strategy=self.name,
            confidence=self.confidence,
            input_kind=input_kind,
            output_kind=output_kind,
        )


class TextareaPairStrategy(LocatorStrategy):
    """Two or more textareas: first is input, second is output (document order)."""
    name = "textarea_pair"
    confidence = 0.9

    def match(self, page: Page) -> Optional[FieldPair]:
        textareas = page.locator(TEXTAREA).all()
        if len(textareas) >= 2:
            return self._pair(textareas[0], textareas[1], "textarea", "textarea")
        return None


class SharedTextareaStrategy(LocatorStrategy):
    """A single textarea used for both input and output."""
    name = "shared_textarea"
    confidence = 0.6

    def match(self, page: Page) -> Optional[FieldPair]:
        textareas = page.locator(TEXTAREA).all()
        if len(textareas) == 1:
            return self._pair(textareas[0], textareas[0], "textarea", "textarea")
        return None


class TextInputStrategy(LocatorStrategy):
    """
    Fallback for widgets built on a single-line input.
    Pairs it with the first textarea if there is one, otherwise with itself.
    """
    name = "text_input"
    confidence = 0.3

    def match(self, page: Page) -> Optional[FieldPair]:
        inputs = page.locator(TEXT_INPUT)
        if inputs.count() == 0:
            return None
        input_el = inputs.first

        textareas = page.locator(TEXTAREA)
        if textareas.count() > 0:
            return self._pair(input_el, textareas.first, "input", "textarea")
        return self._pair(input_el, input_el, "input", "input")


DEFAULT_STRATEGIES = (
    TextareaPairStrategy(),
    SharedTextareaStrategy(),
    TextInputStrategy(),
)
