import pytest

from uiprobe.config import RunSettings


def pytest_addoption(parser):
    parser.addoption("--live", action="store_true", default=False,
                     help="Run scenarios against the real translator site")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--live"):
        return
    skip_live = pytest.mark.skip(reason="needs --live")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


class FakeElement:
    def __init__(self, tag, type_=None, value="", text="", fail_on=None, error=None):
        self.tag = tag
        self.type = type_
        self.value = value
        self.text = text
        self.fail_on = fail_on
        self.error = error


class FakeLocator:
    """Just enough of playwright's Locator for the harness."""

    def __init__(self, page, elements):
        self.page = page
        self.elements = elements

    def _el(self):
        return self.elements[0]

    def _maybe_fail(self, op):
        el = self._el()
        if el.fail_on == op:
            raise el.error

    def all(self):
        return [self.page.handle(e) for e in self.elements]

    def count(self):
        return len(self.elements)

    @property
    def first(self):
        return self.page.handle(self.elements[0]) if self.elements else FakeLocator(self.page, [])

    def click(self):
        self._maybe_fail("click")
        self.page.actions.append(("click", self._el().tag))
        self.page.focused = self._el()
        self.page.selected = False

    def fill(self, text):
        self._maybe_fail("fill")
        self.page.actions.append(("fill", text))
        self._el().value = text
        self.page.render()

    def text_content(self):
        self._maybe_fail("text_content")
        return self._el().text

    def input_value(self):
        self._maybe_fail("input_value")
        return self._el().value


class FakeKeyboard:
    def __init__(self, page):
        self.page = page

    def press(self, key):
        self.page.actions.append(("press", key))
        if key == "Control+A":
            self.page.selected = True
        elif key == "Delete" and self.page.focused is not None and self.page.selected:
            self.page.focused.value = ""
            self.page.selected = False
            self.page.render()


class FakePage:
    """
    In-memory page holding a flat list of elements in document order.
    `translate` maps the input field's value onto the output field's value.
    """

    def __init__(self, elements=(), translate=None):
        self.elements = list(elements)
        self.translate = translate
        self.keyboard = FakeKeyboard(self)
        self.focused = None
        self.selected = False
        self.actions = []
        self.waits = []
        self.visited = []
        self._handles = {}

    def handle(self, element):
        # Same element -> same locator object, like a stable handle
        key = id(element)
        if key not in self._handles:
            self._handles[key] = FakeLocator(self, [element])
        return self._handles[key]

    def locator(self, selector):
        if selector == "textarea":
            found = [e for e in self.elements if e.tag == "textarea"]
        elif selector == 'input[type="text"]':
            found = [e for e in self.elements if e.tag == "input" and e.type == "text"]
        else:
            raise AssertionError(f"unexpected selector {selector}")
        return FakeLocator(self, found)

    def render(self):
        if not self.translate:
            return
        fields = [e for e in self.elements if e.tag in ("textarea", "input")]
        if len(fields) >= 2:
            fields[1].value = self.translate(fields[0].value)

    def wait_for_timeout(self, ms):
        self.waits.append(ms)

    def goto(self, url):
        self.visited.append(url)

    def wait_for_load_state(self, state):
        self.actions.append(("load_state", state))


@pytest.fixture
def textarea():
    return lambda **kw: FakeElement("textarea", **kw)


@pytest.fixture
def text_input():
    return lambda **kw: FakeElement("input", type_="text", **kw)


@pytest.fixture
def fake_page():
    return FakePage


@pytest.fixture
def fast_settings():
    return RunSettings(
        target_url="https://translator.test/",
        settle_ms=10,
        clear_settle_ms=5,
        quiescence_ms=20,
        wait_mode="fixed",
        poll_interval_ms=1,
        stable_samples=2,
        stable_timeout_ms=50,
    )
