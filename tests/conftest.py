"""Shared test fixtures for TileWeaver."""

import tempfile
from pathlib import Path
from typing import Callable

import pytest

from tileweaver.config import EditorSettings
from tileweaver.observe.binder import ROW_PARTS, NAME_PART, SLIDER_PART, WEIGHT_PART
from tileweaver.storage import DocumentStore


SAMPLE_XML = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<set size="1">\n'
    '  <tiles>\n'
    '    <tile name="A" symmetry="X" weight="3,0" />\n'
    '    <tile name="B" symmetry="L" weight="7,0" />\n'
    '  </tiles>\n'
    '</set>\n'
)


# =============================================================================
# Fake row host
# =============================================================================


class FakeLabel:
    """Label that records what it was last given."""

    def __init__(self):
        self.text = ""

    def set_text(self, text: str) -> None:
        self.text = text


class FakeSlider:
    """Slider with the same clamping and notification rules as SeekSlider."""

    def __init__(self):
        self.min_value = 0.0
        self.max_value = 1.0
        self.whole_numbers = False
        self._value = 0.0
        self.listeners: list[Callable[[float], None]] = []

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        value = min(max(value, self.min_value), self.max_value)
        if self.whole_numbers:
            value = round(value)
        if value == self._value:
            return
        self._value = value
        for callback in list(self.listeners):
            callback(value)

    def add_listener(self, callback: Callable[[float], None]) -> None:
        self.listeners.append(callback)


class FakeRow:
    """Row template with a configurable set of parts."""

    def __init__(self, parts: tuple[str, ...] = ROW_PARTS):
        self.parts = {}
        if NAME_PART in parts:
            self.parts[NAME_PART] = FakeLabel()
        if SLIDER_PART in parts:
            self.parts[SLIDER_PART] = FakeSlider()
        if WEIGHT_PART in parts:
            self.parts[WEIGHT_PART] = FakeLabel()

    def find(self, part: str):
        return self.parts.get(part)

    @property
    def name_label(self) -> FakeLabel:
        return self.parts[NAME_PART]

    @property
    def slider(self) -> FakeSlider:
        return self.parts[SLIDER_PART]

    @property
    def weight_label(self) -> FakeLabel:
        return self.parts[WEIGHT_PART]


class FakeHost:
    """Row host that tracks created and destroyed rows."""

    def __init__(self, parts_for: Callable[[int], tuple[str, ...]] | None = None):
        self._parts_for = parts_for or (lambda index: ROW_PARTS)
        self.created: list[FakeRow] = []
        self.destroyed: list[FakeRow] = []

    def create_row(self) -> FakeRow:
        row = FakeRow(self._parts_for(len(self.created)))
        self.created.append(row)
        return row

    def destroy_row(self, row: FakeRow) -> None:
        self.destroyed.append(row)

    @property
    def live_rows(self) -> list[FakeRow]:
        return [row for row in self.created if row not in self.destroyed]


class ClearingHost(FakeHost):
    """Row host that removes all of its rows in one call."""

    def __init__(self, parts_for: Callable[[int], tuple[str, ...]] | None = None):
        super().__init__(parts_for)
        self.clears = 0

    def clear_rows(self) -> None:
        self.clears += 1
        self.destroyed.extend(self.live_rows)


# =============================================================================
# Fake generator
# =============================================================================


class FakeElement:
    """Generated element that records whether it was destroyed."""

    def __init__(self, label: str):
        self.label = label
        self.destroyed = False

    def destroy(self) -> None:
        self.destroyed = True


class FakeGenerator:
    """Generator that records its calls in order."""

    def __init__(self, produce: int = 3, fail_reload: Exception | None = None):
        self.config = None
        self.output: list = []
        self.calls: list[str] = []
        self.produce = produce
        self.fail_reload = fail_reload

    def reload(self, config: str) -> None:
        self.calls.append("reload")
        if self.fail_reload is not None:
            raise self.fail_reload
        self.config = config

    def generate(self) -> None:
        self.calls.append("generate")

    def run(self):
        self.calls.append("run")
        self.output.extend(FakeElement(f"e{i}") for i in range(self.produce))
        return self.output


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="tileweaver_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def resources_dir(temp_data_dir: Path) -> Path:
    """Resources directory holding the sample document as `sample.xml`."""
    path = temp_data_dir / "resources"
    path.mkdir()
    (path / "sample.xml").write_text(SAMPLE_XML, encoding="utf-8")
    return path


@pytest.fixture
def store(resources_dir: Path) -> DocumentStore:
    return DocumentStore(resources_dir, "sample")


@pytest.fixture
def settings(resources_dir: Path, temp_data_dir: Path) -> EditorSettings:
    """Settings pointing at the sample document with a short debounce."""
    return EditorSettings(
        resources_dir=resources_dir,
        document_name="sample",
        data_dir=temp_data_dir / "data",
        debounce_seconds=0.05,
    )


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()
