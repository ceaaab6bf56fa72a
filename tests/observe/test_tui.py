"""Tests for the Textual host, driven through the app pilot."""

import pytest

from tileweaver.generation import TiledGenerator
from tileweaver.observe.tui import TileWeaverTUI
from tileweaver.observe.tui.widgets import OutputView, SeekSlider, TileRow
from tileweaver.services import EditSession


@pytest.fixture
def session(settings, store):
    return EditSession(settings, store, generator=TiledGenerator(width=4, height=3, seed=1))


class TestSeekSlider:
    """Test the slider widget outside an app."""

    def test_value_clamped_and_rounded(self):
        slider = SeekSlider(min_value=0, max_value=20, whole_numbers=True)
        slider.value = 7.6
        assert slider.value == 8
        slider.value = 50
        assert slider.value == 20

    def test_listeners_only_on_change(self):
        seen = []
        slider = SeekSlider(min_value=0, max_value=20, value=5)
        slider.add_listener(seen.append)
        slider.value = 5
        slider.value = 6
        assert seen == [6]

    def test_range_change_does_not_notify(self):
        seen = []
        slider = SeekSlider(min_value=0, max_value=20, value=15)
        slider.add_listener(seen.append)
        slider.max_value = 10
        assert slider.value == 10
        assert seen == []


class TestTileWeaverTUI:
    """Test the editor app."""

    @pytest.mark.asyncio
    async def test_rows_built_on_mount(self, session):
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert len(app.query(TileRow)) == 2
            assert all(record.is_bound for record in session.registry)
            assert session.registry.get(0).binding.slider.value == 3

    @pytest.mark.asyncio
    async def test_key_step_edits_weight(self, session):
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            slider = app.query(SeekSlider).first()
            slider.focus()
            await pilot.pause()
            await pilot.press("right")
            await pilot.pause()

            assert session.registry.get(0).weight == "4,0"
            assert session.saver.pending

    @pytest.mark.asyncio
    async def test_regenerate_fills_output(self, session):
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            output = app.query_one("#output", OutputView)
            assert output.is_empty

            await pilot.press("g")
            await pilot.pause()

            assert not output.is_empty
            assert len(session.generator.output) == 12

    @pytest.mark.asyncio
    async def test_missing_document_does_not_crash(self, settings, temp_data_dir):
        from tileweaver.storage import DocumentStore

        session = EditSession(settings, DocumentStore(temp_data_dir, "absent"))
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert not session.is_loaded
            assert len(app.query(TileRow)) == 0

    @pytest.mark.asyncio
    async def test_undecodable_document_does_not_crash(self, session, store):
        """A document with bytes that are not UTF-8 reports a failed load."""
        store.path.write_bytes(b'<set><tile name="\xff\xfe" weight="3,0"/></set>')
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert not session.is_loaded
            assert len(app.query(TileRow)) == 0

    @pytest.mark.asyncio
    async def test_regenerate_undecodable_document_does_not_crash(self, session, store):
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            store.path.write_bytes(b'<set><tile name="\xff\xfe" weight="3,0"/></set>')

            await pilot.press("g")
            await pilot.pause()

            assert app.query_one("#output", OutputView).is_empty
            assert len(app.query(TileRow)) == 2

    @pytest.mark.asyncio
    async def test_reload_replaces_rows(self, session, store):
        """Reloading leaves exactly one row per tile, each bound to its record."""
        app = TileWeaverTUI(session)
        async with app.run_test() as pilot:
            await pilot.pause()
            old_rows = list(app.query(TileRow))

            await pilot.press("r")
            await pilot.pause()

            rows = list(app.query(TileRow))
            assert len(rows) == 2
            assert not any(row in old_rows for row in rows)
            assert [record.binding.row for record in session.registry] == rows
