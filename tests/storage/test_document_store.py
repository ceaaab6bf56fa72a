"""Tests for DocumentStore."""

import pytest

from tileweaver.core.errors import ParseError, PersistenceError
from tileweaver.storage import DocumentStore
from tileweaver.storage.document_store import declared_encoding


class TestDocumentStore:
    """Test reading and writing the stored document."""

    def test_path_from_name(self, temp_data_dir):
        """The file path is derived from the logical name."""
        store = DocumentStore(temp_data_dir, "terrain")
        assert store.path == temp_data_dir / "terrain.xml"

    def test_read(self, store, sample_xml):
        assert store.read() == sample_xml

    def test_read_missing_raises(self, temp_data_dir):
        """Reading a missing document raises PersistenceError with the path."""
        store = DocumentStore(temp_data_dir, "absent")
        assert not store.exists()
        with pytest.raises(PersistenceError) as exc_info:
            store.read()
        assert exc_info.value.path == store.path

    def test_write_replaces_content(self, store):
        """A write replaces the whole file and leaves no temp files behind."""
        store.write("<set />")
        assert store.path.read_text(encoding="utf-8") == "<set />"
        assert sorted(p.name for p in store.resources_dir.iterdir()) == ["sample.xml"]
        assert store.writes == 1

    def test_write_keeps_newlines(self, store):
        """Line endings are written verbatim."""
        store.write("<set>\r\n</set>\n")
        assert store.path.read_bytes() == b"<set>\r\n</set>\n"

    def test_write_creates_directory(self, temp_data_dir):
        store = DocumentStore(temp_data_dir / "new" / "dir", "doc")
        store.write("<set />")
        assert store.read() == "<set />"

    def test_write_failure_raises(self, temp_data_dir):
        """An unwritable location raises PersistenceError."""
        blocker = temp_data_dir / "blocker"
        blocker.write_text("not a directory")
        store = DocumentStore(blocker, "doc")
        with pytest.raises(PersistenceError):
            store.write("<set />")
        assert store.writes == 0

    def test_refresh_notified_after_write(self, store):
        """Refresh listeners get the written path."""
        refreshed = []
        store.on_refresh(refreshed.append)
        store.write("<set />")
        assert refreshed == [store.path]

    def test_refresh_failure_does_not_fail_write(self, store):
        """A failing refresh listener is logged, not raised."""
        def broken(path):
            raise RuntimeError("listener broke")

        seen = []
        store.on_refresh(broken)
        store.on_refresh(seen.append)
        store.write("<set />")
        assert seen == [store.path]


class TestEncoding:
    """Test decoding and encoding stored bytes."""

    def test_invalid_utf8_raises_parse_error(self, store):
        """Bytes that are not UTF-8 are a malformed document, with a position."""
        store.path.write_bytes(b'<set>\n<tile name="\xff\xfe" weight="3,0"/></set>')
        with pytest.raises(ParseError) as exc_info:
            store.read()
        assert exc_info.value.line == 2
        assert exc_info.value.column == 12

    def test_unknown_declared_encoding_raises_parse_error(self, store):
        store.path.write_bytes(b'<?xml version="1.0" encoding="no-such-codec"?><set/>')
        with pytest.raises(ParseError):
            store.read()

    def test_declared_encoding_used_both_ways(self, store):
        """A Latin-1 document reads and writes back as Latin-1."""
        raw = '<?xml version="1.0" encoding="ISO-8859-1"?>\n<set><tile name="Éte"/></set>\n'.encode("latin-1")
        store.path.write_bytes(raw)

        text = store.read()
        assert 'name="Éte"' in text

        store.write(text)
        assert store.path.read_bytes() == raw

    def test_utf8_bom_kept(self, store):
        raw = b'\xef\xbb\xbf<?xml version="1.0" encoding="utf-8"?><set/>'
        store.path.write_bytes(raw)
        store.write(store.read())
        assert store.path.read_bytes() == raw

    def test_unencodable_text_raises_persistence_error(self, store, sample_xml):
        """Text the declared encoding cannot hold is not written."""
        text = '<?xml version="1.0" encoding="ascii"?><set><tile name="Éte"/></set>'
        with pytest.raises(PersistenceError):
            store.write(text)
        assert store.read() == sample_xml
        assert store.writes == 0

    def test_declared_encoding(self):
        assert declared_encoding('<?xml version="1.0" encoding="latin-1"?><a/>') == "latin-1"
        assert declared_encoding(b"<?xml version='1.0' encoding='UTF-16'?>") == "UTF-16"
        assert declared_encoding('<?xml version="1.0"?><a/>') == "utf-8"
        assert declared_encoding(b"<a/>") == "utf-8"
