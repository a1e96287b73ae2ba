"""Tests for shape database serialization."""

import pickle
from pathlib import Path

import pytest

from glyphmatcher.core.shapedb import ShapeDb
from glyphmatcher.core.storage import FORMAT_NAME, dumps, loads, read_db, write_db
from glyphmatcher.domain import Outline
from glyphmatcher.exceptions import DatabaseCorruptError, DatabaseWriteError

SHAPES = {
    "O": [[(0, 0), (0, 700), (500, 700), (500, 0)], [(100, 100), (400, 100), (400, 600), (100, 600)]],
    "A": [[(0, 0), (250, 700), (500, 0)]],
    "fi": [[(10.7, 0.2), (10, 300), (60, 300)], [(80, 0), (80, 200), (120, 200)]],
    "empty": [],
}


@pytest.fixture
def populated_db() -> ShapeDb:
    """Database with a few labelled outlines."""
    db = ShapeDb()
    for label, contours in SHAPES.items():
        db.add(Outline.from_coordinates(contours), label)
    return db


class TestRoundTrip:
    """Tests for dumps/loads."""

    def test_queries_survive_round_trip(self, populated_db):
        """Every inserted outline gets the same answer after reload."""
        restored = loads(dumps(populated_db))
        for contours in SHAPES.values():
            shape = Outline.from_coordinates(contours)
            assert restored.query(shape) == populated_db.query(shape)

    def test_structure_survives_round_trip(self, populated_db):
        """Entries and index are restored exactly."""
        restored = loads(dumps(populated_db))
        assert restored.entries == populated_db.entries
        assert restored.points == populated_db.points

    def test_loaded_db_is_frozen(self, populated_db):
        """Deserialized databases are immutable."""
        assert loads(dumps(populated_db)).frozen

    def test_file_round_trip(self, populated_db, tmp_path):
        """write_db/read_db use the file system."""
        path = tmp_path / "Font-Regular"
        write_db(path, populated_db)
        assert read_db(path).entries == populated_db.entries


class TestCorruption:
    """Tests for rejected database files."""

    def test_garbage_bytes(self):
        """Random bytes are reported as corrupt."""
        with pytest.raises(DatabaseCorruptError):
            loads(b"\x00\x01 not a database", "bad")

    def test_truncated_file(self, populated_db):
        """A cut-off file is reported as corrupt."""
        data = dumps(populated_db)
        with pytest.raises(DatabaseCorruptError):
            loads(data[: len(data) // 2])

    def test_wrong_version(self):
        """Other format versions are refused."""
        data = pickle.dumps({"format": FORMAT_NAME, "version": 99, "entries": [], "points": []})
        with pytest.raises(DatabaseCorruptError, match="invalid structure"):
            loads(data)

    def test_index_out_of_range(self):
        """Index lists must refer to existing entries."""
        data = pickle.dumps(
            {"format": FORMAT_NAME, "version": 1, "entries": [], "points": [((0, 0), [3])]}
        )
        with pytest.raises(DatabaseCorruptError):
            loads(data)

    def test_unindexed_points(self):
        """Every stored point must be indexed under its entry."""
        square = [(0, 0), (0, 10), (10, 10), (10, 0)]
        data = pickle.dumps(
            {"format": FORMAT_NAME, "version": 1, "entries": [("A", [square])], "points": []}
        )
        with pytest.raises(DatabaseCorruptError, match="invalid structure"):
            loads(data)

    def test_point_indexed_under_other_entry(self):
        """A point indexed only under another entry is refused."""
        data = pickle.dumps(
            {
                "format": FORMAT_NAME,
                "version": 1,
                "entries": [("A", [[(0, 0)]]), ("B", [[(5, 5)]])],
                "points": [((0, 0), [1]), ((5, 5), [1])],
            }
        )
        with pytest.raises(DatabaseCorruptError, match="invalid structure"):
            loads(data)

    @pytest.mark.parametrize(
        ("point", "indices"),
        [
            (("0", "0"), [0]),
            ((100.0, 0), [0]),
            ((True, 0), [0]),
            ((0, 0), ["0"]),
        ],
    )
    def test_values_are_not_coerced(self, point, indices):
        """Strings, floats and booleans are not accepted as integers."""
        data = pickle.dumps(
            {
                "format": FORMAT_NAME,
                "version": 1,
                "entries": [("A", [[point]])],
                "points": [(point, indices)],
            }
        )
        with pytest.raises(DatabaseCorruptError, match="invalid structure"):
            loads(data)

            loads(data)

    def test_coordinates_out_of_range(self):
        """Coordinates must be on the 16-bit grid."""
        data = pickle.dumps(
            {
                "format": FORMAT_NAME,
                "version": 1,
                "entries": [("A", [[(70000, 0)]])],
                "points": [((70000, 0), [0])],
            }
        )
        with pytest.raises(DatabaseCorruptError):
            loads(data)

    def test_pickled_objects_are_refused(self):
        """Files referencing Python globals are never executed."""
        data = pickle.dumps({"format": FORMAT_NAME, "version": 1, "entries": [], "points": [], "x": Path(".")})
        with pytest.raises(DatabaseCorruptError, match="not allowed"):
            loads(data, "evil")

    def test_error_carries_path(self):
        """The error names the offending file."""
        with pytest.raises(DatabaseCorruptError) as exc_info:
            loads(b"", "db/Font-Regular")
        assert exc_info.value.path == "db/Font-Regular"

    def test_unwritable_path(self, populated_db, tmp_path):
        """Write failures become DatabaseWriteError."""
        with pytest.raises(DatabaseWriteError):
            write_db(tmp_path / "missing-dir" / "Font", populated_db)
