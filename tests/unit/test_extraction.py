"""Tests for reference extraction."""

from pathlib import Path
from unittest.mock import patch

import pytest

from glyphmatcher.core.extraction import (
    add_font,
    build_shape_db,
    label_assignments,
    labels_from_cmap,
    labels_from_names,
    resolve_glyph_name,
)
from glyphmatcher.core.storage import read_db
from glyphmatcher.domain import FontKind, FontSource, Outline
from glyphmatcher.utils.logging import ExtractionLogger

OUTLINES = {
    0: Outline(),
    1: Outline.from_coordinates([[(0, 0), (250, 700), (500, 0)]]),
    2: Outline.from_coordinates([[(0, 0), (0, 700), (400, 700), (400, 0)]]),
}


def make_source(
    kind: FontKind,
    cmap: dict[int, int] | None = None,
    glyph_names: dict[str, int] | None = None,
    postscript_name: str | None = "Stub-Regular",
) -> FontSource:
    return FontSource(
        kind=kind,
        postscript_name=postscript_name,
        glyph_count=len(OUTLINES),
        load_outline=OUTLINES.__getitem__,
        cmap=cmap,
        glyph_names=glyph_names or {},
    )


class TestResolveGlyphName:
    """Tests for glyph name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("A", "A"),
            ("eacute", "é"),
            ("uni0394", "Δ"),
            ("uni00e9", "é"),
            ("u1F600", "\U0001F600"),
            ("f_i", "fi"),
            ("A.sc", "A"),
        ],
    )
    def test_resolved(self, name, expected):
        """Standard names, uniXXXX names and ligatures resolve."""
        assert resolve_glyph_name(name) == expected

    @pytest.mark.parametrize(
        "name",
        [".notdef", "glyph12", "uniZZZZ", "uniD800", "uni110000", "uni", "uni-0", "uni 41", "uni+41", "uni0x41"],
    )
    def test_unresolved(self, name):
        """Names without Unicode meaning yield None."""
        assert resolve_glyph_name(name) is None


class TestLabelSources:
    """Tests for cmap and name based labelling."""

    def test_labels_from_cmap_inverts_mapping(self):
        """Each code point labels its glyph."""
        assert labels_from_cmap({0x42: 2, 0x41: 1}) == [(1, "A"), (2, "B")]

    def test_labels_from_cmap_keeps_shared_glyphs(self):
        """A glyph reached from two code points gets two labels."""
        assert labels_from_cmap({0x41: 1, 0x391: 1}) == [(1, "A"), (1, "Α")]

    def test_labels_from_cmap_skips_invalid_code_points(self):
        """Surrogates are not characters."""
        assert labels_from_cmap({0xD800: 1, 0x41: 2}) == [(2, "A")]

    def test_labels_from_names_skips_unresolved(self):
        """Unresolved names are counted, not fatal."""
        extraction_logger = ExtractionLogger()
        pairs = labels_from_names({"A": 1, ".notdef": 0, "mystery": 2}, extraction_logger)
        assert pairs == [(1, "A")]
        assert extraction_logger.stats.names_unresolved == 2


class TestLabelAssignments:
    """Tests for the per-flavour label source choice."""

    def test_truetype_uses_cmap(self):
        """TrueType fonts are labelled from their cmap."""
        source = make_source(FontKind.TRUETYPE, cmap={0x41: 1})
        assert label_assignments(source) == [(1, "A")]

    def test_truetype_without_cmap(self):
        """TrueType fonts without cmap give no database."""
        assert label_assignments(make_source(FontKind.TRUETYPE)) is None

    def test_opentype_prefers_names(self):
        """Glyph names win over the cmap."""
        source = make_source(FontKind.OPENTYPE, cmap={0x58: 1}, glyph_names={"A": 1})
        assert label_assignments(source) == [(1, "A")]

    def test_opentype_falls_back_to_cmap(self):
        """Without glyph names the cmap is used."""
        source = make_source(FontKind.OPENTYPE, cmap={0x42: 2})
        assert label_assignments(source) == [(2, "B")]

    def test_opentype_without_sources(self):
        """No names and no cmap give no database."""
        assert label_assignments(make_source(FontKind.OPENTYPE)) is None

    def test_cff_uses_names(self):
        """Bare CFF fonts are labelled by glyph names."""
        source = make_source(FontKind.CFF, glyph_names={"B": 2, "A": 1})
        assert label_assignments(source) == [(1, "A"), (2, "B")]

    def test_cff_without_names(self):
        """Bare CFF fonts have no cmap to fall back to."""
        assert label_assignments(make_source(FontKind.CFF, cmap={0x41: 1})) is None


class TestBuildShapeDb:
    """Tests for database construction."""

    def test_builds_frozen_db(self):
        """Each labelled glyph becomes an entry."""
        source = make_source(FontKind.TRUETYPE, cmap={0x41: 1, 0x42: 2})
        db = build_shape_db(source)
        assert db is not None
        assert db.frozen
        assert [label for label, _ in db.entries] == ["A", "B"]
        assert db.query(OUTLINES[2]) == "B"

    def test_no_source_no_db(self):
        """A font without mapping tables yields None."""
        assert build_shape_db(make_source(FontKind.CFF)) is None


class TestAddFont:
    """Tests for writing reference databases."""

    def test_writes_file_named_after_postscript_name(self, tmp_path):
        """The database file carries the PostScript name."""
        source = make_source(FontKind.TRUETYPE, cmap={0x41: 1})
        with patch("glyphmatcher.core.extraction.FontReader") as mock_reader:
            mock_reader.return_value.load.return_value = source
            db_path = add_font(tmp_path, Path("stub.ttf"))

        assert db_path == tmp_path / "Stub-Regular"
        assert read_db(db_path).query(OUTLINES[1]) == "A"

    def test_skips_font_without_postscript_name(self, tmp_path):
        """Fonts without a PostScript name are skipped."""
        source = make_source(FontKind.TRUETYPE, cmap={0x41: 1}, postscript_name=None)
        extraction_logger = ExtractionLogger()
        with patch("glyphmatcher.core.extraction.FontReader") as mock_reader:
            mock_reader.return_value.load.return_value = source
            assert add_font(tmp_path, Path("stub.ttf"), extraction_logger) is None

        assert list(tmp_path.iterdir()) == []
        assert extraction_logger.stats.fonts_skipped == 1

    def test_skips_font_without_mapping(self, tmp_path):
        """Fonts without mapping tables are skipped, not failed."""
        extraction_logger = ExtractionLogger()
        with patch("glyphmatcher.core.extraction.FontReader") as mock_reader:
            mock_reader.return_value.load.return_value = make_source(FontKind.CFF)
            assert add_font(tmp_path, Path("stub.cff"), extraction_logger) is None

        assert extraction_logger.stats.fonts_skipped == 1
        assert extraction_logger.stats.fonts_failed == 0

    def test_skips_path_like_postscript_name(self, tmp_path):
        """Names that are not plain file names are not written."""
        source = make_source(FontKind.TRUETYPE, cmap={0x41: 1}, postscript_name="../escape")
        with patch("glyphmatcher.core.extraction.FontReader") as mock_reader:
            mock_reader.return_value.load.return_value = source
            assert add_font(tmp_path, Path("stub.ttf")) is None
        assert not (tmp_path.parent / "escape").exists()
