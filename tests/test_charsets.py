"""Tests for character set presets and braille encoding."""

import numpy as np
import pytest

from ascii_dither.core.charsets import (
    CHARSETS,
    Charset,
    CharsetName,
    braille_char,
    braille_from_matrix,
    load_charset,
)
from ascii_dither.core.errors import ConfigurationError
from ascii_dither.core.matrix import Matrix


class TestCharsets:
    def test_simple_charset_exists(self):
        cs = CHARSETS[CharsetName.SIMPLE]
        assert cs.name == "simple"
        assert len(cs) > 0

    def test_char_for_value_boundaries(self):
        cs = CHARSETS[CharsetName.SIMPLE]
        assert cs.char_for_value(0.0) == cs.chars[0]
        assert cs.char_for_value(1.0) == cs.chars[-1]
        assert cs.char_for_value(0.5) == cs.chars[5]

    def test_char_for_value_floor(self):
        cs = Charset("abcd", "abcd")
        assert cs.char_for_value(0.24) == "a"
        assert cs.char_for_value(0.25) == "b"
        assert cs.char_for_value(0.99) == "d"

    def test_char_for_index_clamps(self):
        cs = Charset("abc", "abc")
        assert cs.char_for_index(-1.0) == "a"
        assert cs.char_for_index(0.0) == "a"
        assert cs.char_for_index(2.0) == "c"
        assert cs.char_for_index(7.0) == "c"

    def test_map_matrix_doubles_glyphs(self):
        cs = Charset("ab", "ab")
        m = Matrix.from_values([0.0, 1.0, 1.0, 0.0], width=2, height=2)
        assert cs.map_matrix(m) == ["aabb", "bbaa"]

    def test_map_matrix_indexed(self):
        cs = Charset("xyz", "xyz")
        m = Matrix.from_values([-1.0, 0.0, 1.0], width=3, height=1)
        assert cs.map_matrix(m, indexed=True, repeat=1) == ["xxy"]

    def test_map_matrix_char_format(self):
        cs = Charset("ab", "ab")
        m = Matrix.from_values([1.0], width=1, height=1)
        assert cs.map_matrix(m, repeat=1, char_fmt="[{}]") == ["[b]"]

    def test_map_matrix_shape(self):
        cs = CHARSETS[CharsetName.SIMPLE]
        m = Matrix.from_array(np.random.rand(10, 20))
        lines = cs.map_matrix(m)
        assert len(lines) == 10
        assert all(len(line) == 40 for line in lines)

    def test_detailed_charset_length(self):
        assert len(CHARSETS[CharsetName.DETAILED]) > 20

    def test_blocks_charset(self):
        cs = CHARSETS[CharsetName.BLOCKS]
        assert "█" in cs.chars
        assert " " == cs.chars[0]

    def test_empty_charset(self):
        with pytest.raises(ConfigurationError):
            Charset("empty", "")


class TestLoadCharset:
    def test_strips_whitespace_and_newlines(self, tmp_path):
        path = tmp_path / "ramp.txt"
        path.write_text("  .:-\n=+*\n", encoding="utf-8")
        cs = load_charset(path)
        assert cs.chars == ".:-=+*"
        assert cs.name == "ramp"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_charset(tmp_path / "nope.txt")

    def test_blank_file(self, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("\n  \n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_charset(path)


class TestBraille:
    def test_braille_char_empty(self):
        """All zeros should give blank braille (U+2800)."""
        dots = np.zeros((4, 2), dtype=bool)
        assert braille_char(dots) == "⠀"

    def test_braille_char_full(self):
        """All ones should give full braille (U+28FF)."""
        dots = np.ones((4, 2), dtype=bool)
        assert braille_char(dots) == "⣿"

    def test_braille_char_top_left(self):
        """Only top-left dot should be U+2801."""
        dots = np.zeros((4, 2), dtype=bool)
        dots[0, 0] = True
        assert braille_char(dots) == "⠁"

    def test_braille_char_bottom_right(self):
        dots = np.zeros((4, 2), dtype=bool)
        dots[3, 1] = True
        assert braille_char(dots) == chr(0x2800 + 0x80)

    def test_braille_from_matrix_basic(self):
        m = Matrix(2, 4, 1.0)
        assert braille_from_matrix(m) == ["⣿"]

    def test_braille_from_matrix_dimensions(self):
        """8x4 matrix should produce 2 lines of 2 chars each."""
        lines = braille_from_matrix(Matrix(4, 8))
        assert len(lines) == 2
        assert all(len(line) == 2 for line in lines)

    def test_braille_from_matrix_padding(self):
        """Non-multiple dimensions should be padded."""
        lines = braille_from_matrix(Matrix(3, 5))
        assert len(lines) == 2
        assert all(len(line) == 2 for line in lines)
