"""Tests for layout sizing."""

import time

import pytest

from boxcode.layout import BoxLayout
from boxcode.sizer import BoxLayoutConfig, layout_for_bytes, size_for


def _recounting_size_for(bit_length, config):
    """Same growth rule as size_for, recounting every cell after each step."""
    min_width = config.min_width or 2
    min_height = config.min_height or 2
    for left, top, text in config.blackouts:
        min_width = max(min_width, left + len(text) + 1)
        min_height = max(min_height, top + 1)
    max_width = config.max_width or max(bit_length, min_width)
    max_height = config.max_height or max(bit_length, min_height)
    aspect_ratio = config.aspect_ratio or 1.0

    layout = BoxLayout.filled(min_width, min_height)
    for left, top, text in config.blackouts:
        layout.place_text(left, top, text)
    while layout.payload_bits() < bit_length and not (
        layout.height >= max_height and layout.width >= max_width
    ):
        if (
            layout.height / layout.width < aspect_ratio and layout.height < max_height
        ) or layout.width >= max_width:
            layout.add_row()
        else:
            layout.add_column()
    if layout.payload_bits() >= bit_length and layout.height <= max_height and layout.width <= max_width:
        return layout
    return None


class TestSizeFor:
    def test_default_config(self):
        layout = layout_for_bytes(8)
        assert layout.width == 5
        assert layout.height == 5
        assert layout.capacity_bits() == 80

    def test_single_byte_fits_two_by_two(self):
        layout = size_for(8)
        assert (layout.width, layout.height) == (2, 2)

    def test_blackout_raises_minimums(self):
        config = BoxLayoutConfig(
            min_width=4,
            min_height=3,
            aspect_ratio=1.0,
            blackouts=[(1, 1, "Hello")],
        )
        layout = layout_for_bytes(8, config)
        assert layout.width == 7
        assert layout.height == 5
        assert layout.capacity_bits() == 84

    def test_height_capped(self):
        config = BoxLayoutConfig(max_width=80, max_height=5)
        layout = size_for(8 * 150, config)
        assert layout.width == 68
        assert layout.height == 5
        assert layout.capacity_bits() == 1214

    def test_wide_aspect_ratio(self):
        layout = size_for(200, BoxLayoutConfig(aspect_ratio=0.25))
        assert (layout.width, layout.height) == (15, 4)

    def test_tall_aspect_ratio(self):
        layout = size_for(200, BoxLayoutConfig(aspect_ratio=4.0))
        assert layout.height > layout.width

    def test_empty_payload_gets_minimum_grid(self):
        layout = size_for(0)
        assert (layout.width, layout.height) == (2, 2)

    def test_min_width_respected(self):
        layout = size_for(8, BoxLayoutConfig(min_width=6))
        assert layout.width >= 6


class TestUnsatisfiable:
    def test_too_small_bounds(self):
        assert size_for(16, BoxLayoutConfig(max_width=2, max_height=2)) is None

    def test_blackout_wider_than_max_width(self):
        config = BoxLayoutConfig(max_width=4, blackouts=[(0, 0, "too long")])
        assert size_for(8, config) is None

    def test_min_above_max(self):
        assert size_for(8, BoxLayoutConfig(min_height=6, max_height=3)) is None


class TestGrowthProperties:
    def test_dimensions_never_shrink(self):
        previous = (0, 0)
        for bit_length in range(0, 800, 8):
            layout = size_for(bit_length, BoxLayoutConfig(max_width=40))
            assert layout.capacity_bits() >= bit_length
            assert layout.width >= previous[0]
            assert layout.height >= previous[1]
            previous = (layout.width, layout.height)

    def test_blackout_preserved(self):
        text = "Label"
        for byte_length in (1, 8, 40, 120):
            layout = layout_for_bytes(byte_length, BoxLayoutConfig(blackouts=[(2, 1, text)]))
            for i, char in enumerate(text):
                assert layout.blackout_at(2 + i, 1) == char
                assert not layout.is_filled(2 + i, 1)

    def test_each_step_raises_payload_bits(self):
        for template in ("##\n##", "#Hi#\n####", "ab###\n#####\n#####"):
            layout = BoxLayout.from_template(template)
            previous = layout.payload_bits()
            for step in range(24):
                if step % 3 == 2:
                    layout.add_column()
                else:
                    layout.add_row()
                bits = layout.payload_bits()
                assert bits > previous, (template, step)
                previous = bits

    def test_single_row_steps_raise_payload_bits(self):
        layout = BoxLayout.filled(2, 1)
        previous = layout.payload_bits()
        for _ in range(10):
            layout.add_column()
            assert layout.payload_bits() > previous
            previous = layout.payload_bits()

    def test_single_row_sizing_is_fast(self):
        config = BoxLayoutConfig(min_height=1, max_height=1)
        started = time.perf_counter()
        layout = layout_for_bytes(4096, config)
        elapsed = time.perf_counter() - started
        # Interior cells carry 2 bits each; the two end cells carry none.
        assert (layout.width, layout.height) == (16386, 1)
        assert layout.payload_bits() == 8 * 4096
        assert elapsed < 2.0

    def test_matches_full_recount(self):
        configs = [
            BoxLayoutConfig(blackouts=[(0, 0, "ab"), (3, 2, "xyz")]),
            BoxLayoutConfig(min_height=1, max_height=3, blackouts=[(1, 0, "id")]),
            BoxLayoutConfig(aspect_ratio=0.5, blackouts=[(2, 4, "Boxes!")]),
        ]
        for config in configs:
            for bit_length in (0, 6, 40, 123, 400):
                assert size_for(bit_length, config) == _recounting_size_for(bit_length, config)


class TestConfigValidation:
    def test_non_positive_dimension(self):
        with pytest.raises(ValueError, match="min_width"):
            BoxLayoutConfig(min_width=0)

    def test_non_positive_aspect_ratio(self):
        with pytest.raises(ValueError, match="aspect_ratio"):
            BoxLayoutConfig(aspect_ratio=-1.0)

    def test_negative_blackout_position(self):
        with pytest.raises(ValueError, match="non-negative"):
            BoxLayoutConfig(blackouts=[(-1, 0, "x")])

    def test_empty_blackout_text(self):
        with pytest.raises(ValueError, match="empty"):
            BoxLayoutConfig(blackouts=[(0, 0, "")])

    def test_blackouts_stored_as_tuple(self):
        config = BoxLayoutConfig(blackouts=[[1, 1, "Hi"]])
        assert config.blackouts == ((1, 1, "Hi"),)

    def test_label_with_box_glyph(self):
        for text in ("A─B", "┼", "x╋"):
            with pytest.raises(ValueError, match="box-drawing"):
                BoxLayoutConfig(blackouts=[(1, 1, text)])

    def test_label_with_control_or_line_break(self):
        for text in ("a\nb", "a\tb", "a\rb", "\x00", "a\u2028b", "a\u200bb", "a\u00a0b"):
            with pytest.raises(ValueError, match="control or whitespace"):
                BoxLayoutConfig(blackouts=[(1, 1, text)])

    def test_label_with_combining_mark(self):
        for text in ("\u0301ab", "e\u0301", "ab\u0301"):
            with pytest.raises(ValueError, match="one grapheme per character"):
                BoxLayoutConfig(blackouts=[(1, 1, text)])

    def test_label_with_flag_pair(self):
        with pytest.raises(ValueError, match="one grapheme per character"):
            BoxLayoutConfig(blackouts=[(1, 1, "\U0001F1FA\U0001F1F8")])

    def test_printable_labels_accepted(self):
        for text in (" C+c ", "ID: 42", "Café", "日本", "#"):
            config = BoxLayoutConfig(blackouts=[(1, 1, text)])
            assert config.blackouts == ((1, 1, text),)


class TestDeadEnds:
    def test_grows_past_dead_end_cells(self):
        config = BoxLayoutConfig(blackouts=[(0, 0, "ab")])
        layout = size_for(6, config)
        assert (layout.width, layout.height) == (3, 3)
        assert layout.payload_bits() >= 6
