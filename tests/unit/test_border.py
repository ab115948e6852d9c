"""Unit tests for border extension."""

import pytest

from rasterlite.core import border_map_coord, border_pick_value, copy_make_border
from rasterlite.domain import BorderType, Buffer


def _row_image(values: bytes) -> Buffer:
    """Single-row gray image."""
    return Buffer.wrap_owned(1, len(values), 1, bytearray(values))


class TestMapCoord:
    """Tests for border_map_coord."""

    @pytest.mark.parametrize(
        ("p", "border_type", "expected"),
        [
            (-1, BorderType.REPLICATE, 0),
            (5, BorderType.REPLICATE, 3),
            (-1, BorderType.REFLECT, 0),
            (-2, BorderType.REFLECT, 1),
            (4, BorderType.REFLECT, 3),
            (-1, BorderType.REFLECT_101, 1),
            (-2, BorderType.REFLECT_101, 2),
            (4, BorderType.REFLECT_101, 2),
            (2, BorderType.REFLECT_101, 2),
            (-3, BorderType.CONSTANT, 0),
        ],
    )
    def test_map(self, p: int, border_type: BorderType, expected: int) -> None:
        """Test coordinate folding for a length-4 axis."""
        assert border_map_coord(p, 4, border_type) == expected

    def test_far_coordinates_stay_in_range(self) -> None:
        """Test that repeated reflection always lands inside the axis."""
        for p in range(-20, 24):
            for border_type in BorderType:
                assert 0 <= border_map_coord(p, 3, border_type) < 3

    def test_length_one(self) -> None:
        """Test that a single-pixel axis always maps to 0."""
        assert border_map_coord(-7, 1, BorderType.REFLECT_101) == 0


class TestPickValue:
    """Tests for border_pick_value fan-out."""

    def test_no_values(self) -> None:
        """Test that no values means zero."""
        assert [border_pick_value((), k) for k in range(4)] == [0, 0, 0, 0]

    def test_single_value_broadcast(self) -> None:
        """Test that one value applies to every channel."""
        assert [border_pick_value((9,), k) for k in range(4)] == [9, 9, 9, 9]

    def test_three_values_opaque_alpha(self) -> None:
        """Test that three values give an opaque fourth channel."""
        assert [border_pick_value((1, 2, 3), k) for k in range(4)] == [1, 2, 3, 255]

    def test_two_values_repeat_last(self) -> None:
        """Test that missing channels repeat the last value."""
        assert [border_pick_value((1, 2), k) for k in range(4)] == [1, 2, 2, 2]

    def test_saturated(self) -> None:
        """Test that values are clamped."""
        assert border_pick_value((300,), 0) == 255
        assert border_pick_value((-4,), 0) == 0


class TestCopyMakeBorder:
    """Tests for copy_make_border."""

    def test_constant_single_pixel(self) -> None:
        """Test padding a 1x1 image with a constant border."""
        src = Buffer.wrap_owned(1, 1, 3, bytearray([5, 6, 7]))
        out = copy_make_border(src, 2, 2, 2, 2, BorderType.CONSTANT, (0, 0, 0))
        assert (out.height, out.width, out.channels) == (5, 5, 3)
        assert out.pixel(2, 2) == (5, 6, 7)
        assert out.pixel(0, 0) == (0, 0, 0)
        assert out.pixel(4, 4) == (0, 0, 0)

    def test_constant_fill_value(self) -> None:
        """Test that the fill value reaches the border."""
        src = _row_image(b"\x01\x02")
        out = copy_make_border(src, 0, 0, 1, 1, BorderType.CONSTANT, (9,))
        assert out.tobytes() == b"\x09\x01\x02\x09"

    def test_replicate(self) -> None:
        """Test edge replication."""
        out = copy_make_border(_row_image(b"abcd"), 0, 0, 2, 2, BorderType.REPLICATE)
        assert out.tobytes() == b"aaabcddd"

    def test_reflect(self) -> None:
        """Test reflection with the edge duplicated."""
        out = copy_make_border(_row_image(b"abcd"), 0, 0, 2, 2, BorderType.REFLECT)
        assert out.tobytes() == b"baabcddc"

    def test_reflect_101(self) -> None:
        """Test reflection without duplicating the edge."""
        out = copy_make_border(_row_image(b"abcd"), 0, 0, 2, 2, BorderType.REFLECT_101)
        assert out.tobytes() == b"cbabcdcb"

    def test_vertical_padding(self) -> None:
        """Test that rows are mapped like columns."""
        src = Buffer.wrap_owned(2, 1, 1, bytearray(b"xy"))
        out = copy_make_border(src, 1, 1, 0, 0, BorderType.REPLICATE)
        assert out.tobytes() == b"xxyy"

    def test_negative_margins_clamped(self) -> None:
        """Test that negative margins count as zero."""
        src = _row_image(b"ab")
        out = copy_make_border(src, -3, 0, -1, 1, BorderType.REPLICATE)
        assert out.tobytes() == b"abb"

    def test_strided_source(self) -> None:
        """Test that stride padding never leaks into the output."""
        memory = bytearray(b"ab__cd__")
        src = Buffer.wrap_borrowed(2, 2, 1, memory, stride=4)
        out = copy_make_border(src, 0, 0, 1, 0, BorderType.REPLICATE)
        assert out.tobytes() == b"aabccd"

    def test_empty_source(self) -> None:
        """Test that an empty source gives the empty buffer."""
        assert copy_make_border(Buffer(), 1, 1, 1, 1).is_empty()

    def test_output_is_independent(self) -> None:
        """Test that the padded image does not alias the source."""
        src = _row_image(b"ab")
        out = copy_make_border(src, 0, 0, 0, 0, BorderType.REPLICATE)
        assert out.tobytes() == b"ab"
        assert not out.shares_memory(src)
