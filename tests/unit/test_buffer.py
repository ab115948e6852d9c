"""Unit tests for the Buffer type.

Tests for construction, ownership, shallow and deep copies, and pixel access.
"""

import copy
import gc

import pytest

from rasterlite.domain import Buffer, Ownership


class TestAllocate:
    """Tests for Buffer.allocate."""

    def test_allocate_zeroed(self) -> None:
        """Test that a new buffer is zero-filled and tightly packed."""
        buf = Buffer.allocate(2, 3, 4)
        assert not buf.is_empty()
        assert (buf.height, buf.width, buf.channels, buf.stride) == (2, 3, 4, 12)
        assert buf.tobytes() == bytes(24)
        assert buf.ownership is Ownership.OWNED

    def test_allocate_with_padding(self) -> None:
        """Test that an explicit stride larger than the row is kept."""
        buf = Buffer.allocate(2, 3, 1, stride=8)
        assert buf.stride == 8
        assert len(buf.data) == 16

    def test_allocate_short_stride_raised(self) -> None:
        """Test that a stride below width * channels is raised."""
        buf = Buffer.allocate(2, 3, 3, stride=2)
        assert buf.stride == 9

    @pytest.mark.parametrize(("h", "w", "c"), [(0, 3, 3), (3, 0, 3), (3, 3, 0), (-1, 2, 1)])
    def test_allocate_non_positive_is_empty(self, h: int, w: int, c: int) -> None:
        """Test that non-positive dimensions give the empty buffer."""
        assert Buffer.allocate(h, w, c).is_empty()

    def test_default_is_empty(self) -> None:
        """Test the canonical empty buffer."""
        buf = Buffer()
        assert buf.is_empty()
        assert buf.data is None
        assert not buf.writable
        assert repr(buf) == "Buffer(empty)"


class TestWrap:
    """Tests for wrapping caller memory."""

    def test_wrap_borrowed_shares_caller_memory(self) -> None:
        """Test that writes through a borrowed buffer reach the caller."""
        memory = bytearray(6)
        buf = Buffer.wrap_borrowed(2, 3, 1, memory)
        buf.row(1)[0] = 42
        assert memory[3] == 42
        assert buf.ownership is Ownership.BORROWED

    def test_wrap_too_small_is_empty(self) -> None:
        """Test that a region shorter than height * stride gives the empty buffer."""
        assert Buffer.wrap_borrowed(2, 3, 3, bytearray(10)).is_empty()

    def test_wrap_readonly_not_writable(self) -> None:
        """Test that immutable memory yields a read-only buffer."""
        buf = Buffer.wrap_borrowed(1, 2, 1, b"\x01\x02")
        assert not buf.is_empty()
        assert not buf.writable
        assert buf.pixel(1, 0) == (2,)

    def test_wrap_non_buffer_is_empty(self) -> None:
        """Test that objects without the buffer protocol are rejected."""
        assert Buffer.wrap_borrowed(1, 1, 1, "x").is_empty()

    def test_releaser_runs_once_on_release(self) -> None:
        """Test that the release callback runs exactly once after the last owner."""
        calls = []
        memory = bytearray(4)
        buf = Buffer.wrap_owned(2, 2, 1, memory, releaser=calls.append)
        alias = buf.share()

        buf.release()
        assert calls == []
        alias.release()
        assert calls == [memory]

        alias.release()
        buf.release()
        assert len(calls) == 1

    def test_releaser_runs_on_garbage_collection(self) -> None:
        """Test that dropping the last reference runs the callback."""
        calls = []
        buf = Buffer.wrap_owned(1, 1, 1, bytearray(1), releaser=calls.append)
        del buf
        gc.collect()
        assert len(calls) == 1

    def test_borrowed_never_released(self) -> None:
        """Test that a borrowed buffer ignores the release callback."""
        calls = []
        buf = Buffer.wrap(1, 1, 1, bytearray(1), owning=False, releaser=calls.append)
        buf.release()
        assert calls == []


class TestCopies:
    """Tests for shallow and deep copies."""

    def test_share_aliases_memory(self) -> None:
        """Test that a shallow copy sees writes to the original."""
        buf = Buffer.allocate(2, 2, 3)
        alias = buf.share()
        buf.row(0)[0] = 200
        assert alias.pixel(0, 0)[0] == 200
        assert alias.shares_memory(buf)

    def test_copy_module_shallow(self) -> None:
        """Test that copy.copy is a shallow copy."""
        buf = Buffer.allocate(1, 1, 1)
        assert copy.copy(buf).shares_memory(buf)

    def test_duplicate_is_independent(self) -> None:
        """Test that a deep copy does not see later writes."""
        buf = Buffer.allocate(2, 2, 3)
        buf.fill((1, 2, 3))
        deep = buf.duplicate()
        buf.fill((9, 9, 9))
        assert deep.pixel(1, 1) == (1, 2, 3)
        assert not deep.shares_memory(buf)

    def test_deepcopy_is_duplicate(self) -> None:
        """Test that copy.deepcopy gives an independent buffer."""
        buf = Buffer.allocate(1, 1, 1)
        assert not copy.deepcopy(buf).shares_memory(buf)

    def test_duplicate_drops_padding(self) -> None:
        """Test that a deep copy of a padded buffer is tightly packed."""
        memory = bytearray(range(16))
        buf = Buffer.wrap_borrowed(2, 3, 1, memory, stride=8)
        deep = buf.duplicate()
        assert deep.stride == 3
        assert deep.tobytes() == bytes([0, 1, 2, 8, 9, 10])
        assert deep.ownership is Ownership.OWNED

    def test_duplicate_empty(self) -> None:
        """Test that copying the empty buffer gives the empty buffer."""
        assert Buffer().duplicate().is_empty()
        assert Buffer().share().is_empty()

    def test_assign_rebinds(self) -> None:
        """Test that assign makes both buffers share memory."""
        a = Buffer.allocate(1, 1, 1)
        b = Buffer.allocate(3, 3, 3)
        a.assign(b)
        assert a.shares_memory(b)
        assert (a.height, a.width, a.channels) == (3, 3, 3)

    def test_assign_releases_previous_region(self) -> None:
        """Test that the old region is released when rebinding."""
        calls = []
        a = Buffer.wrap_owned(1, 1, 1, bytearray(1), releaser=calls.append)
        a.assign(Buffer.allocate(1, 1, 1))
        assert len(calls) == 1

    def test_assign_same_region_keeps_it(self) -> None:
        """Test that rebinding to an alias of the same region never frees it."""
        calls = []
        a = Buffer.wrap_owned(1, 1, 1, bytearray(1), releaser=calls.append)
        alias = a.share()
        alias.release()
        a.assign(a.share())
        assert calls == []
        assert not a.is_empty()

    def test_assign_empty_releases(self) -> None:
        """Test that assigning the empty buffer empties the target."""
        a = Buffer.allocate(1, 1, 1)
        a.assign(Buffer())
        assert a.is_empty()


class TestPixelAccess:
    """Tests for row, pixel, fill and tobytes."""

    def test_row_excludes_padding(self) -> None:
        """Test that row views cover only the logical bytes."""
        buf = Buffer.allocate(2, 2, 2, stride=10)
        assert len(buf.row(1)) == 4

    def test_row_out_of_range(self) -> None:
        """Test that an invalid row index raises IndexError."""
        buf = Buffer.allocate(2, 2, 1)
        with pytest.raises(IndexError):
            buf.row(2)
        with pytest.raises(IndexError):
            Buffer().row(0)

    def test_pixel_out_of_range(self) -> None:
        """Test that an invalid pixel raises IndexError."""
        buf = Buffer.allocate(2, 2, 1)
        with pytest.raises(IndexError):
            buf.pixel(-1, 0)

    def test_fill_respects_channels(self) -> None:
        """Test that fill writes only the buffer's channels."""
        buf = Buffer.allocate(2, 2, 3, stride=7)
        buf.fill((10, 20, 30, 40))
        assert buf.pixel(1, 1) == (10, 20, 30)
        assert buf.data[6] == 0

    def test_offset(self) -> None:
        """Test byte offset computation with stride."""
        buf = Buffer.allocate(3, 3, 4, stride=16)
        assert buf.offset(2, 1) == 24

    def test_size_property(self) -> None:
        """Test size reports width then height."""
        buf = Buffer.allocate(2, 5, 1)
        assert buf.size.to_tuple() == (5, 2)
