"""
Zero-copy export tests (ctypes and NumPy).

Verifies:
1. Exports share memory with the buffer
2. The ctypes export includes the NUL terminator
3. A live export pins the buffer: resizing mutations fail with
   STATE_EXPORTED and leave the buffer untouched
4. Dropping the export unpins the buffer
"""

import ctypes
import gc

import pytest

from lenstr import StateError, StringBuffer

pytestmark = pytest.mark.interop


class TestCtypesExport:
    """StringBuffer.as_ctypes()."""

    def test_includes_terminator(self):
        """The ctypes array is length + 1 bytes ending in NUL."""
        with StringBuffer(b"hello") as buf:
            arr = buf.as_ctypes()
            assert len(arr) == 6
            assert arr.raw == b"hello\x00"
            del arr

    def test_readable_as_c_string(self):
        """C consumers see a NUL-terminated string."""
        with StringBuffer(b"hello") as buf:
            arr = buf.as_ctypes()
            assert ctypes.string_at(ctypes.addressof(arr)) == b"hello"
            del arr

    def test_shares_memory(self):
        """Writes through the export are visible in the buffer."""
        with StringBuffer(b"hello") as buf:
            arr = buf.as_ctypes()
            arr[0] = b"J"
            del arr
            assert buf.tobytes() == b"Jello"

    def test_resize_while_exported_raises(self, lenstr):
        """Resizing mutations refuse a pinned buffer and keep it live."""
        buf = StringBuffer(b"  hi  ")
        arr = buf.as_ctypes()

        with pytest.raises(StateError) as exc_info:
            lenstr.trim(buf)
        assert exc_info.value.code == "STATE_EXPORTED"
        assert buf.live
        assert buf.tobytes() == b"  hi  "

        with pytest.raises(StateError):
            lenstr.replace(buf, b" ", b"--")
        assert buf.live

        del arr
        gc.collect()
        buf = lenstr.trim(buf)
        assert buf.tobytes() == b"hi"
        buf.release()

    def test_same_size_edit_allowed_while_exported(self, lenstr):
        """Case changes do not resize, so they work on a pinned buffer."""
        buf = StringBuffer(b"abc")
        arr = buf.as_ctypes()

        buf = lenstr.upper(buf)

        assert arr.raw == b"ABC\x00"
        del arr
        buf.release()

    @pytest.mark.parametrize(
        "name, args",
        [("center", (2,)), ("zfill", (1,)), ("pad_left", (0,)), ("pad", (0,))],
    )
    def test_no_growth_allowed_while_exported(self, lenstr, name, args):
        """Widths that are already met leave a pinned buffer untouched."""
        buf = StringBuffer(b"abc")
        arr = buf.as_ctypes()

        buf = getattr(lenstr, name)(buf, *args)

        assert buf.live
        assert buf.tobytes() == b"abc"
        assert arr.raw == b"abc\x00"
        del arr
        buf.release()

    def test_growing_center_refused_while_exported(self, lenstr):
        """center() past the current length still needs a resizable buffer."""
        buf = StringBuffer(b"abc")
        arr = buf.as_ctypes()

        with pytest.raises(StateError) as exc_info:
            lenstr.center(buf, 7)

        assert exc_info.value.code == "STATE_EXPORTED"
        assert buf.tobytes() == b"abc"
        del arr
        gc.collect()
        buf.release()


class TestNumpyExport:
    """StringBuffer.__array_interface__."""

    def test_asarray_is_zero_copy(self):
        """np.asarray() views the content as uint8 without the terminator."""
        np = pytest.importorskip("numpy")

        with StringBuffer(b"hello") as buf:
            arr = np.asarray(buf)
            assert arr.dtype == np.uint8
            assert arr.shape == (5,)
            assert arr.tolist() == list(b"hello")
            assert not arr.flags.writeable
            del arr

    def test_asarray_pins_buffer(self, lenstr):
        """A live NumPy view blocks resizing until it is dropped."""
        np = pytest.importorskip("numpy")

        buf = StringBuffer(b"ab")
        arr = np.asarray(buf)

        with pytest.raises(StateError) as exc_info:
            lenstr.pad_right(buf, 2)
        assert exc_info.value.code == "STATE_EXPORTED"
        assert buf.live

        del arr
        gc.collect()
        buf = lenstr.pad_right(buf, 2)
        assert buf.tobytes() == b"ab  "
        buf.release()

    def test_array_interface_of_released_buffer(self):
        """A released buffer cannot be exported."""
        pytest.importorskip("numpy")

        buf = StringBuffer(b"ab")
        buf.release()

        with pytest.raises(StateError):
            buf.__array_interface__
