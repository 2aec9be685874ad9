"""A fixed-size byte buffer with a read/write position."""

from __future__ import annotations

import os


class Data:
    """Byte buffer that can be read, written and seeked like a stream.

    ``content`` is either the initial bytes or a size for a zero-filled buffer.
    Writes never grow the buffer; use :meth:`resize` for that.
    """

    def __init__(self, content=b""):
        self._buffer = bytearray(content)
        self._position = 0

    def __len__(self):
        return len(self._buffer)

    def __bytes__(self):
        return bytes(self._buffer)

    def __repr__(self):
        return f"Data({bytes(self._buffer)!r})"

    def string(self):
        """The contents as text."""
        return self._buffer.decode("utf-8", errors="surrogateescape")

    def resize(self, count):
        """Grow (zero-filled) or shrink the buffer to ``count`` bytes."""
        if count < 0:
            raise ValueError("size must not be negative")
        if count > len(self._buffer):
            self._buffer.extend(bytes(count - len(self._buffer)))
        else:
            del self._buffer[count:]
        self._position = min(self._position, count)

    def read(self, size=-1):
        """Read up to ``size`` bytes from the current position (all if negative)."""
        remaining = len(self._buffer) - self._position
        if size is None or size < 0:
            size = remaining
        count = min(size, remaining)
        chunk = bytes(self._buffer[self._position : self._position + count])
        self._position += count
        return chunk

    def write(self, buffer):
        """Write as much of ``buffer`` as fits; return the number of bytes written."""
        content = bytes(buffer)
        count = min(len(content), len(self._buffer) - self._position)
        self._buffer[self._position : self._position + count] = content[:count]
        self._position += count
        return count

    def seek(self, offset, whence=os.SEEK_SET):
        """Move the position and return it."""
        if whence == os.SEEK_SET:
            position = offset
        elif whence == os.SEEK_CUR:
            position = self._position + offset
        elif whence == os.SEEK_END:
            position = len(self._buffer) + offset
        else:
            raise ValueError("Bad seek direction")

        if position < 0 or position > len(self._buffer):
            raise ValueError("Bad seek offset")

        self._position = position
        return position