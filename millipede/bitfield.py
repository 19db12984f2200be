"""Big-endian bit field access on byte buffers."""

from __future__ import annotations

_CHUNK_BITS = 64


def _span(data, beg: int, length: int) -> tuple[int, int, int]:
    if beg < 0 or length < 0:
        raise ValueError("bit position and length must be non-negative")
    first = beg >> 3
    last = (beg + length - 1) >> 3
    if last >= len(data):
        raise IndexError("bit field extends past the end of the buffer")
    shift = (-beg - length) & 7
    return first, last, shift


def getbits(data, beg: int, length: int) -> int:
    """Return the unsigned value of ``length`` bits starting at bit ``beg``.

    Bits are numbered from the most significant bit of the first byte.
    """
    if length == 0:
        return 0
    first, last, shift = _span(data, beg, length)
    chunk = int.from_bytes(bytes(data[first:last + 1]), "big")
    return (chunk >> shift) & ((1 << length) - 1)


def setbits(data, beg: int, length: int, value: int) -> None:
    """Store the low ``length`` bits of ``value`` at bit ``beg`` in ``data``.

    Surrounding bits are left untouched.
    """
    if length == 0:
        return
    first, last, shift = _span(data, beg, length)
    nbytes = last - first + 1
    chunk = int.from_bytes(bytes(data[first:last + 1]), "big")
    field_mask = (1 << length) - 1
    chunk &= ~(field_mask << shift)
    chunk |= (value & field_mask) << shift
    data[first:last + 1] = chunk.to_bytes(nbytes, "big")


def _bit_location(pos: int) -> tuple[int, int]:
    if pos < 0:
        raise ValueError("bit position must be non-negative")
    return pos >> 3, 1 << (pos & 7)


def getbit(data, pos: int) -> int:
    """Return a single bit, counted from the least significant bit of each byte."""
    index, mask = _bit_location(pos)
    byte = data[index]
    return 1 if byte & mask else 0


def setbit(data, pos: int) -> None:
    """Set a single bit, counted from the least significant bit of each byte."""
    index, mask = _bit_location(pos)
    data[index] |= mask


def copybits(dst, pos_dst: int, src, pos_src: int, length: int) -> tuple[int, int]:
    """Copy ``length`` bits from ``src`` at ``pos_src`` to ``dst`` at ``pos_dst``.

    Return the updated ``(pos_dst, pos_src)`` positions.
    """
    while length:
        step = min(length, _CHUNK_BITS)
        setbits(dst, pos_dst, step, getbits(src, pos_src, step))
        length -= step
        pos_src += step
        pos_dst += step
    return pos_dst, pos_src