"""
Conversion between integers and the big-endian byte strings used at the API boundary.

Encodings carry no explicit width: leading zero bytes are stripped and the integer 0 encodes to
the empty byte string. Compare values numerically, not byte-wise.
"""

from __future__ import annotations

import typing

BytesLike = typing.Union[bytes, bytearray, memoryview]


def int_to_bytes(value: typing.SupportsInt) -> bytes:
    """
    Convert a non-negative integer to its minimal big-endian byte representation.

    :param value: Integer to convert, either a built-in int or a gmpy2 integer.
    :raise ValueError: When the value is negative.
    :return: Big-endian bytes without leading zero bytes.
    """
    n_int = int(value)
    if n_int < 0:
        raise ValueError(f"Only non-negative integers can be encoded, got {n_int}.")
    return n_int.to_bytes((n_int.bit_length() + 7) // 8, "big")


def bytes_to_int(data: BytesLike) -> int:
    """
    Interpret a byte string as a big-endian unsigned integer.

    :param data: Bytes-like object. The empty byte string represents 0.
    :raise TypeError: When data is not bytes-like.
    :return: Integer value of the given bytes.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, got {type(data)}")
    return int.from_bytes(data, "big")
