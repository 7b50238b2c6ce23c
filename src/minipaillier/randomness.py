"""
Randomness helpers for key generation and encryption.

A random source is any callable that takes a number of bytes and returns that many random bytes,
e.g. `secrets.token_bytes` (the default), `os.urandom` or the `read` method of a binary stream.
"""

from __future__ import annotations

from math import gcd
from secrets import token_bytes
from typing import Callable, Optional

from minipaillier.exceptions import RandomSourceExhaustedError

RandomSource = Callable[[int], bytes]


def read_random(nr_of_bytes: int, random_source: Optional[RandomSource] = None) -> bytes:
    """
    Read exactly the requested number of bytes from a random source.

    :param nr_of_bytes: Number of random bytes to read.
    :param random_source: Source to read from, defaults to `secrets.token_bytes`.
    :raise RandomSourceExhaustedError: When the source fails or returns fewer bytes than
        requested.
    :return: Random bytes.
    """
    source = token_bytes if random_source is None else random_source
    try:
        data = source(nr_of_bytes)
    except OSError as exc:
        raise RandomSourceExhaustedError(
            f"The random source failed while reading {nr_of_bytes} bytes."
        ) from exc
    if data is None or len(data) < nr_of_bytes:
        raise RandomSourceExhaustedError(
            f"The random source returned {0 if data is None else len(data)} bytes, "
            f"expected {nr_of_bytes}."
        )
    return bytes(data[:nr_of_bytes])


def randbelow(upper_bound: int, random_source: Optional[RandomSource] = None) -> int:
    r"""
    Sample a uniformly random integer from $[0, upper\_bound)$ using rejection sampling.

    :param upper_bound: Exclusive upper bound, must be positive.
    :param random_source: Source to read from, defaults to `secrets.token_bytes`.
    :raise ValueError: When the upper bound is not positive.
    :raise RandomSourceExhaustedError: When the random source fails.
    :return: Uniformly random integer below the upper bound.
    """
    if upper_bound <= 0:
        raise ValueError(f"Upper bound should be positive, got {upper_bound}.")
    bit_length = (upper_bound - 1).bit_length()
    if bit_length == 0:
        return 0
    nr_of_bytes = (bit_length + 7) // 8
    excess_bits = 8 * nr_of_bytes - bit_length
    while True:
        candidate = (
            int.from_bytes(read_random(nr_of_bytes, random_source), "big") >> excess_bits
        )
        if candidate < upper_bound:
            return candidate


def random_unit(modulus: int, random_source: Optional[RandomSource] = None) -> int:
    r"""
    Sample a uniformly random element $r \in \mathbb{Z}^*_{modulus}$.

    Draws from $[0, modulus)$ and redraws while the sample shares a factor with the modulus,
    which in particular excludes 0.

    :param modulus: Modulus of the group, at least 2.
    :param random_source: Source to read from, defaults to `secrets.token_bytes`.
    :raise RandomSourceExhaustedError: When the random source fails.
    :return: Random unit modulo the modulus.
    """
    while True:
        candidate = randbelow(modulus, random_source)
        if gcd(candidate, modulus) == 1:
            return candidate
