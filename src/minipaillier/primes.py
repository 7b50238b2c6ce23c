"""
Probable-prime search for Paillier key generation.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import sympy
from tno.mpc.encryption_schemes.utils import USE_GMPY2

from minipaillier.exceptions import PrimeSearchError
from minipaillier.randomness import RandomSource, read_random

if USE_GMPY2:
    import gmpy2

PRIMALITY_ROUNDS = 20
# smallest size with two distinct primes of the form 0b11...1 (29 and 31)
MIN_PRIME_PAIR_LENGTH = 5


def is_probable_prime(candidate: int) -> bool:
    """
    Test whether the candidate is a probable prime.

    Uses gmpy2 with `PRIMALITY_ROUNDS` Miller-Rabin rounds when available, and the BPSW test of
    sympy otherwise.

    :param candidate: Integer to test.
    :return: True if the candidate is a probable prime.
    """
    if USE_GMPY2:
        return bool(gmpy2.is_prime(candidate, PRIMALITY_ROUNDS))
    return bool(sympy.isprime(candidate))


def generate_prime(
    bit_length: int,
    random_source: Optional[RandomSource] = None,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """
    Search a probable prime of exactly the given bit length.

    Every candidate has its two most significant bits set, such that the product of two primes
    found by this function has exactly twice the bit length. The least significant bit is set
    as well, as only odd candidates are of interest.

    :param bit_length: Bit length of the prime, at least 2.
    :param random_source: Source to draw candidates from, defaults to `secrets.token_bytes`.
    :param cancel_event: Event that aborts the search when it is set.
    :raise ValueError: When the bit length is smaller than 2.
    :raise RandomSourceExhaustedError: When the random source fails.
    :raise PrimeSearchError: When the search is cancelled.
    :return: Probable prime of the given bit length.
    """
    if bit_length < 2:
        raise ValueError(f"Prime size must be at least 2 bits, got {bit_length}.")
    nr_of_bytes = (bit_length + 7) // 8
    excess_bits = 8 * nr_of_bytes - bit_length
    top_bits = 0b11 << (bit_length - 2)
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise PrimeSearchError("Prime search was cancelled.")
        candidate = int.from_bytes(read_random(nr_of_bytes, random_source), "big")
        candidate >>= excess_bits
        candidate |= top_bits | 1
        if is_probable_prime(candidate):
            return candidate


def generate_prime_pair(
    bit_length: int, random_source: Optional[RandomSource] = None
) -> tuple[int, int]:
    """
    Search two independent probable primes of the given bit length concurrently.

    The search for $p$ runs on a worker thread while the search for $q$ runs on the calling
    thread. Both share a cancellation event: when either search fails the other one is stopped
    and the first failure is raised. The worker thread is always joined before returning.
    When both searches end up with the same prime, $q$ is searched again.

    :param bit_length: Bit length of each prime.
    :param random_source: Source to draw candidates from, defaults to `secrets.token_bytes`.
    :raise ValueError: When the bit length is smaller than `MIN_PRIME_PAIR_LENGTH`.
    :raise RandomSourceExhaustedError: When the random source fails during either search.
    :return: Tuple $(p, q)$ of distinct probable primes.
    """
    if bit_length < MIN_PRIME_PAIR_LENGTH:
        raise ValueError(
            f"Two distinct primes need at least {MIN_PRIME_PAIR_LENGTH} bits, got {bit_length}."
        )
    cancel_event = threading.Event()

    def cancel_on_failure(future: Future[int]) -> None:
        if future.exception() is not None:
            cancel_event.set()

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="prime-search") as executor:
        future_p = executor.submit(generate_prime, bit_length, random_source, cancel_event)
        future_p.add_done_callback(cancel_on_failure)
        try:
            q = generate_prime(bit_length, random_source, cancel_event)
        except PrimeSearchError:
            if cancel_event.is_set() and future_p.done():
                # the search for p failed first, report that failure instead
                future_p.result()
            raise
        except BaseException:
            cancel_event.set()
            raise
        p = future_p.result()
    while q == p:
        q = generate_prime(bit_length, random_source)
    return p, q
