"""
Exceptions and warning messages of the minipaillier package.
"""

WARN_OPERAND_OUT_OF_RANGE = (
    "Ciphertext operand is not smaller than the square of the public modulus; "
    "the homomorphic sum is not a valid encryption."
)
WARN_SMALL_KEY_LENGTH = (
    "The requested key length is too small to provide any security. Only use such keys for "
    "testing."
)


class PaillierError(Exception):
    """
    Base class for all errors raised by the Paillier cryptosystem.
    """


class MessageTooLongError(PaillierError, ValueError):
    """
    Raised when a plaintext does not fit the public modulus $n$, or a ciphertext does not fit
    the ciphertext modulus $n^2$.
    """

    def __init__(self, value: int, modulus: int) -> None:
        """
        :param value: Integer value that was out of range.
        :param modulus: Exclusive upper bound that was violated.
        """
        super().__init__(
            f"Message of {value.bit_length()} bits does not fit a modulus of "
            f"{modulus.bit_length()} bits. Please use a larger key or a smaller message."
        )
        self.value = value
        self.modulus = modulus


class RandomSourceExhaustedError(PaillierError):
    """
    Raised when the random source fails to deliver the requested amount of randomness.
    """


class PrimeSearchError(RandomSourceExhaustedError):
    """
    Raised when a prime search is aborted before it found a probable prime.
    """


class InvalidModulusError(PaillierError, ArithmeticError):
    """
    Raised when the decryption exponent is not invertible modulo $n$. This indicates a defective
    key and does not happen for correctly generated keys.
    """


class InvalidBallotError(PaillierError, ValueError):
    """
    Raised when a ballot does not contain exactly one vote per candidate with at most one vote
    cast.
    """
