"""
Implementation of the Paillier cryptosystem on big-endian byte strings.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from functools import cached_property
from math import gcd
from typing import Optional, Union

from tno.mpc.encryption_schemes.templates import (
    EncryptionSchemeWarning,
    PublicKey,
    SecretKey,
)
from tno.mpc.encryption_schemes.utils import mod_inv, pow_mod

from minipaillier.encoding import BytesLike, bytes_to_int, int_to_bytes
from minipaillier.exceptions import (
    WARN_OPERAND_OUT_OF_RANGE,
    WARN_SMALL_KEY_LENGTH,
    InvalidModulusError,
    MessageTooLongError,
    PaillierError,
)
from minipaillier.primes import MIN_PRIME_PAIR_LENGTH, generate_prime_pair
from minipaillier.randomness import RandomSource, random_unit

DEFAULT_KEY_LENGTH = 4096
MIN_SECURE_KEY_LENGTH = 2048
MIN_KEY_LENGTH = 2 * MIN_PRIME_PAIR_LENGTH


@dataclass(frozen=True, eq=True)
class PaillierPublicKey(PublicKey):
    r"""
    PublicKey for the Paillier encryption scheme.

    Constructs a new Paillier public key $(n, g)$, should have $n=pq$, with $p, q$ prime. The
    generator is fixed to $g = n + 1$.

    :param n: Modulus $n$ of the plaintext space.
    """

    n: int
    g: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "g", self.n + 1)

    @cached_property
    def n_squared(self) -> int:
        """
        Modulus of the ciphertext space.
        """
        return self.n**2


@dataclass(frozen=True, eq=True)
class PaillierPrivateKey(SecretKey):
    r"""
    PrivateKey for the Paillier encryption scheme.

    Constructs a new Paillier private key from the secret primes $p$ and $q$. The public key
    $(n, g)$ with $n = pq$ and the decryption exponent $\lambda = (p-1)(q-1)$ are derived during
    construction, so a private key is usable as soon as it exists.

    :param p: First secret prime.
    :param q: Second secret prime.
    """

    p: int = field(repr=False)
    q: int = field(repr=False)
    public_key: PaillierPublicKey = field(init=False)
    p_minus_one: int = field(init=False, repr=False)
    q_minus_one: int = field(init=False, repr=False)
    lambda_: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "public_key", PaillierPublicKey(self.p * self.q))
        object.__setattr__(self, "p_minus_one", self.p - 1)
        object.__setattr__(self, "q_minus_one", self.q - 1)
        object.__setattr__(self, "lambda_", self.p_minus_one * self.q_minus_one)

    @property
    def n(self) -> int:
        """
        Modulus $n$ of the plaintext space.
        """
        return self.public_key.n

    @property
    def n_squared(self) -> int:
        """
        Modulus $n^2$ of the ciphertext space.
        """
        return self.public_key.n_squared

    @property
    def g(self) -> int:
        """
        Generator $g = n + 1$.
        """
        return self.public_key.g

    @cached_property
    def mu(self) -> int:
        r"""
        Decryption divisor $\mu = \lambda^{-1} \mod n$.

        :raise InvalidModulusError: When $\lambda$ is not invertible modulo $n$.
        """
        if gcd(self.lambda_, self.n) != 1:
            raise InvalidModulusError(
                "The decryption exponent is not invertible modulo n, the key is defective."
            )
        return int(mod_inv(self.lambda_, self.n))


def generate_key(
    random_source: Optional[RandomSource] = None,
    bit_length: int = DEFAULT_KEY_LENGTH,
) -> PaillierPrivateKey:
    r"""
    Generate a Paillier key pair whose public modulus $n$ has the given bit length.

    The two primes are searched concurrently, see `minipaillier.primes.generate_prime_pair`.

    :param random_source: Source of randomness, defaults to `secrets.token_bytes`.
    :param bit_length: Bit length of the public modulus $n$. Should be even and at least
        `MIN_KEY_LENGTH`.
    :raise ValueError: When the bit length is odd or smaller than `MIN_KEY_LENGTH`.
    :raise RandomSourceExhaustedError: When either prime search fails. No key is produced.
    :return: Private key, which holds the matching public key.
    """
    if bit_length < MIN_KEY_LENGTH or bit_length % 2:
        raise ValueError(
            f"Key length should be an even number of at least {MIN_KEY_LENGTH} bits, got "
            f"{bit_length}."
        )
    if bit_length < MIN_SECURE_KEY_LENGTH:
        warnings.warn(WARN_SMALL_KEY_LENGTH, EncryptionSchemeWarning, stacklevel=2)
    p, q = generate_prime_pair(bit_length // 2, random_source)
    return PaillierPrivateKey(p=p, q=q)


def func_l(input_x: int, n: int) -> int:
    r"""
    Paillier specific $L(\cdot)$ function: $L(x) = (x-1)/n$.

    :param input_x: input $x$
    :param n: input $n$ (public key modulus)
    :return: value of $L(x) = (x-1)/n$.
    """
    return (input_x - 1) // n


def encrypt(
    public_key: PaillierPublicKey,
    plaintext: BytesLike,
    random_source: Optional[RandomSource] = None,
) -> tuple[bytes, int]:
    r"""
    Encrypt a plaintext. Given $m \in \mathbb{Z}_n$ and a random $r \in \mathbb{Z}^*_n$, the
    ciphertext is $c = g^m \cdot r^n \mod n^2$, where $g^m = 1 + mn \mod n^2$ as $g = n + 1$.

    :param public_key: Public key to encrypt with.
    :param plaintext: Big-endian encoding of $m$.
    :param random_source: Source of randomness, defaults to `secrets.token_bytes`.
    :raise MessageTooLongError: When $m \geq n$.
    :raise RandomSourceExhaustedError: When drawing the randomizer fails.
    :return: Tuple of the big-endian encoding of $c$ and the randomizer $r$.
    """
    m = bytes_to_int(plaintext)
    if m >= public_key.n:
        raise MessageTooLongError(m, public_key.n)
    n_squared = public_key.n_squared
    randomizer = random_unit(public_key.n, random_source)
    c = (1 + m * public_key.n) % n_squared
    c *= pow_mod(randomizer, public_key.n, n_squared)
    c %= n_squared
    return int_to_bytes(c), randomizer


def decrypt(private_key: PaillierPrivateKey, ciphertext: BytesLike) -> bytes:
    r"""
    Decrypt a ciphertext. Given $c \in \mathbb{Z}^*_{n^2}$, the plaintext is
    $m = L(c^\lambda \mod n^2) \cdot \mu \mod n$.

    :param private_key: Private key to decrypt with.
    :param ciphertext: Big-endian encoding of $c$.
    :raise MessageTooLongError: When $c \geq n^2$.
    :raise InvalidModulusError: When the key's $\lambda$ is not invertible modulo $n$.
    :return: Big-endian encoding of $m$.
    """
    c = bytes_to_int(ciphertext)
    if c >= private_key.n_squared:
        raise MessageTooLongError(c, private_key.n_squared)
    mu = private_key.mu
    c_lambda = pow_mod(c, private_key.lambda_, private_key.n_squared)
    m = func_l(int(c_lambda), private_key.n)
    m *= mu
    m %= private_key.n
    return int_to_bytes(m)


def add_cipher(
    public_key: PaillierPublicKey, cipher_a: BytesLike, cipher_b: BytesLike
) -> bytes:
    r"""
    Secure addition. Computes $c' = c_1 \cdot c_2 \mod n^2$, which decrypts to the sum of the
    underlying plaintexts modulo $n$.

    Both ciphertexts should be encryptions under the given public key; this is not checked.
    Operands outside of $\mathbb{Z}_{n^2}$ only raise a warning.

    :param public_key: Public key both ciphertexts were encrypted with.
    :param cipher_a: Big-endian encoding of $c_1$.
    :param cipher_b: Big-endian encoding of $c_2$.
    :return: Big-endian encoding of $c'$.
    """
    n_squared = public_key.n_squared
    x = bytes_to_int(cipher_a)
    y = bytes_to_int(cipher_b)
    if x >= n_squared or y >= n_squared:
        warnings.warn(WARN_OPERAND_OUT_OF_RANGE, EncryptionSchemeWarning, stacklevel=2)
    return int_to_bytes(x * y % n_squared)


class Paillier:
    """
    Paillier Encryption Scheme bound to a key pair. Everyone holding the public key can encrypt
    and add ciphertexts; decryption requires the private key.
    """

    def __init__(
        self,
        public_key: PaillierPublicKey,
        private_key: Optional[PaillierPrivateKey] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Construct a new Paillier encryption scheme with the given keys.

        :param public_key: Public key for this Paillier scheme.
        :param private_key: Private key for this Paillier scheme, if known.
        :param random_source: Source of randomness for encryption, defaults to
            `secrets.token_bytes`.
        :raise ValueError: When the private key does not match the public key.
        """
        if private_key is not None and private_key.public_key != public_key:
            raise ValueError("The private key does not belong to the given public key.")
        self.public_key = public_key
        self.private_key = private_key
        self.random_source = random_source

    @classmethod
    def from_security_parameter(
        cls,
        key_length: int = DEFAULT_KEY_LENGTH,
        random_source: Optional[RandomSource] = None,
    ) -> Paillier:
        """
        Generate a fresh key pair and construct a Paillier scheme with it.

        :param key_length: Bit length of the public modulus $n$.
        :param random_source: Source of randomness for key generation and encryption.
        :return: Paillier scheme holding both keys.
        """
        private_key = generate_key(random_source, bit_length=key_length)
        return cls(private_key.public_key, private_key, random_source=random_source)

    def public_scheme(self) -> Paillier:
        """
        Copy of this scheme without the private key, to hand out to encrypting parties.

        :return: Paillier scheme holding only the public key.
        """
        return Paillier(self.public_key, random_source=self.random_source)

    def encrypt(self, plaintext: Union[int, BytesLike]) -> bytes:
        """
        Encrypt a plaintext given as non-negative integer or as its big-endian encoding.

        :param plaintext: Plaintext to encrypt.
        :return: Big-endian encoding of the ciphertext.
        """
        if isinstance(plaintext, int):
            plaintext = int_to_bytes(plaintext)
        ciphertext, _ = encrypt(self.public_key, plaintext, self.random_source)
        return ciphertext

    def decrypt(self, ciphertext: BytesLike) -> int:
        """
        Decrypt a ciphertext to its integer plaintext.

        :param ciphertext: Big-endian encoding of the ciphertext.
        :raise PaillierError: When this scheme does not hold the private key.
        :return: Plaintext value.
        """
        if self.private_key is None:
            raise PaillierError("This scheme cannot decrypt, it holds no private key.")
        return bytes_to_int(decrypt(self.private_key, ciphertext))

    def add(self, ciphertext: BytesLike, other: BytesLike) -> bytes:
        """
        Add the plaintexts underlying two ciphertexts.

        :param ciphertext: First ciphertext.
        :param other: Second ciphertext.
        :return: Ciphertext of the sum.
        """
        return add_cipher(self.public_key, ciphertext, other)

    @staticmethod
    def func_l(input_x: int, n: int) -> int:
        r"""
        Paillier specific $L(\cdot)$ function: $L(x) = (x-1)/n$.
        """
        return func_l(input_x, n)

    def __eq__(self, other: object) -> bool:
        """
        Compare this Paillier scheme with another. Only the public keys are compared, as the
        private key might not be known.

        :param other: Object to compare this Paillier scheme with.
        :return: Boolean value representing (in)equality of both objects.
        """
        if not isinstance(other, Paillier):
            return NotImplemented
        return self.public_key == other.public_key

    def __hash__(self) -> int:
        return hash(self.public_key)
