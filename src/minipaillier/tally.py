"""
Anonymous ballot tallying on top of the additive homomorphism of Paillier.

Every voter encrypts a ballot with one entry per candidate: 1 for the chosen candidate and 0 for
all others. The teller multiplies the ciphertexts per candidate without learning any vote, and
the spokesman, who holds the private key, decrypts and announces the totals.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Optional, Sequence

from minipaillier.encoding import BytesLike, bytes_to_int, int_to_bytes
from minipaillier.exceptions import InvalidBallotError
from minipaillier.paillier import (
    PaillierPrivateKey,
    PaillierPublicKey,
    add_cipher,
    decrypt,
    encrypt,
)
from minipaillier.randomness import RandomSource


def validate_ballot(votes: Sequence[int]) -> None:
    """
    Check that a plaintext ballot holds only the integers 0 and 1, and at most a single 1.

    :param votes: Vote per candidate.
    :raise InvalidBallotError: When the ballot is empty, holds a value other than the integer 0
        or 1, or holds more than one vote.
    """
    if not votes:
        raise InvalidBallotError("A ballot should contain at least one candidate.")
    for index, vote in enumerate(votes):
        # bool is an Integral as well, but not a vote
        is_integer = isinstance(vote, numbers.Integral) and not isinstance(vote, bool)
        if not is_integer or vote not in (0, 1):
            raise InvalidBallotError(
                f"Vote for candidate {index} should be 0 or 1, got {vote}."
            )
    if sum(votes) > 1:
        raise InvalidBallotError("Every voter can cast only a single vote.")


def encrypt_ballot(
    public_key: PaillierPublicKey,
    votes: Sequence[int],
    random_source: Optional[RandomSource] = None,
) -> list[bytes]:
    """
    Validate and encrypt a plaintext ballot, one ciphertext per candidate.

    :param public_key: Public key of the spokesman.
    :param votes: Vote per candidate.
    :param random_source: Source of randomness, defaults to `secrets.token_bytes`.
    :raise InvalidBallotError: When the ballot is invalid.
    :return: Encrypted ballot.
    """
    validate_ballot(votes)
    return [
        encrypt(public_key, int_to_bytes(vote), random_source)[0] for vote in votes
    ]


class Teller:
    """
    Aggregates encrypted ballots into encrypted totals per candidate.
    """

    def __init__(
        self,
        public_key: PaillierPublicKey,
        nr_of_candidates: int,
        random_source: Optional[RandomSource] = None,
    ):
        """
        :param public_key: Public key the ballots are encrypted with.
        :param nr_of_candidates: Number of candidates on every ballot.
        :param random_source: Source of randomness for the initial encryptions of zero.
        :raise ValueError: When there is not at least one candidate.
        """
        if nr_of_candidates < 1:
            raise ValueError(
                f"There should be at least one candidate, got {nr_of_candidates}."
            )
        self.public_key = public_key
        self.nr_of_candidates = nr_of_candidates
        self.nr_of_ballots = 0
        self._totals = [
            encrypt(public_key, b"", random_source)[0] for _ in range(nr_of_candidates)
        ]

    @property
    def encrypted_totals(self) -> list[bytes]:
        """
        Current encrypted total per candidate.
        """
        return list(self._totals)

    def cast(self, encrypted_ballot: Sequence[BytesLike]) -> None:
        """
        Add an encrypted ballot to the running totals.

        :param encrypted_ballot: Ciphertext per candidate.
        :raise InvalidBallotError: When the ballot does not hold a ciphertext per candidate.
        """
        if len(encrypted_ballot) != self.nr_of_candidates:
            raise InvalidBallotError(
                f"Expected a ballot for {self.nr_of_candidates} candidates, got "
                f"{len(encrypted_ballot)}."
            )
        self._totals = [
            add_cipher(self.public_key, total, vote)
            for total, vote in zip(self._totals, encrypted_ballot)
        ]
        self.nr_of_ballots += 1


@dataclass(frozen=True)
class TallyResult:
    """
    Decrypted outcome of an election.

    :param counts: Number of votes per candidate.
    :param winner: Index of the candidate with the most votes.
    """

    counts: tuple[int, ...]
    winner: int

    @property
    def total(self) -> int:
        """
        Total number of votes cast.
        """
        return sum(self.counts)


def announce(
    private_key: PaillierPrivateKey, encrypted_totals: Sequence[BytesLike]
) -> TallyResult:
    """
    Decrypt the totals per candidate and determine the winner. On a tie the candidate that
    appears last wins.

    :param private_key: Private key of the spokesman.
    :param encrypted_totals: Encrypted total per candidate, as produced by a `Teller`.
    :raise ValueError: When there are no totals.
    :return: Decrypted tally.
    """
    if not encrypted_totals:
        raise ValueError("Cannot announce an election without candidates.")
    counts = tuple(bytes_to_int(decrypt(private_key, total)) for total in encrypted_totals)
    winner = 0
    for index, count in enumerate(counts):
        if counts[winner] <= count:
            winner = index
    return TallyResult(counts=counts, winner=winner)
