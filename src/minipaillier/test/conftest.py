"""
Fixtures for Paillier tests
"""

import re

import pytest

from minipaillier import (
    EncryptionSchemeWarning,
    PaillierPrivateKey,
    PaillierPublicKey,
    generate_key,
)
from minipaillier.exceptions import WARN_SMALL_KEY_LENGTH
from minipaillier.test import TEST_KEY_LENGTH


@pytest.fixture(name="private_key", scope="module")
def fixture_private_key() -> PaillierPrivateKey:
    """
    Constructs a small Paillier key pair.

    :return: Private key, holding its public key.
    """
    with pytest.warns(EncryptionSchemeWarning, match=re.escape(WARN_SMALL_KEY_LENGTH)):
        return generate_key(bit_length=TEST_KEY_LENGTH)


@pytest.fixture(name="public_key", scope="module")
def fixture_public_key(private_key: PaillierPrivateKey) -> PaillierPublicKey:
    """
    Public key matching the private key fixture.

    :param private_key: Private key fixture.
    :return: Public key.
    """
    return private_key.public_key
