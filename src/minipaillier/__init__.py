"""
Implementation of the Paillier cryptosystem on big-endian byte strings.
"""

# Explicit re-export of all functionalities, such that they can be imported properly. Following
# https://www.python.org/dev/peps/pep-0484/#stub-files and
# https://mypy.readthedocs.io/en/stable/command_line.html#cmdoption-mypy-no-implicit-reexport
from tno.mpc.encryption_schemes.templates import (
    EncryptionSchemeWarning as EncryptionSchemeWarning,
)

from minipaillier.exceptions import InvalidBallotError as InvalidBallotError
from minipaillier.exceptions import InvalidModulusError as InvalidModulusError
from minipaillier.exceptions import MessageTooLongError as MessageTooLongError
from minipaillier.exceptions import PaillierError as PaillierError
from minipaillier.exceptions import PrimeSearchError as PrimeSearchError
from minipaillier.exceptions import (
    RandomSourceExhaustedError as RandomSourceExhaustedError,
)
from minipaillier.paillier import Paillier as Paillier
from minipaillier.paillier import PaillierPrivateKey as PaillierPrivateKey
from minipaillier.paillier import PaillierPublicKey as PaillierPublicKey
from minipaillier.paillier import add_cipher as add_cipher
from minipaillier.paillier import decrypt as decrypt
from minipaillier.paillier import encrypt as encrypt
from minipaillier.paillier import generate_key as generate_key
from minipaillier.tally import Teller as Teller
from minipaillier.tally import TallyResult as TallyResult
from minipaillier.tally import announce as announce
from minipaillier.tally import encrypt_ballot as encrypt_ballot

__version__ = "1.0.0"
