"""
classical_ciphers
=================
Classical (pre-computer) ciphers behind one encrypt/decrypt contract.

Ciphers:
    HILL  — polygraphic matrix substitution over Z/mZ (Lester Hill, 1929)

Shared building blocks:
    Alphabet   — symbol <-> residue mapping, pass-through, keyed alphabets
    modular    — determinant, adjugate, modular inverse over Z/mZ
    blocks     — partition / transform / reassemble for block ciphers

Educational only. These ciphers fall to pencil-and-paper cryptanalysis;
do not protect anything of value with them.

License: Apache 2.0
"""

__version__ = "1.0.0"

from .errors                 import (
    CipherError, InvalidKey, InvalidKeyLength, InvalidAlphabet, UnmappedSymbol,
    OutOfRange, InvalidCiphertextLength, NotInvertible, InternalInvariantError,
)
from .common.alphabet        import Alphabet
from .common.cipher          import Cipher
from .ciphers.hill           import HillCipher, KeyMatrix, KeyConfig

__all__ = [
    "Cipher",
    "Alphabet",
    "HillCipher",
    "KeyMatrix",
    "KeyConfig",
    "CipherError",
    "InvalidKey",
    "InvalidKeyLength",
    "InvalidAlphabet",
    "UnmappedSymbol",
    "OutOfRange",
    "InvalidCiphertextLength",
    "NotInvertible",
    "InternalInvariantError",
]
