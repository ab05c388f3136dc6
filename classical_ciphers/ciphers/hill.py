"""
Hill Cipher — polygraphic matrix substitution
=============================================
Lester S. Hill, 1929. The first practical polygraphic cipher: blocks of n
letters are treated as vectors and multiplied by an n x n key matrix over
Z/26Z. A single ciphertext letter depends on every letter of its block,
which flattens single-letter frequencies.

A key works only if its determinant is invertible mod m, i.e.
gcd(det, m) == 1. Keys are checked once, at construction; a KeyMatrix or
HillCipher that exists can always decrypt.

Padding: a short final block is filled with ``X`` (or the configured
filler). Decryption never strips it; the recovered plaintext carries the
filler and trimming it is up to the caller.

Not secure. Linear, so a handful of known plaintext blocks recovers the key.
"""

import logging
import math
import numbers
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..common.alphabet import Alphabet
from ..common.blocks import partition, reassemble, transform
from ..common.cipher import Cipher
from ..common.modular import determinant, inverse_matrix, square_rows
from ..errors import (
    InternalInvariantError, InvalidAlphabet, InvalidKey, InvalidKeyLength,
    NotInvertible, OutOfRange,
)

logger = logging.getLogger(__name__)


def _read_only(rows) -> np.ndarray:
    arr = np.array(rows, dtype=np.int64)
    arr.setflags(write=False)
    return arr


def _check_modulus(modulus) -> None:
    if isinstance(modulus, bool) or not isinstance(modulus, numbers.Integral) \
            or modulus < 2:
        raise InvalidKey(f"Modulus must be an integer >= 2, got {modulus!r}.")


class KeyMatrix:
    """
    Immutable n x n key over Z/mZ, invertible by construction.

    Entries are reduced mod m on the way in, so negative values are
    accepted and normalized.
    """

    def __init__(self, values, modulus: int = 26):
        _check_modulus(modulus)
        rows = [[v % modulus for v in row] for row in square_rows(values)]
        det = determinant(rows, modulus)
        if math.gcd(det, modulus) != 1:
            raise InvalidKey(
                f"Key determinant {det} is not coprime with {modulus}; "
                f"the matrix cannot be inverted for decryption."
            )
        try:
            inverse = inverse_matrix(rows, modulus)
        except NotInvertible as exc:
            raise InternalInvariantError(
                "Key passed the determinant check but failed to invert."
            ) from exc
        self._modulus = int(modulus)
        self._det = det
        self._matrix = _read_only(rows)
        self._inverse = _read_only(inverse)
        logger.debug(f"KeyMatrix {len(rows)}x{len(rows)} mod {modulus} accepted")

    @classmethod
    def from_keyword(cls, keyword: str, alphabet: Optional[Alphabet] = None) -> "KeyMatrix":
        """
        Key from a keyword, read row-major into the smallest square that
        holds it exactly: 4 letters -> 2x2, 9 -> 3x3, 16 -> 4x4.
        """
        alphabet = alphabet or Alphabet()
        n = math.isqrt(len(keyword))
        if n == 0 or n * n != len(keyword):
            raise InvalidKeyLength(
                f"Keyword length {len(keyword)} is not a perfect square "
                f"(4, 9, 16, ...)."
            )
        residues = alphabet.to_residues(keyword)
        rows = [residues[i * n:(i + 1) * n] for i in range(n)]
        return cls(rows, alphabet.modulus)

    @classmethod
    def generate(cls, dimension: int, modulus: int = 26) -> "KeyMatrix":
        """Random invertible key, drawn from the ``secrets`` CSPRNG."""
        if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral) \
                or dimension < 1:
            raise InvalidKey(f"Key dimension must be a positive integer, got {dimension!r}.")
        _check_modulus(modulus)
        while True:
            rows = [[secrets.randbelow(modulus) for _ in range(dimension)]
                    for _ in range(dimension)]
            if math.gcd(determinant(rows, modulus), modulus) == 1:
                return cls(rows, modulus)

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def matrix(self) -> np.ndarray:
        """Read-only key array."""
        return self._matrix

    @property
    def inverse(self) -> np.ndarray:
        """Read-only inverse key array, cached at construction."""
        return self._inverse

    def dimension(self) -> int:
        return self._matrix.shape[0]

    def determinant(self) -> int:
        return self._det

    def is_invertible(self) -> bool:
        # Non-invertible keys never get this far.
        return True

    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(int(v) for v in row) for row in self._matrix)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyMatrix):
            return NotImplemented
        return self._modulus == other._modulus and self.rows() == other.rows()

    def __hash__(self) -> int:
        return hash((self._modulus, self.rows()))

    def __repr__(self) -> str:
        n = self.dimension()
        return f"KeyMatrix({n}x{n}, mod {self._modulus})"


@dataclass(frozen=True)
class KeyConfig:
    """
    Options for building a Hill cipher.

    Give exactly one of ``explicit_matrix`` or ``keyword``. When a custom
    ``alphabet`` is supplied its symbols are used, but ``pass_through`` and
    ``output_case`` always come from this config.
    """

    explicit_matrix: Optional[Sequence[Sequence[int]]] = None
    keyword: Optional[str] = None
    alphabet_size: int = 26
    padding_symbol: Optional[int] = None
    pass_through: bool = False
    output_case: str = "upper"
    alphabet: Optional[Alphabet] = None

    def __post_init__(self):
        if (self.explicit_matrix is None) == (self.keyword is None):
            raise InvalidKey("Give exactly one of explicit_matrix or keyword.")
        if self.explicit_matrix is not None:
            # tuples keep the frozen config hashable
            rows = tuple(tuple(row) for row in square_rows(self.explicit_matrix))
            object.__setattr__(self, "explicit_matrix", rows)
        if self.alphabet is not None and len(self.alphabet) != self.alphabet_size:
            raise InvalidAlphabet(
                f"Alphabet has {len(self.alphabet)} symbols but "
                f"alphabet_size is {self.alphabet_size}."
            )

    def build_alphabet(self) -> Alphabet:
        if self.alphabet is not None:
            return Alphabet(self.alphabet.symbols, pass_through=self.pass_through,
                            output_case=self.output_case)
        return Alphabet.standard(self.alphabet_size, pass_through=self.pass_through,
                                 output_case=self.output_case)

    def build_key(self, alphabet: Alphabet) -> KeyMatrix:
        if self.keyword is not None:
            return KeyMatrix.from_keyword(self.keyword, alphabet)
        return KeyMatrix(self.explicit_matrix, alphabet.modulus)


class HillCipher(Cipher):
    """
    Hill cipher over an arbitrary alphabet.

    Example:
        >>> h = HillCipher(KeyMatrix([[3, 3], [2, 5]]))
        >>> h.encrypt("HELP")
        'HIAT'
        >>> h.decrypt("HIAT")
        'HELP'
    """

    FILLER = "X"

    def __init__(self, key, alphabet: Optional[Alphabet] = None,
                 padding_symbol: Optional[int] = None):
        """
        ``key`` is a KeyMatrix, or raw rows validated against the alphabet
        size. ``padding_symbol`` is a residue; by default the residue of
        ``X``, or the last symbol if the alphabet has no ``X``.
        """
        if not isinstance(key, KeyMatrix):
            key = KeyMatrix(key, len(alphabet) if alphabet is not None else 26)
        if alphabet is None:
            alphabet = Alphabet.standard(key.modulus)
        if len(alphabet) != key.modulus:
            raise InvalidAlphabet(
                f"Alphabet has {len(alphabet)} symbols but the key is mod {key.modulus}."
            )
        if padding_symbol is None:
            padding_symbol = (alphabet.to_residue(self.FILLER)
                              if self.FILLER in alphabet else key.modulus - 1)
        elif isinstance(padding_symbol, bool) \
                or not isinstance(padding_symbol, numbers.Integral) \
                or not 0 <= padding_symbol < key.modulus:
            raise OutOfRange(
                f"Padding residue {padding_symbol!r} is outside 0..{key.modulus - 1}."
            )
        self._key = key
        self._alphabet = alphabet
        self._padding = int(padding_symbol)
        n = key.dimension()
        logger.info(f"HillCipher {n}x{n} mod {key.modulus} | "
                    f"pass_through={alphabet.pass_through}")

    @classmethod
    def from_config(cls, config: KeyConfig) -> "HillCipher":
        alphabet = config.build_alphabet()
        return cls(config.build_key(alphabet), alphabet, config.padding_symbol)

    @property
    def key(self) -> KeyMatrix:
        return self._key

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def padding_symbol(self) -> int:
        return self._padding

    @property
    def block_size(self) -> int:
        return self._key.dimension()

    def _apply(self, text: str, matrix: np.ndarray, filler: Optional[int]) -> str:
        residues, layout = self._alphabet.split(text)
        blocks = partition(residues, self.block_size, filler)
        out = reassemble(transform(matrix, blocks, self._key.modulus))
        return self._alphabet.join(out, layout)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt, padding the last block with the filler residue."""
        return self._apply(plaintext, self._key.matrix, self._padding)

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt. Raises InvalidCiphertextLength unless the number of
        alphabet symbols is a multiple of the block size. Padding added at
        encryption is returned as part of the plaintext.
        """
        return self._apply(ciphertext, self._key.inverse, None)

    def __repr__(self) -> str:
        return f"HillCipher({self._key!r}, alphabet={self._alphabet.symbols!r})"


def encrypt(plaintext: str, key: KeyConfig) -> str:
    """Encrypt ``plaintext`` with a cipher built from ``key``."""
    return HillCipher.from_config(key).encrypt(plaintext)


def decrypt(ciphertext: str, key: KeyConfig) -> str:
    """Decrypt ``ciphertext`` with a cipher built from ``key``."""
    return HillCipher.from_config(key).decrypt(ciphertext)
