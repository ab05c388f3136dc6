"""
Error taxonomy shared by every cipher in the collection.

Each error also derives from the builtin exception callers would expect
for the same failure, so ``except ValueError`` keeps working.
"""


class CipherError(Exception):
    """Base class for all cipher failures."""


class InvalidKey(CipherError, ValueError):
    """Key matrix is not square, not invertible mod m, or misconfigured."""


class InvalidKeyLength(InvalidKey):
    """Keyword length cannot be reshaped into a square matrix."""


class InvalidAlphabet(CipherError, ValueError):
    """Alphabet has duplicate symbols, too few symbols, or the wrong size."""


class UnmappedSymbol(CipherError, ValueError):
    """Character outside the configured alphabet with pass-through disabled."""

    def __init__(self, symbol: str, position: int = None):
        self.symbol = symbol
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Symbol {symbol!r}{where} is not in the alphabet.")


class OutOfRange(CipherError, ValueError):
    """Residue outside 0..m-1."""


class InvalidCiphertextLength(CipherError, ValueError):
    """Ciphertext residue count is not a multiple of the block size."""

    def __init__(self, length: int, block_size: int):
        self.length = length
        self.block_size = block_size
        super().__init__(
            f"Ciphertext has {length} symbols, not a multiple of the "
            f"block size {block_size}."
        )


class NotInvertible(CipherError, ArithmeticError):
    """Value or matrix has no multiplicative inverse modulo m."""


class InternalInvariantError(CipherError, RuntimeError):
    """A validated key failed to invert. Report this as a bug."""
