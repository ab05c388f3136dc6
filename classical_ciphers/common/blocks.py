"""
Block driver for polygraphic ciphers.

A residue stream is cut into blocks of ``size`` residues, each block is
multiplied by a key matrix, and the results are concatenated in order.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..errors import InvalidCiphertextLength

logger = logging.getLogger(__name__)


def partition(residues: Sequence[int], size: int,
              filler: Optional[int] = None) -> np.ndarray:
    """
    Split ``residues`` into rows of ``size``.

    With a ``filler`` the final short block is padded with it (encryption).
    Without one, a stream that is not block aligned raises
    InvalidCiphertextLength (decryption).
    """
    if size < 1:
        raise ValueError(f"Block size must be positive, got {size}.")
    stream = [int(r) for r in residues]
    short = len(stream) % size
    if short:
        if filler is None:
            raise InvalidCiphertextLength(len(stream), size)
        pad = size - short
        stream.extend([filler] * pad)
        logger.debug(f"Padded final block with {pad} filler residue(s)")
    return np.array(stream, dtype=np.int64).reshape(-1, size)


def transform(matrix, blocks: np.ndarray, modulus: int) -> np.ndarray:
    """
    Multiply every block (row of ``blocks``) by ``matrix`` mod ``modulus``.

    Row-wise this is ``multiply(matrix, block, modulus)``; done here as one
    product, blocks @ matrix^T.
    """
    key = np.asarray(matrix, dtype=np.int64)
    if blocks.size == 0:
        return blocks.copy()
    if blocks.shape[1] != key.shape[0]:
        raise ValueError(
            f"Block size {blocks.shape[1]} does not match key dimension {key.shape[0]}."
        )
    out = blocks.dot(key.T) % modulus
    logger.debug(f"Transformed {blocks.shape[0]} block(s) of {blocks.shape[1]}")
    return out


def reassemble(blocks: np.ndarray) -> List[int]:
    """Concatenate blocks back into one residue stream, in order."""
    return [int(r) for r in blocks.reshape(-1)]
