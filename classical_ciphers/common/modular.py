"""
Modular linear algebra over Z/mZ
================================
Determinant, adjugate, modular inverse and matrix-vector products, with
every result reduced into [0, m-1].

Cipher keys are small (2x2, 3x3, occasionally 4x4), so determinants use
plain recursive cofactor expansion on exact Python integers. Floating
point never enters: a float determinant rounded back to an integer is the
classic way to get a Hill inverse silently wrong.

numpy arrays are the storage format handed back to callers. Entries are
reduced before they go into an int64 array, so products cannot overflow
for any realistic alphabet.
"""

import numbers
from typing import List, Sequence, Tuple

import numpy as np

from ..errors import InvalidKey, NotInvertible


Rows = List[List[int]]


def _check_modulus(modulus: int) -> None:
    if not isinstance(modulus, numbers.Integral) or modulus < 2:
        raise ValueError(f"Modulus must be an integer >= 2, got {modulus!r}.")


def square_rows(matrix) -> Rows:
    """
    Validate ``matrix`` as a non-empty square of integers and return it as
    nested lists of Python ints. Raises InvalidKey otherwise.
    """
    try:
        rows = [list(row) for row in matrix]
    except TypeError:
        raise InvalidKey("Key must be a two-dimensional matrix.") from None
    n = len(rows)
    if n == 0:
        raise InvalidKey("Key matrix is empty.")
    if any(len(row) != n for row in rows):
        raise InvalidKey("Key must be a square matrix.")
    for row in rows:
        for value in row:
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidKey(f"Key entries must be integers, got {value!r}.")
    return [[int(v) for v in row] for row in rows]


def _reduced(matrix, modulus: int) -> Rows:
    return [[v % modulus for v in row] for row in square_rows(matrix)]


def _strike(rows: Rows, row: int, col: int) -> Rows:
    return [r[:col] + r[col + 1:] for i, r in enumerate(rows) if i != row]


def _det(rows: Rows, modulus: int) -> int:
    # rows are already reduced; every partial sum is normalized again
    n = len(rows)
    if n == 1:
        return rows[0][0] % modulus
    if n == 2:
        return (rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]) % modulus
    total = 0
    for col, value in enumerate(rows[0]):
        if value == 0:
            continue
        sign = -1 if col % 2 else 1
        total = (total + sign * value * _det(_strike(rows, 0, col), modulus)) % modulus
    return total


def minor(matrix, row: int, col: int) -> np.ndarray:
    """Submatrix of ``matrix`` with ``row`` and ``col`` removed."""
    rows = square_rows(matrix)
    if len(rows) < 2:
        raise InvalidKey("A 1x1 matrix has no minors.")
    return np.array(_strike(rows, row, col), dtype=np.int64)


def determinant(matrix, modulus: int = 26) -> int:
    """Determinant of ``matrix`` by cofactor expansion, reduced mod ``modulus``."""
    _check_modulus(modulus)
    return _det(_reduced(matrix, modulus), modulus)


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Returns (g, x, y) with a*x + b*y == g == gcd(a, b).
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def mod_inverse(a: int, modulus: int = 26) -> int:
    """
    Multiplicative inverse of ``a`` modulo ``modulus``.

    Raises NotInvertible if gcd(a, modulus) != 1.
    """
    _check_modulus(modulus)
    a %= modulus
    g, x, _ = extended_gcd(a, modulus)
    if g != 1:
        raise NotInvertible(
            f"{a} has no inverse modulo {modulus} (gcd = {g})."
        )
    return x % modulus


def adjugate(matrix, modulus: int = 26) -> np.ndarray:
    """Transposed cofactor matrix, entries in [0, modulus-1]."""
    _check_modulus(modulus)
    rows = _reduced(matrix, modulus)
    n = len(rows)
    if n == 1:
        return np.array([[1 % modulus]], dtype=np.int64)
    adj = [[0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            sign = -1 if (i + j) % 2 else 1
            # cofactor C[i][j] lands at adj[j][i]
            adj[j][i] = (sign * _det(_strike(rows, i, j), modulus)) % modulus
    return np.array(adj, dtype=np.int64)


def inverse_matrix(matrix, modulus: int = 26) -> np.ndarray:
    """
    Inverse of ``matrix`` over Z/mZ:

        mod_inverse(det(M)) * adjugate(M)  (mod m)

    Raises NotInvertible when the determinant shares a factor with m.
    """
    det = determinant(matrix, modulus)
    try:
        inv_det = mod_inverse(det, modulus)
    except NotInvertible:
        raise NotInvertible(
            f"Determinant {det} has no inverse modulo {modulus}."
        ) from None
    adj = adjugate(matrix, modulus)
    return np.array([[(inv_det * int(v)) % modulus for v in row] for row in adj],
                    dtype=np.int64)


def multiply(matrix, vector: Sequence[int], modulus: int = 26) -> np.ndarray:
    """Matrix-vector product; each row sum is reduced once, at the end."""
    _check_modulus(modulus)
    rows = _reduced(matrix, modulus)
    if len(vector) != len(rows):
        raise ValueError(
            f"Vector length {len(vector)} does not match matrix dimension {len(rows)}."
        )
    m = np.array(rows, dtype=np.int64)
    v = np.array([int(x) % modulus for x in vector], dtype=np.int64)
    return m.dot(v) % modulus
