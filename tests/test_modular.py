"""
classical_ciphers — shared building blocks
==========================================
Alphabet mapping, modular linear algebra and the block driver.

Run with:  python -m pytest tests/ -v
"""

import sys
import os
import string
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from classical_ciphers.common.alphabet import Alphabet, SYMBOL_POOL
from classical_ciphers.common.blocks   import partition, transform, reassemble
from classical_ciphers.common.modular  import (
    determinant, minor, mod_inverse, extended_gcd, adjugate, inverse_matrix, multiply,
)
from classical_ciphers.errors import (
    InvalidAlphabet, InvalidCiphertextLength, InvalidKey, NotInvertible,
    OutOfRange, UnmappedSymbol,
)

K2 = [[3, 3], [2, 5]]
K3 = [[6, 24, 1], [13, 16, 10], [20, 17, 15]]    # keyword GYBNQKURP

# ── Alphabet ──────────────────────────────────────────────────────────────────
def test_alphabet_residues():
    a = Alphabet()
    assert a.to_residue("A") == 0
    assert a.to_residue("Z") == 25
    assert a.to_char(7) == "H"
    assert len(a) == a.modulus == 26

def test_alphabet_case_normalized():
    a = Alphabet()
    assert a.to_residue("h") == a.to_residue("H") == 7
    assert "q" in a

def test_alphabet_output_case_is_configured():
    assert Alphabet(output_case="lower").to_text([7, 8]) == "hi"
    assert Alphabet().to_text([7, 8]) == "HI"

def test_alphabet_lowercase_symbols_fold_input():
    a = Alphabet(string.ascii_lowercase)
    assert a.to_residue("H") == a.to_residue("h") == 7
    assert a.to_text([7, 8]) == "hi"
    assert Alphabet(string.ascii_lowercase, output_case="upper").to_text([7, 8]) == "HI"

def test_alphabet_mixed_case_matches_exactly():
    a = Alphabet("AaBb")
    assert a.to_residue("a") == 1
    assert a.to_residue("B") == 2
    assert a.to_text([1, 2]) == "aB"
    with pytest.raises(UnmappedSymbol):
        Alphabet("Aab").to_residue("B")

def test_alphabet_bad_output_case():
    with pytest.raises(InvalidAlphabet):
        Alphabet(output_case="title")

def test_alphabet_unmapped_symbol():
    with pytest.raises(UnmappedSymbol) as info:
        Alphabet().to_residues("AB3D")
    assert info.value.symbol == "3"
    assert info.value.position == 2

@pytest.mark.parametrize("residue", [-1, 26, 100])
def test_alphabet_to_char_out_of_range(residue):
    with pytest.raises(OutOfRange):
        Alphabet().to_char(residue)

def test_alphabet_rejects_duplicates_and_tiny():
    with pytest.raises(InvalidAlphabet):
        Alphabet("ABCA")
    with pytest.raises(InvalidAlphabet):
        Alphabet("A")

def test_alphabet_standard_sizes():
    assert Alphabet.standard(26).symbols == Alphabet.ALPHA
    assert Alphabet.standard(29).symbols == Alphabet.ALPHA + " .,"
    assert len(Alphabet.standard(len(SYMBOL_POOL))) == len(SYMBOL_POOL)
    with pytest.raises(InvalidAlphabet):
        Alphabet.standard(len(SYMBOL_POOL) + 1)

def test_alphabet_keyed():
    assert Alphabet.keyed("test").symbols == "TESABCDFGHIJKLMNOPQRUVWXYZ"
    assert Alphabet.keyed("ALphaBEt").symbols == "ALPHBETCDFGIJKMNOQRSUVWXYZ"
    assert Alphabet.keyed("").symbols == Alphabet.ALPHA
    assert Alphabet.keyed("nnhhyqzabguuxwdrvvctspefmjoklii").symbols == \
        "NHYQZABGUXWDRVCTSPEFMJOKLI"

def test_alphabet_keyed_bad_key():
    with pytest.raises(UnmappedSymbol):
        Alphabet.keyed("bad key")

def test_alphabet_split_join_pass_through():
    a = Alphabet(pass_through=True)
    residues, layout = a.split("He, lp!")
    assert residues == [7, 4, 11, 15]
    assert layout == [None, None, ",", " ", None, None, "!"]
    assert a.join(residues, layout) == "HE, LP!"
    # surplus residues are appended
    assert a.join(residues + [23], layout) == "HE, LP!X"

def test_alphabet_split_strict():
    with pytest.raises(UnmappedSymbol):
        Alphabet().split("HE LP")

# ── Modular arithmetic ───────────────────────────────────────────────────────
def test_extended_gcd_identity():
    g, x, y = extended_gcd(240, 46)
    assert g == 2
    assert 240 * x + 46 * y == 2

@pytest.mark.parametrize("a,inv", [(1, 1), (3, 9), (9, 3), (7, 15), (25, 25), (-1, 25)])
def test_mod_inverse(a, inv):
    assert mod_inverse(a, 26) == inv

@pytest.mark.parametrize("a", [0, 2, 13, 26])
def test_mod_inverse_not_invertible(a):
    with pytest.raises(NotInvertible):
        mod_inverse(a, 26)

def test_mod_inverse_bad_modulus():
    with pytest.raises(ValueError):
        mod_inverse(3, 1)

def test_determinant_2x2():
    assert determinant(K2, 26) == 9

def test_determinant_negative_is_normalized():
    # 1*1 - 2*3 = -5, which must come back as 21, not -5
    assert determinant([[1, 2], [3, 1]], 26) == 21
    assert determinant([[1, 2], [3, 4]], 26) == 24

def test_determinant_3x3():
    # exact determinant is 441
    assert determinant(K3, 26) == 441 % 26 == 25
    assert determinant([[2, 4, 5], [9, 2, 1], [3, 17, 7]], 26) == 489 % 26

def test_determinant_4x4_matches_exact():
    m = [[1, 2, 0, 3], [4, 1, 2, 0], [0, 3, 1, 2], [2, 0, 4, 1]]
    exact = round(np.linalg.det(np.array(m, dtype=float)))
    assert determinant(m, 26) == exact % 26

def test_determinant_1x1_and_entries_reduced():
    assert determinant([[27]], 26) == 1
    assert determinant([[-3]], 26) == 23

def test_determinant_rejects_non_square():
    with pytest.raises(InvalidKey):
        determinant([[2, 4], [9, 2], [3, 17]], 26)
    with pytest.raises(InvalidKey):
        determinant([], 26)
    with pytest.raises(InvalidKey):
        determinant([[1.5, 0], [0, 1]], 26)

def test_minor():
    assert minor(K3, 0, 0).tolist() == [[16, 10], [17, 15]]
    assert minor(K3, 1, 2).tolist() == [[6, 24], [20, 17]]

def test_adjugate_2x2():
    assert adjugate(K2, 26).tolist() == [[5, 23], [24, 3]]

def test_adjugate_entries_in_range():
    adj = adjugate(K3, 26)
    assert adj.min() >= 0 and adj.max() < 26

def test_inverse_matrix_2x2():
    inv = inverse_matrix(K2, 26)
    assert inv.tolist() == [[15, 17], [20, 9]]
    assert (np.array(K2).dot(inv) % 26).tolist() == [[1, 0], [0, 1]]

def test_inverse_matrix_3x3():
    assert inverse_matrix(K3, 26).tolist() == [[8, 5, 10], [21, 8, 21], [21, 12, 8]]

def test_inverse_matrix_not_invertible():
    with pytest.raises(NotInvertible):
        inverse_matrix([[2, 0], [0, 1]], 26)
    # same matrix is fine in a prime modulus
    assert inverse_matrix([[2, 0], [0, 1]], 29).tolist() == [[15, 0], [0, 1]]

def test_multiply():
    assert multiply(K2, [7, 4], 26).tolist() == [7, 8]
    assert multiply(K2, [11, 15], 26).tolist() == [0, 19]
    assert multiply(K3, [0, 2, 19], 26).tolist() == [15, 14, 7]

def test_multiply_dimension_mismatch():
    with pytest.raises(ValueError):
        multiply(K2, [1, 2, 3], 26)

# ── Block driver ─────────────────────────────────────────────────────────────
def test_partition_aligned():
    assert partition([7, 4, 11, 15], 2).tolist() == [[7, 4], [11, 15]]

def test_partition_pads_with_filler():
    assert partition([7, 4, 11], 2, filler=23).tolist() == [[7, 4], [11, 23]]
    assert partition([1], 3, filler=0).tolist() == [[1, 0, 0]]

def test_partition_misaligned_without_filler():
    with pytest.raises(InvalidCiphertextLength) as info:
        partition([7, 8, 0], 2)
    assert info.value.length == 3
    assert info.value.block_size == 2

def test_partition_empty():
    assert partition([], 2).shape == (0, 2)

def test_transform_matches_multiply():
    blocks = partition([7, 4, 11, 15], 2)
    out = transform(K2, blocks, 26)
    assert out.tolist() == [multiply(K2, b, 26).tolist() for b in blocks]
    assert reassemble(out) == [7, 8, 0, 19]
