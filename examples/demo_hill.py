"""
classical_ciphers — Live Demo: Hill cipher
==========================================
Run:  python examples/demo_hill.py

Walks through a 2x2 and a 3x3 key, padding, pass-through, a wider
alphabet, and the errors a bad key or bad ciphertext produce.
"""

import sys, os, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classical_ciphers import (
    Alphabet, HillCipher, KeyMatrix, KeyConfig, CipherError,
)
from classical_ciphers.ciphers import hill
from classical_ciphers.common.modular import determinant, adjugate, mod_inverse

LINE = "═" * 70

def header(step, name):
    print(f"\n{LINE}")
    print(f"  {step} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

def refused(label, exc):
    print(f"  ✗  {label}: {type(exc).__name__}: {exc}")


logging.basicConfig(level=logging.INFO, format=' %(name)s: %(message)s')

print(f"\n{LINE}")
print("  classical_ciphers — Hill Cipher Demo")
print(LINE)

# ── 2x2 ──────────────────────────────────────────────────────────────────────
header(1, "2x2 key [[3, 3], [2, 5]]")
key = KeyMatrix([[3, 3], [2, 5]])
ok("Determinant", f"{key.determinant()}  (gcd with 26 = 1)")
ok("det^-1 mod 26", str(mod_inverse(key.determinant())))
ok("Adjugate", str(adjugate(key.matrix).tolist()))
ok("Inverse key", str(key.inverse.tolist()))
h  = HillCipher(key)
ct = h.encrypt("HELP")
ok("HELP ->", ct)
ok(f"{ct} ->", h.decrypt(ct))

# ── 3x3 keyword ──────────────────────────────────────────────────────────────
header(2, "3x3 keyword GYBNQKURP")
h  = HillCipher(KeyMatrix.from_keyword("GYBNQKURP"))
ok("Key", str(h.key.rows()))
ok("Determinant", str(determinant(h.key.matrix)))
ct = h.encrypt("ACT")
ok("ACT ->", ct)
ok(f"{ct} ->", h.decrypt(ct))

# ── padding ──────────────────────────────────────────────────────────────────
header(3, "Padding — short final block")
h  = HillCipher([[3, 3], [2, 5]])
ct = h.encrypt("HEL")
ok("HEL ->", ct)
ok(f"{ct} ->", h.decrypt(ct) + "   (filler X is kept)")

# ── pass-through ─────────────────────────────────────────────────────────────
header(4, "Pass-through — spaces and punctuation kept in place")
cfg = KeyConfig(keyword="HILL", pass_through=True)
ct  = hill.encrypt("Attack at dawn!", cfg)
ok("Attack at dawn! ->", ct)
ok(f"{ct} ->", hill.decrypt(ct, cfg))

# ── wider alphabet ───────────────────────────────────────────────────────────
header(5, "29-symbol alphabet (A-Z, space, period, comma)")
h  = HillCipher(KeyMatrix.generate(3, 29), Alphabet.standard(29))
msg = "MEET AT NOON."
ct = h.encrypt(msg)
ok(f"{msg} ->", repr(ct))
ok("Decrypted", repr(h.decrypt(ct)))

# ── failures ─────────────────────────────────────────────────────────────────
header(6, "Failures")
for label, action in [
    ("Key det 13",         lambda: KeyMatrix([[13, 0], [0, 1]])),
    ("Key not square",     lambda: KeyMatrix([[1, 2, 3], [4, 5, 6]])),
    ("Keyword of 5",       lambda: KeyMatrix.from_keyword("HELLO")),
    ("Digit in plaintext", lambda: HillCipher([[3, 3], [2, 5]]).encrypt("R2D2")),
    ("Odd ciphertext",     lambda: HillCipher([[3, 3], [2, 5]]).decrypt("HIA")),
]:
    try:
        action()
    except CipherError as exc:
        refused(label, exc)

print(f"\n{LINE}\n")
