"""
Alphabet — symbol <-> residue mapping
=====================================
Every classical cipher in the collection works on residues: the position
of a symbol in an ordered alphabet. ``A`` is 0, ``Z`` is 25, and all
arithmetic happens modulo the alphabet size.

Characters outside the alphabet are either rejected or, with
``pass_through=True``, kept in place untouched. Pass-through characters
never occupy a residue slot, so they cannot shift block boundaries.
"""

import string
from typing import Iterable, List, Optional, Tuple

from ..errors import InvalidAlphabet, OutOfRange, UnmappedSymbol


# Standard alphabets of size m are the first m symbols of this pool.
SYMBOL_POOL = string.ascii_uppercase + " .,?!'" + string.digits

OUTPUT_CASES = ("upper", "lower")


def _case_of(symbols: str) -> Optional[str]:
    """Case input is folded to: "upper", "lower", or None for mixed case."""
    has_lower = any(c.islower() for c in symbols)
    has_upper = any(c.isupper() for c in symbols)
    if has_lower and has_upper:
        return None
    return "lower" if has_lower else "upper"


class Alphabet:
    """
    Ordered, fixed-size set of symbols with a bijection to 0..m-1.

    A single-cased alphabet folds input to its own case before lookup:
    upper-case symbols take upper-cased input, lower-case symbols take
    lower-cased input. Mixed-case alphabets match exactly. For folding
    alphabets ``output_case`` ("upper", "lower", or None for the symbols
    as written) decides how letters are emitted. Output case is
    configuration, never copied from the input.
    """

    ALPHA = string.ascii_uppercase

    def __init__(self, symbols: str = ALPHA, pass_through: bool = False,
                 output_case: Optional[str] = None):
        if len(symbols) < 2:
            raise InvalidAlphabet("Alphabet needs at least two symbols.")
        if len(set(symbols)) != len(symbols):
            raise InvalidAlphabet("Alphabet symbols must be distinct.")
        if output_case is not None and output_case not in OUTPUT_CASES:
            raise InvalidAlphabet(
                f"output_case must be one of {OUTPUT_CASES}, got {output_case!r}."
            )
        self._symbols = symbols
        self._index = {c: i for i, c in enumerate(symbols)}
        self._fold = _case_of(symbols)
        self._pass_through = pass_through
        self._output_case = output_case

    # ── constructors ─────────────────────────────────────────────────────────
    @classmethod
    def standard(cls, size: int = 26, **options) -> "Alphabet":
        """First ``size`` symbols of A-Z, punctuation, then digits."""
        if not 2 <= size <= len(SYMBOL_POOL):
            raise InvalidAlphabet(
                f"Standard alphabet size must be 2..{len(SYMBOL_POOL)}, got {size}."
            )
        return cls(SYMBOL_POOL[:size], **options)

    @classmethod
    def keyed(cls, keyword: str, base: Optional["Alphabet"] = None,
              **options) -> "Alphabet":
        """
        Scrambled alphabet: the keyword's distinct symbols in order, then
        the rest of ``base``. Keyword ``test`` gives ``TESABCDFGHIJ...``.
        """
        base = base or cls()
        ordered = []
        seen = set()
        for pos, ch in enumerate(keyword):
            sym = base._symbols[base.to_residue(ch, pos)]
            if sym not in seen:
                seen.add(sym)
                ordered.append(sym)
        ordered.extend(c for c in base._symbols if c not in seen)
        return cls("".join(ordered), **options)

    # ── properties ───────────────────────────────────────────────────────────
    @property
    def symbols(self) -> str:
        return self._symbols

    @property
    def modulus(self) -> int:
        return len(self._symbols)

    @property
    def pass_through(self) -> bool:
        return self._pass_through

    @property
    def output_case(self) -> Optional[str]:
        return self._output_case

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, ch: str) -> bool:
        return self._normalize(ch) in self._index

    def __eq__(self, other) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return (self._symbols, self._pass_through, self._output_case) == \
               (other._symbols, other._pass_through, other._output_case)

    def __hash__(self) -> int:
        return hash((self._symbols, self._pass_through, self._output_case))

    def __repr__(self) -> str:
        return (f"Alphabet({self._symbols!r}, pass_through={self._pass_through}, "
                f"output_case={self._output_case!r})")

    # ── single symbols ───────────────────────────────────────────────────────
    def _normalize(self, ch: str) -> str:
        if self._fold == "upper":
            return ch.upper()
        if self._fold == "lower":
            return ch.lower()
        return ch

    def to_residue(self, ch: str, position: int = None) -> int:
        """Residue of ``ch``. Raises UnmappedSymbol if it is not in the alphabet."""
        try:
            return self._index[self._normalize(ch)]
        except KeyError:
            raise UnmappedSymbol(ch, position) from None

    def to_char(self, residue: int) -> str:
        """Symbol for ``residue``. Raises OutOfRange outside 0..m-1."""
        if not 0 <= residue < len(self._symbols):
            raise OutOfRange(
                f"Residue {residue} is outside 0..{len(self._symbols) - 1}."
            )
        ch = self._symbols[residue]
        if self._fold is None or self._output_case is None:
            return ch
        return ch.upper() if self._output_case == "upper" else ch.lower()

    # ── whole texts ──────────────────────────────────────────────────────────
    def to_residues(self, text: str) -> List[int]:
        """Strict mapping: every character must be in the alphabet."""
        return [self.to_residue(ch, pos) for pos, ch in enumerate(text)]

    def to_text(self, residues: Iterable[int]) -> str:
        return "".join(self.to_char(int(r)) for r in residues)

    def split(self, text: str) -> Tuple[List[int], List[Optional[str]]]:
        """
        Separate ``text`` into residues and a layout.

        The layout has one entry per input character: ``None`` for a slot
        filled by a residue, or the character itself when it is passed
        through. Without pass-through any unmapped character raises
        UnmappedSymbol.
        """
        residues = []
        layout = []
        for pos, ch in enumerate(text):
            key = self._normalize(ch)
            if key in self._index:
                residues.append(self._index[key])
                layout.append(None)
            elif self._pass_through:
                layout.append(ch)
            else:
                raise UnmappedSymbol(ch, pos)
        return residues, layout

    def join(self, residues: Iterable[int], layout: List[Optional[str]]) -> str:
        """
        Inverse of ``split``: fill the ``None`` slots of ``layout`` with the
        symbols for ``residues``. Surplus residues (padding) go at the end.
        """
        symbols = iter([self.to_char(int(r)) for r in residues])
        out = [next(symbols) if slot is None else slot for slot in layout]
        out.extend(symbols)
        return "".join(out)
