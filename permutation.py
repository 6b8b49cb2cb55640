# permutation.py
from __future__ import annotations

from typing import List

from debug import Debug
from errors import CycleError
from keyboard_and_plugboard import Alphabet

debug = Debug()
debug.disable("permutation")


class Permutation:
    """A permutation of an alphabet's indices, written in cycle notation.

    ``Permutation("(AELT) (BKNW) (C)", alphabet)`` sends A→E, E→L, L→T,
    T→A and so on.  Symbols that appear in no cycle map to themselves and
    whitespace between (or inside) cycles is ignored.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        groups = self._parse(cycles)
        self._cycles = cycles
        self._build(groups)

    # ── parsing ──────────────────────────────────────────────────
    def _parse(self, text: str) -> List[str]:
        groups: List[str] = []
        current: List[str] | None = None
        seen: set[str] = set()

        for pos, ch in enumerate(text):
            if ch.isspace():
                continue
            if ch == "(":
                if current is not None:
                    raise CycleError(f"Nested '(' at position {pos} in {text!r}")
                current = []
            elif ch == ")":
                if current is None:
                    raise CycleError(f"Unmatched ')' at position {pos} in {text!r}")
                groups.append("".join(current))
                current = None
            else:
                if ch not in self._alphabet:
                    raise CycleError(
                        f"Illegal character {ch!r} at position {pos} in {text!r}:"
                        f" not in alphabet {self._alphabet.symbols!r}"
                    )
                if ch in seen:
                    raise CycleError(
                        f"Character {ch!r} repeated at position {pos} in {text!r}"
                    )
                if current is None:
                    raise CycleError(
                        f"Character {ch!r} at position {pos} is outside any cycle"
                    )
                seen.add(ch)
                current.append(ch)

        if current is not None:
            raise CycleError(f"Unclosed '(' in {text!r}")
        return groups

    def _build(self, groups: List[str]) -> None:
        size = self.size
        fwd = list(range(size))
        for group in groups:
            idx = [self._alphabet.to_index(ch) for ch in group]
            for k, i in enumerate(idx):
                fwd[i] = idx[(k + 1) % len(idx)]

        rev = [0] * size
        for i, j in enumerate(fwd):
            rev[j] = i

        self._fwd = fwd
        self._rev = rev
        debug.log("permutation", f"{self._cycles!r} -> {fwd}")

    def add_cycle(self, cycle: str) -> None:
        """Prepend CYCLE (with or without its parentheses) to this permutation.

        The combined cycles are re-validated, so a cycle reusing a symbol
        that is already mapped raises and leaves the permutation unchanged.
        """
        cycle = cycle.strip()
        if not cycle.startswith("("):
            cycle = f"({cycle})"
        combined = f"{cycle} {self._cycles}"
        groups = self._parse(combined)
        self._cycles = combined
        self._build(groups)

    # ── accessors ────────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def size(self) -> int:
        return self._alphabet.size

    @property
    def cycles(self) -> str:
        return self._cycles

    def wrap(self, p: int) -> int:
        """Return P modulo the size of this permutation, always non-negative."""
        return p % self.size

    # ── mapping ──────────────────────────────────────────────────
    def permute(self, p: int | str) -> int | str:
        """Apply the permutation to an index (mod size) or to a symbol."""
        if isinstance(p, str):
            return self._alphabet.to_symbol(self._fwd[self._alphabet.to_index(p)])
        return self._fwd[self.wrap(p)]

    def invert(self, c: int | str) -> int | str:
        """Apply the inverse permutation to an index (mod size) or a symbol."""
        if isinstance(c, str):
            return self._alphabet.to_symbol(self._rev[self._alphabet.to_index(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(j != i for i, j in enumerate(self._fwd))

    def __repr__(self) -> str:
        return f"<Permutation {self._cycles.strip()!r}>"
