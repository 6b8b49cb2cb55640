# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from errors import ConfigurationError, ConversionError, CycleError

debug = Debug()
debug.disable("plugboard")

RESERVED = set("()*")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """An ordered set of symbols numbered 0..size-1 (the machine's keyboard)."""

    def __init__(self, symbols: Iterable[str]) -> None:
        symbols = "".join(symbols)
        if not symbols:
            raise ConfigurationError("Alphabet must contain at least one symbol")

        seen: set[str] = set()
        for ch in symbols:
            if ch in RESERVED or ch.isspace():
                raise ConfigurationError(
                    f"Symbol {ch!r} is reserved and cannot be in an alphabet"
                )
            if ch in seen:
                raise ConfigurationError(f"Symbol {ch!r} repeated in alphabet")
            seen.add(ch)

        self._symbols: str = symbols
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(symbols)}

    @property
    def size(self) -> int:
        return len(self._symbols)

    @property
    def symbols(self) -> str:
        return self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # letter → integer signal
    def to_index(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise ConversionError(
                f"Invalid character {ch!r} for alphabet {self._symbols!r}"
            ) from None

    # integer signal → letter
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self._symbols)):
            hi = len(self._symbols) - 1
            raise ConversionError(f"Signal {index} out of range 0–{hi}")
        return self._symbols[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other._symbols == self._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"


# ── Plugboard ─────────────────────────────────────────────────────
def plugboard_cycles(pairs: str | Sequence[str | tuple[str, str]]) -> str:
    """Normalise a plugboard description into cycle notation.

    A string is taken to already be cycle notation ("(AB) (CD)").  A
    sequence of two-symbol pairs (["AB", "CD"] or [("A", "B"), ...]) is
    turned into one two-cycle per pair.  Symbol validation happens when
    the cycles are handed to a Permutation.
    """
    if isinstance(pairs, str):
        return pairs

    cycles: list[str] = []
    for raw in pairs:
        # normalise to (a, b)
        if isinstance(raw, str):
            if len(raw) != 2:
                raise CycleError(f"Pair {raw!r} must be exactly 2 symbols")
            a, b = raw
        else:
            a, b = raw

        if a == b:
            raise CycleError(f"Plugboard cannot map a symbol to itself: {a}")
        cycles.append(f"({a}{b})")

    spec = " ".join(cycles)
    debug.log("plugboard", f"pairs {list(pairs)} -> {spec!r}")
    return spec
