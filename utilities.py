# utilities.py
from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

from errors import ConfigurationError
from keyboard_and_plugboard import Alphabet
from permutation import Permutation
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor
from suites import Alpha26

# ────────────────────────────────────────────────────────────────────────
#  0. Wiring helpers
# ────────────────────────────────────────────────────────────────────────


def cycles_from_wiring(wiring: str, alphabet: Alphabet) -> str:
    """Rewrite a contact wiring (wiring[i] is where alphabet[i] goes) as cycles.

    >>> cycles_from_wiring("BCA", Alphabet("ABC"))
    '(ABC)'
    """
    symbols = alphabet.symbols
    if sorted(wiring) != sorted(symbols):
        raise ConfigurationError("wiring must be a permutation of alphabet")

    image = dict(zip(symbols, wiring))
    seen: set[str] = set()
    cycles: List[str] = []
    for start in symbols:
        if start in seen:
            continue
        cycle = [start]
        seen.add(start)
        nxt = image[start]
        while nxt != start:
            cycle.append(nxt)
            seen.add(nxt)
            nxt = image[nxt]
        cycles.append("(" + "".join(cycle) + ")")
    return " ".join(cycles)


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────

# name: (kind, wiring, notches)
LEGACY_WHEELS: Dict[str, Tuple[str, str, str]] = {
    "I":      ("moving",    "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":     ("moving",    "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":    ("moving",    "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":     ("moving",    "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":      ("moving",    "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":     ("moving",    "JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":    ("moving",    "NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII":   ("moving",    "FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
    "BETA":   ("fixed",     "LEYJVCNIXWPBQMDRTAKZGFUHOS", ""),
    "GAMMA":  ("fixed",     "FSOKANUERHMBTIYCWLQPZXVGJD", ""),
    "A":      ("reflector", "EJMZALYXVBWFCRQUONTSPIKHGD", ""),
    "B":      ("reflector", "YRUHQSLDPXNGOKMIEBFZCWVJAT", ""),
    "C":      ("reflector", "FVPJIAOYEDRZXWGCTKUQSBNMHL", ""),
    "B-THIN": ("reflector", "ENKQAUYWJICOPBLMDXZVFTHRGS", ""),
    "C-THIN": ("reflector", "RDOBJNTKVEHMLFCWZAXGYIPSUQ", ""),
}

WHEEL_KINDS = ("moving", "fixed", "reflector")


def make_rotor(name: str, kind: str, cycles: str, alphabet: Alphabet,
               notches: str = "") -> Rotor:
    """Build one wheel of the requested KIND from cycle notation."""
    perm = Permutation(cycles, alphabet)
    if kind == "moving":
        return MovingRotor(name, perm, notches)
    if kind == "fixed":
        return FixedRotor(name, perm)
    if kind == "reflector":
        return Reflector(name, perm)
    raise ConfigurationError(
        f"Wheel {name}: unknown kind {kind!r}. Expected one of {WHEEL_KINDS}"
    )


def build_rotor_pool(
    alphabet: Alphabet,
    extra: Mapping[str, Mapping[str, str]] | None = None,
) -> List[Rotor]:
    """Return fresh wheel objects for ALPHABET, so machines never share state.

    The historical wheels are included when ALPHABET is the 26-letter one;
    EXTRA maps names to {"kind", "cycles", "notches"} descriptions.
    """
    pool: List[Rotor] = []
    if alphabet.symbols == Alpha26:
        for name, (kind, wiring, notches) in LEGACY_WHEELS.items():
            cycles = cycles_from_wiring(wiring, alphabet)
            pool.append(make_rotor(name, kind, cycles, alphabet, notches))

    for name, desc in (extra or {}).items():
        try:
            kind, cycles = desc["kind"], desc["cycles"]
        except KeyError as e:
            raise ConfigurationError(f"Wheel {name}: missing key {e}") from None
        pool.append(make_rotor(name, kind, cycles, alphabet, desc.get("notches", "")))
    return pool


# ────────────────────────────────────────────────────────────────────────
#  2. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alphabet: Alphabet) -> str:
    """Drop whitespace; upper-case when the alphabet has no lowercase letters."""
    text = "".join(msg.split())
    if not any(ch.islower() for ch in alphabet.symbols):
        text = text.upper()
    return text


def group_blocks(text: str, block: int = 5) -> str:
    """Split TEXT into space-separated groups of BLOCK symbols."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


__all__ = [
    "LEGACY_WHEELS",
    "build_rotor_pool",
    "cycles_from_wiring",
    "group_blocks",
    "make_rotor",
    "preprocess_message",
]
