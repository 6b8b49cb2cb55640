# rotor_and_reflector.py
from __future__ import annotations

from debug import Debug
from errors import ConfigurationError, ConversionError
from keyboard_and_plugboard import Alphabet
from permutation import Permutation

debug = Debug()
debug.disable("rotor", "stepping")


class Rotor:
    """A wheel in a machine slot: a Permutation seen through a rotating offset.

    The base rotor never moves and never reflects; the subclasses below
    switch those capabilities on.
    """

    def __init__(self, name: str, permutation: Permutation) -> None:
        self._name = name
        self._permutation = permutation
        self._offset = 0

    # ── identity ─────────────────────────────────────────────────
    @property
    def name(self) -> str:
        return self._name

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    @property
    def size(self) -> int:
        return self._permutation.size

    # ── capabilities ─────────────────────────────────────────────
    def rotates(self) -> bool:
        """True iff I have a ratchet and can move."""
        return False

    def reflecting(self) -> bool:
        return False

    def at_notch(self) -> bool:
        """True iff I let the rotor to my left advance on the next key."""
        return False

    def advance(self) -> None:
        """Move one position, if possible. By default, does nothing."""

    # ── position ─────────────────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._offset

    def set(self, posn: int | str) -> None:
        """Set the setting to index POSN, or to the index of symbol POSN."""
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)
        elif isinstance(posn, bool) or not isinstance(posn, int):
            raise ConversionError(f"Rotor {self._name}: setting {posn!r} is not an index")
        if not (0 <= posn < self.size):
            raise ConversionError(
                f"Rotor {self._name}: setting {posn} out of range 0–{self.size - 1}"
            )
        self._offset = posn
        debug.log("rotor", f"{self._name} set to {posn}")

    # ── signal paths ─────────────────────────────────────────────
    def _check_signal(self, sig: int, direction: str) -> None:
        if not (0 <= sig < self.size):
            raise ConversionError(
                f"Rotor {self._name}: {direction} input {sig}"
                f" out of range 0–{self.size - 1}"
            )

    def convert_forward(self, p: int) -> int:
        self._check_signal(p, "forward")
        shift = (p + self._offset) % self.size
        mapped = self._permutation.permute(shift)
        return self._permutation.wrap(mapped - self._offset)

    def convert_backward(self, e: int) -> int:
        self._check_signal(e, "backward")
        shift = (e + self._offset) % self.size
        mapped = self._permutation.invert(shift)
        return self._permutation.wrap(mapped - self._offset)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name} pos={self._offset}>"


class MovingRotor(Rotor):
    """A rotor with a ratchet, advanced by a pawl, carrying zero or more notches."""

    def __init__(self, name: str, permutation: Permutation, notches: str) -> None:
        super().__init__(name, permutation)
        bad = [ch for ch in notches if ch not in permutation.alphabet]
        if bad:
            raise ConfigurationError(
                f"Rotor {name}: notch characters {bad} are not in the alphabet"
            )
        self._notches = frozenset(notches)

    @property
    def notches(self) -> frozenset[str]:
        return self._notches

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self.alphabet.to_symbol(self.setting) in self._notches

    def advance(self) -> None:
        self.set((self.setting + 1) % self.size)
        debug.log("stepping", f"{self.name} -> {self.alphabet.to_symbol(self.setting)}")


class FixedRotor(Rotor):
    """A rotor that has no ratchet; it hosts the plugboard and non-moving wheels."""


class Reflector(FixedRotor):
    """The leftmost, non-moving wheel that sends the signal back through the stack."""

    def __init__(self, name: str, permutation: Permutation) -> None:
        if not permutation.derangement():
            raise ConfigurationError(
                f"Reflector {name}: wiring must have no fixed points"
            )
        super().__init__(name, permutation)

    def reflecting(self) -> bool:
        return True
