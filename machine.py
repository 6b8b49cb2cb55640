# machine.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from errors import ConfigurationError
from keyboard_and_plugboard import Alphabet
from permutation import Permutation
from rotor_and_reflector import FixedRotor, Rotor

debug = Debug()
debug.disable("machine", "stepping")


class Machine:
    """A rotor machine with NUM_ROTORS slots, the rightmost PAWLS of which move.

    Slot 0 always holds the reflector.  ALL_ROTORS is the pool of wheels
    the machine may be loaded with; each one can fill at most one slot.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ConfigurationError(
                f"Machine needs at least 2 rotor slots, got {num_rotors}"
            )
        if not (0 <= pawls < num_rotors):
            raise ConfigurationError(
                f"Pawl count {pawls} must be in 0–{num_rotors - 1}"
            )

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._all_rotors: list[Rotor] = list(all_rotors)
        for rotor in self._all_rotors:
            if rotor.size != alphabet.size:
                raise ConfigurationError(
                    f"Rotor {rotor.name} has {rotor.size} positions,"
                    f" machine alphabet has {alphabet.size}"
                )

        self._slots: list[Rotor] = []
        self._plugboard: Rotor = FixedRotor("plugboard", Permutation("", alphabet))

    # ── accessors ───────────────────────────────────────────────

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def slots(self) -> tuple[Rotor, ...]:
        return tuple(self._slots)

    @property
    def plugboard(self) -> Rotor:
        return self._plugboard

    def setting(self) -> str:
        """The window letters of slots 1..num_rotors-1, left to right."""
        self._require_rotors()
        return "".join(
            self._alphabet.to_symbol(rotor.setting) for rotor in self._slots[1:]
        )

    # ── configuration ───────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Load the rotors called NAMES (NAMES[0] is the reflector), all at 0.

        Nothing changes unless the whole assignment is valid.
        """
        if len(names) != self._num_rotors:
            raise ConfigurationError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        staged: list[Rotor] = []
        used: set[int] = set()
        for slot, name in enumerate(names):
            for j, rotor in enumerate(self._all_rotors):
                if j not in used and rotor.name.upper() == name.upper():
                    used.add(j)
                    staged.append(rotor)
                    break
            else:
                raise ConfigurationError(f"Rotor named {name!r} unavailable for slot {slot}")
            self._check_slot(slot, staged[slot])

        for rotor in staged:
            rotor.set(0)
        self._slots = staged
        debug.log("machine", f"inserted {[r.name for r in staged]}")

    def _check_slot(self, slot: int, rotor: Rotor) -> None:
        first_moving = self._num_rotors - self._pawls
        if slot == 0 and not rotor.reflecting():
            raise ConfigurationError(f"Slot 0 needs a reflector, got {rotor.name}")
        if slot != 0 and rotor.reflecting():
            raise ConfigurationError(
                f"Reflector {rotor.name} may only go in slot 0, not slot {slot}"
            )
        if slot < first_moving and rotor.rotates():
            raise ConfigurationError(
                f"Slot {slot} is fixed but rotor {rotor.name} rotates"
            )
        if slot >= first_moving and not rotor.rotates():
            raise ConfigurationError(
                f"Slot {slot} has a pawl but rotor {rotor.name} does not rotate"
            )

    def set_rotors(self, setting: str) -> None:
        """Rotate slots 1..num_rotors-1 to the symbols of SETTING, left to right."""
        self._require_rotors()
        if len(setting) != self._num_rotors - 1:
            raise ConfigurationError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        # resolve every symbol first so a bad one leaves the rotors alone
        positions = [self._alphabet.to_index(ch) for ch in setting]
        for rotor, posn in zip(self._slots[1:], positions):
            rotor.set(posn)

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.size != self._alphabet.size:
            raise ConfigurationError(
                f"Plugboard has {plugboard.size} positions,"
                f" machine alphabet has {self._alphabet.size}"
            )
        self._plugboard = FixedRotor("plugboard", plugboard)

    def _require_rotors(self) -> None:
        if not self._slots:
            raise ConfigurationError("No rotors inserted")

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press, double-stepping included."""
        slots = self._slots

        # decide which rotors step from the pre-advance state
        marked = {self._num_rotors - 1}
        for i in range(self._num_rotors - 1):
            if slots[i + 1].at_notch() and slots[i].rotates():
                marked.update((i, i + 1))

        for i in sorted(marked):
            slots[i].advance()

    # ── encipher one symbol  ────────────────────────────────────

    def convert(self, c: int) -> int:
        """Advance the machine, then send signal C through it and back."""
        self._require_rotors()
        self._step_rotors()
        debug.log("stepping", f"window {self.setting()}")

        signal = self._plugboard.convert_forward(c)

        for rotor in reversed(self._slots[1:]):
            signal = rotor.convert_forward(signal)

        signal = self._slots[0].convert_forward(signal)

        for rotor in self._slots[1:]:
            signal = rotor.convert_backward(signal)

        signal = self._plugboard.convert_backward(signal)
        debug.log("machine", f"{c} -> {signal}")
        return signal

    def convert_message(self, msg: str) -> str:
        """Encode or decode MSG, moving the rotors as it goes."""
        return "".join(
            self._alphabet.to_symbol(self.convert(self._alphabet.to_index(ch)))
            for ch in msg
        )
