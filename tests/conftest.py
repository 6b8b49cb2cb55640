"""
Pytest configuration: project root on sys.path, Hypothesis profiles and
the small machines shared by the test modules.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hypothesis import settings, Verbosity

from keyboard_and_plugboard import Alphabet
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector
from suites import Alpha26
from utilities import build_rotor_pool

settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal, deadline=None)
settings.register_profile("ci", max_examples=50, deadline=None)
settings.register_profile("dev", max_examples=10, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def abcd():
    return Alphabet("ABCD")


@pytest.fixture
def alpha26():
    return Alphabet(Alpha26)


@pytest.fixture
def tiny_pool(abcd):
    """A reflector, a fixed wheel and a moving wheel over ABCD."""
    return [
        Reflector("R", Permutation("(AB) (CD)", abcd)),
        FixedRotor("F", Permutation("(ABC)", abcd)),
        MovingRotor("M", Permutation("(ABDC)", abcd), ""),
    ]


@pytest.fixture
def tiny_machine(abcd, tiny_pool):
    machine = Machine(abcd, 3, 1, tiny_pool)
    machine.insert_rotors(["r", "f", "m"])
    machine.set_rotors("AA")
    return machine


@pytest.fixture
def legacy_machine(alpha26):
    """Reflector B with rotors I, II, III, all three moving, at AAA."""
    machine = Machine(alpha26, 4, 3, build_rotor_pool(alpha26))
    machine.insert_rotors(["B", "I", "II", "III"])
    machine.set_rotors("AAA")
    return machine
