"""
Permutation: cycle parsing, mapping both ways, derangements, add_cycle.
"""

import pytest
from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from errors import ConfigurationError, ConversionError, CycleError
from keyboard_and_plugboard import Alphabet
from permutation import Permutation
from suites import Alpha26
from utilities import cycles_from_wiring

ALPHA26 = Alphabet(Alpha26)


@composite
def disjoint_cycles(draw):
    """Cycles covering every letter once, as a list of strings."""
    letters = draw(st.permutations(Alpha26))
    cuts = draw(st.sets(st.integers(min_value=1, max_value=25), max_size=12))
    bounds = [0, *sorted(cuts), 26]
    return ["".join(letters[a:b]) for a, b in zip(bounds, bounds[1:])]


# ============ mapping ============

class TestMapping:

    def test_cycle_order(self, abcd):
        perm = Permutation("(BACD)", abcd)
        assert [perm.permute(i) for i in range(4)] == [2, 0, 3, 1]
        assert [perm.invert(i) for i in range(4)] == [1, 3, 0, 2]

    def test_symbols(self, abcd):
        perm = Permutation("(BACD)", abcd)
        assert perm.permute("B") == "A"
        assert perm.permute("D") == "B"
        assert perm.invert("A") == "B"
        assert perm.invert("B") == "D"

    def test_unnamed_symbols_map_to_themselves(self, abcd):
        perm = Permutation("(AB)", abcd)
        assert perm.permute(2) == 2
        assert perm.permute("D") == "D"

    def test_empty_is_identity(self, abcd):
        perm = Permutation("", abcd)
        assert [perm.permute(i) for i in range(4)] == [0, 1, 2, 3]

    def test_whitespace_ignored(self, abcd):
        perm = Permutation("  ( A B )\t(C D) ", abcd)
        assert perm.permute("A") == "B"
        assert perm.permute("D") == "C"

    def test_single_symbol_group_is_self_loop(self, abcd):
        perm = Permutation("(A) (BCD)", abcd)
        assert perm.permute("A") == "A"
        assert perm.permute("B") == "C"

    def test_index_wraps(self, abcd):
        perm = Permutation("(BACD)", abcd)
        assert perm.permute(-1) == perm.permute(3)
        assert perm.permute(4) == perm.permute(0)
        assert perm.wrap(-5) == 3

    def test_foreign_symbol(self, abcd):
        perm = Permutation("(AB)", abcd)
        with pytest.raises(ConversionError):
            perm.permute("Z")

    def test_accessors(self, abcd):
        perm = Permutation("(AB)", abcd)
        assert perm.size == 4
        assert perm.alphabet is abcd
        assert perm.cycles == "(AB)"


# ============ derangement ============

class TestDerangement:

    def test_full_pairs(self, abcd):
        assert Permutation("(AB) (CD)", abcd).derangement()

    def test_unnamed_symbol_is_fixed(self, abcd):
        assert not Permutation("(ABC)", abcd).derangement()

    def test_self_loop_is_fixed(self, abcd):
        assert not Permutation("(A) (BCD)", abcd).derangement()

    @given(disjoint_cycles())
    def test_derangement_iff_no_one_cycle(self, cycles):
        perm = Permutation(" ".join(f"({c})" for c in cycles), ALPHA26)
        assert perm.derangement() == all(len(c) > 1 for c in cycles)


# ============ validation ============

class TestValidation:

    @pytest.mark.parametrize("cycles", [
        "(AE)",          # E not in ABCD
        "(AB) (BC)",     # B twice
        "(AA)",          # A twice in one cycle
        "(AB",           # unclosed
        "AB)",           # symbol outside a cycle
        ")(AB",          # close before open
        "((AB))",        # nested
    ])
    def test_rejected(self, abcd, cycles):
        with pytest.raises(CycleError):
            Permutation(cycles, abcd)

    def test_cycle_error_is_configuration_error(self, abcd):
        with pytest.raises(ConfigurationError, match="'E'"):
            Permutation("(AE)", abcd)


# ============ add_cycle ============

class TestAddCycle:

    def test_prepends(self, abcd):
        perm = Permutation("(AB)", abcd)
        perm.add_cycle("CD")
        assert perm.permute("C") == "D"
        assert perm.permute("A") == "B"
        assert perm.cycles.startswith("(CD)")
        assert perm.derangement()

    def test_accepts_parentheses(self, abcd):
        perm = Permutation("", abcd)
        perm.add_cycle("(DCB)")
        assert perm.permute("D") == "C"
        assert perm.permute("B") == "D"

    def test_reused_symbol_leaves_permutation_alone(self, abcd):
        perm = Permutation("(AB)", abcd)
        with pytest.raises(CycleError):
            perm.add_cycle("BC")
        assert perm.cycles == "(AB)"
        assert perm.permute("B") == "A"
        assert perm.permute("C") == "C"


# ============ round trip ============

@given(st.permutations(Alpha26), st.integers(min_value=0, max_value=25))
def test_invert_undoes_permute(wiring, i):
    perm = Permutation(cycles_from_wiring("".join(wiring), ALPHA26), ALPHA26)
    assert perm.invert(perm.permute(i)) == i
    assert perm.permute(perm.invert(i)) == i


@given(st.permutations(Alpha26))
def test_wiring_is_preserved(wiring):
    wiring = "".join(wiring)
    perm = Permutation(cycles_from_wiring(wiring, ALPHA26), ALPHA26)
    assert "".join(perm.permute(ch) for ch in Alpha26) == wiring
