"""
Unit tests for atomic formulas, literals and clause templates.

Core claims:
    - Happens(Foo,10) is ground: 0 variables, 2 constants, 0 functions
    - Happens(Foo,t) is not ground: 1 variable
    - Atoms with a function argument expose exactly that function, and
      count the constants / variables nested inside it
    - The signature depends only on name and arity
    - terms is the direct argument list, not the flattened tree
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from groundnet.core.atoms import AtomSignature, AtomicFormula, Literal, WeightedClause
from groundnet.core.terms import Constant, Variable, Function
from groundnet.errors import MalformedStructureError


def walking(arg):
    return Function("walking", (arg,), "event")


# ── Happens(Foo,10) / Happens(Foo,t) ─────────────────────────────────────────

class TestGroundAtom:
    atom = AtomicFormula("Happens", [Constant("Foo"), Constant("10")])

    def test_renders(self):
        assert self.atom.to_text() == "Happens(Foo,10)"

    def test_signature(self):
        assert self.atom.signature == AtomSignature("Happens", 2)

    def test_no_variables(self):
        assert self.atom.variables == frozenset()

    def test_no_functions(self):
        assert self.atom.functions == frozenset()

    def test_is_ground(self):
        assert self.atom.is_ground

    def test_two_constants(self):
        assert self.atom.constants == {Constant("Foo"), Constant("10")}
        assert self.atom.terms == (Constant("Foo"), Constant("10"))


class TestAtomWithVariable:
    atom = AtomicFormula("Happens", [Constant("Foo"), Variable("t", "time")])

    def test_renders(self):
        assert self.atom.to_text() == "Happens(Foo,t)"

    def test_one_variable(self):
        assert self.atom.variables == {Variable("t", "time")}

    def test_not_ground(self):
        assert not self.atom.is_ground

    def test_terms(self):
        assert self.atom.terms == (Constant("Foo"), Variable("t", "time"))


# ── Atoms with a function argument ───────────────────────────────────────────

FUNCTION_CASES = [
    # (term1, term2, constants, variables, text)
    (walking(Constant("ID0")), Constant("0"), 2, 0, "Happens(walking(ID0),0)"),
    (walking(Constant("ID0")), Variable("t", "time"), 1, 1, "Happens(walking(ID0),t)"),
    (walking(Variable("x", "id")), Constant("0"), 1, 1, "Happens(walking(x),0)"),
    (walking(Variable("x", "id")), Variable("t", "time"), 0, 2, "Happens(walking(x),t)"),
]


@pytest.mark.parametrize("term1,term2,n_const,n_var,text", FUNCTION_CASES)
class TestAtomWithFunction:
    def test_renders(self, term1, term2, n_const, n_var, text):
        assert AtomicFormula("Happens", (term1, term2)).to_text() == text

    def test_constant_count(self, term1, term2, n_const, n_var, text):
        assert len(AtomicFormula("Happens", (term1, term2)).constants) == n_const

    def test_variable_count(self, term1, term2, n_const, n_var, text):
        assert len(AtomicFormula("Happens", (term1, term2)).variables) == n_var

    def test_single_function(self, term1, term2, n_const, n_var, text):
        functions = AtomicFormula("Happens", (term1, term2)).functions
        assert functions == {term1}

    def test_groundness(self, term1, term2, n_const, n_var, text):
        assert AtomicFormula("Happens", (term1, term2)).is_ground == (n_var == 0)

    def test_terms_are_depth_one(self, term1, term2, n_const, n_var, text):
        assert AtomicFormula("Happens", (term1, term2)).terms == (term1, term2)


class TestExtraction:
    def test_nested_functions_all_collected(self):
        inner = Function("g", (Variable("x", "id"),), "id")
        outer = Function("f", (inner,), "event")
        atom = AtomicFormula("P", (outer,))
        assert atom.functions == {outer, inner}
        assert atom.variables == {Variable("x", "id")}

    def test_duplicates_collapse(self):
        atom = AtomicFormula("Likes", (Variable("x", "p"), Variable("x", "p")))
        assert len(atom.variables) == 1

    def test_zero_arity_is_ground(self):
        atom = AtomicFormula("Rains")
        assert atom.is_ground
        assert atom.signature == AtomSignature("Rains", 0)
        assert atom.to_text() == "Rains()"

    def test_empty_predicate_rejected(self):
        with pytest.raises(MalformedStructureError):
            AtomicFormula("", (Constant("A"),))

    def test_non_term_argument_rejected(self):
        with pytest.raises(MalformedStructureError):
            AtomicFormula("P", ("A",))

    def test_predicate_name_must_be_identifier(self):
        with pytest.raises(MalformedStructureError):
            AtomicFormula("Happens!", (Constant("A"),))


class TestSignature:
    @given(st.lists(st.sampled_from(["A", "B", "10"]), min_size=0, max_size=4))
    def test_signature_ignores_term_contents(self, symbols):
        atom = AtomicFormula("Happens", tuple(Constant(s) for s in symbols))
        assert atom.signature == AtomSignature("Happens", len(symbols))

    def test_signature_text(self):
        assert str(AtomSignature("Happens", 2)) == "Happens/2"


class TestSubstitute:
    def test_atom_substitution(self):
        x = Variable("x", "person")
        atom = AtomicFormula("Smokes", (x,))
        assert atom.substitute({x: Constant("Anna")}) == AtomicFormula("Smokes", (Constant("Anna"),))


class TestLiteralAndClause:
    smokes = AtomicFormula("Smokes", (Variable("x", "person"),))
    cancer = AtomicFormula("Cancer", (Variable("x", "person"),))

    def test_negative_literal_renders_with_bang(self):
        assert Literal(self.smokes, positive=False).to_text() == "!Smokes(x)"

    def test_negated_flips(self):
        lit = Literal(self.smokes)
        assert lit.negated == Literal(self.smokes, False)
        assert lit.negated.negated == lit

    def test_soft_clause_text(self):
        clause = WeightedClause((Literal(self.smokes, False), Literal(self.cancer)), 1.5)
        assert clause.to_text() == "1.5 !Smokes(x) v Cancer(x)"
        assert not clause.is_hard

    def test_hard_clause_text(self):
        clause = WeightedClause([Literal(self.smokes, False), Literal(self.cancer)])
        assert clause.is_hard
        assert clause.to_text() == "!Smokes(x) v Cancer(x)."

    def test_clause_variables(self):
        clause = WeightedClause((Literal(self.smokes, False), Literal(self.cancer)), 1.0)
        assert clause.variables == {Variable("x", "person")}

    def test_empty_clause_rejected(self):
        with pytest.raises(MalformedStructureError):
            WeightedClause((), 1.0)
