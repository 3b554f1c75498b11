"""
Atomic formulas, literals and weighted clause templates.

    AtomicFormula("Happens", (Constant("Foo"), Variable("t", "time")))
        -> Happens(Foo,t)
    Literal(atom, positive=False)
        -> !Happens(Foo,t)
    WeightedClause((lit1, lit2), weight=1.5)
        -> 1.5 !Smokes(x) v Cancer(x)
    WeightedClause((lit1, lit2))            (weight None: hard)
        -> !Smokes(x) v Cancer(x).

A WeightedClause is a disjunction. Its position in the list handed to the
grounder is its formula index, which is what the dependency map records.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import MalformedStructureError
from .terms import (
    Constant, Variable, Function,
    is_ground, is_term, subterms, substitute, _require_name,
)


@dataclass(frozen=True)
class AtomSignature:
    """Predicate identity: name and arity."""
    predicate: str
    arity: int

    def __str__(self):
        return f"{self.predicate}/{self.arity}"


@dataclass(frozen=True)
class AtomicFormula:
    predicate: str
    terms: tuple = ()

    def __post_init__(self):
        _require_name("predicate name", self.predicate)
        if not isinstance(self.terms, tuple):
            object.__setattr__(self, "terms", tuple(self.terms))
        for term in self.terms:
            if not is_term(term):
                raise MalformedStructureError(
                    f"argument of {self.predicate} is not a term: {term!r}")

    @property
    def arity(self) -> int:
        return len(self.terms)

    @property
    def signature(self) -> AtomSignature:
        return AtomSignature(self.predicate, len(self.terms))

    @property
    def is_ground(self) -> bool:
        return all(is_ground(t) for t in self.terms)

    def _collect(self, kind) -> frozenset:
        return frozenset(
            sub for term in self.terms for sub in subterms(term)
            if isinstance(sub, kind)
        )

    @property
    def variables(self) -> frozenset:
        return self._collect(Variable)

    @property
    def constants(self) -> frozenset:
        return self._collect(Constant)

    @property
    def functions(self) -> frozenset:
        return self._collect(Function)

    def substitute(self, theta: dict) -> "AtomicFormula":
        return AtomicFormula(self.predicate,
                             tuple(substitute(t, theta) for t in self.terms))

    def to_text(self) -> str:
        return f"{self.predicate}({','.join(t.to_text() for t in self.terms)})"

    def __str__(self):
        return self.to_text()


@dataclass(frozen=True)
class Literal:
    atom: AtomicFormula
    positive: bool = True

    @property
    def negated(self) -> "Literal":
        return Literal(self.atom, not self.positive)

    def substitute(self, theta: dict) -> "Literal":
        return Literal(self.atom.substitute(theta), self.positive)

    def to_text(self) -> str:
        return self.atom.to_text() if self.positive else f"!{self.atom.to_text()}"

    def __str__(self):
        return self.to_text()


@dataclass(frozen=True)
class WeightedClause:
    """
    A first-order clause template. weight=None marks the clause hard;
    hard clauses never take part in learning.
    """
    literals: tuple
    weight: Optional[float] = None
    label: str = ""

    def __post_init__(self):
        if not isinstance(self.literals, tuple):
            object.__setattr__(self, "literals", tuple(self.literals))
        if not self.literals:
            raise MalformedStructureError("a clause needs at least one literal")
        for lit in self.literals:
            if not isinstance(lit, Literal):
                raise MalformedStructureError(f"not a literal: {lit!r}")

    @property
    def is_hard(self) -> bool:
        return self.weight is None

    @property
    def variables(self) -> frozenset:
        return frozenset().union(*(lit.atom.variables for lit in self.literals))

    def to_text(self) -> str:
        body = " v ".join(lit.to_text() for lit in self.literals)
        if self.is_hard:
            return f"{body}."
        return f"{self.weight!r} {body}"

    def __str__(self):
        return self.to_text()
