"""
The ground Markov Random Field: ground atoms, ground constraints and the
literal-occurrence indices over them.

Literals are signed atom ids:
    7   -> atom 7 appears positively
    -7  -> atom 7 appears negated

A Constraint is a weighted disjunction of literals. Its id, literals and
hardness are read-only; its weight is the one field that learning
rewrites in place. An MRF copies the constraints and atoms it is built
from, so two networks never share a weight or a state.

pos_index[a] / neg_index[a] hold every constraint in which atom a appears
positively / negatively. Flipping atom a can only change the truth of
those constraints, so local search never scans the whole network.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from ..errors import MalformedStructureError
from .dependency import DependencyMap
from .reconstruct import MixedHardPolicy, reconstruct_weights

logger = logging.getLogger(__name__)


NO_ATOM_ID = 0
NO_CONSTRAINT_ID = -1


@dataclass(eq=False)
class GroundAtom:
    """A ground atom. state is the truth value consumers assign during search."""
    id: int
    state: bool = False

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("GroundAtom.id is read-only")
        object.__setattr__(self, name, value)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, GroundAtom) and self.id == other.id

    def __repr__(self):
        return f"GroundAtom({self.id})"


_STRUCTURE = ("id", "literals", "is_hard")


@dataclass(eq=False)
class Constraint:
    """A ground clause: weighted disjunction of signed atom ids. Only weight can change."""
    id: int
    literals: tuple
    weight: float = 0.0
    is_hard: bool = False

    def __post_init__(self):
        if not isinstance(self.literals, tuple):
            object.__setattr__(self, "literals", tuple(self.literals))

    def __setattr__(self, name, value):
        if name in _STRUCTURE and name in self.__dict__:
            raise AttributeError(f"Constraint.{name} is read-only")
        object.__setattr__(self, name, value)

    @property
    def size(self) -> int:
        return len(self.literals)

    @property
    def is_unit(self) -> bool:
        return len(self.literals) == 1

    @property
    def is_positive(self) -> bool:
        return self.weight > 0

    def is_satisfied(self, truth) -> bool:
        """truth maps atom id -> bool (a dict, or anything indexable by id)."""
        return any(truth[abs(lit)] == (lit > 0) for lit in self.literals)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, Constraint) and self.id == other.id

    def __repr__(self):
        lits = " v ".join(str(lit) for lit in self.literals)
        kind = "hard" if self.is_hard else f"{self.weight:g}"
        return f"Constraint({self.id}: {lits} [{kind}])"


class _SealedAtom(GroundAtom):
    def __setattr__(self, name, value):
        if name in self.__dict__:
            raise AttributeError("NO_ATOM is read-only")
        object.__setattr__(self, name, value)


class _SealedConstraint(Constraint):
    def __setattr__(self, name, value):
        if name in self.__dict__:
            raise AttributeError("NO_CONSTRAINT is read-only")
        object.__setattr__(self, name, value)


NO_ATOM = _SealedAtom(NO_ATOM_ID)
NO_CONSTRAINT = _SealedConstraint(NO_CONSTRAINT_ID, (0,), math.nan, True)


def _by_id(values, kind):
    if isinstance(values, Mapping):
        values = values.values()
    indexed = {}
    for value in values:
        if value.id in indexed:
            raise MalformedStructureError(f"duplicate {kind} id {value.id}")
        indexed[value.id] = value
    return indexed


class MRF:
    """
    A ground network. Built once per grounding pass; afterwards only the
    constraint weights (and atom states) change.

    Args:
        constraints:          Constraint objects (iterable or id -> Constraint)
        atoms:                GroundAtom objects or plain ids
        weight_hard:          weight carried by every hard constraint
        query_atom_start_id:  first query atom id
        query_atom_end_id:    last query atom id (inclusive)
        dependency_map:       needed only for reconstruct()
    """

    def __init__(
        self,
        constraints,
        atoms,
        weight_hard: float,
        query_atom_start_id: int = 1,
        query_atom_end_id: int = 0,
        dependency_map: Optional[DependencyMap] = None,
    ):
        if query_atom_end_id < query_atom_start_id - 1:
            raise MalformedStructureError(
                f"inverted query atom range [{query_atom_start_id}, {query_atom_end_id}]")

        # the network owns private copies: no weight or state is shared with the caller
        atoms = [GroundAtom(a) if isinstance(a, int) else GroundAtom(a.id, a.state) for a in
                 (atoms.values() if isinstance(atoms, Mapping) else atoms)]
        if isinstance(constraints, Mapping):
            constraints = constraints.values()
        constraints = [Constraint(c.id, c.literals, c.weight, c.is_hard) for c in constraints]
        self._atoms = _by_id(atoms, "atom")
        if NO_ATOM_ID in self._atoms or any(aid < 0 for aid in self._atoms):
            raise MalformedStructureError("atom ids must be positive")
        self._constraints = _by_id(constraints, "constraint")

        self.weight_hard = float(weight_hard)
        self.query_atom_start_id = query_atom_start_id
        self.query_atom_end_id = query_atom_end_id
        self.dependency_map = dependency_map

        pos, neg = {}, {}
        widest = 0
        for constraint in self._constraints.values():
            if constraint.id == NO_CONSTRAINT_ID:
                raise MalformedStructureError("constraint id -1 is reserved")
            if not constraint.literals:
                raise MalformedStructureError(f"constraint {constraint.id} has no literals")
            widest = max(widest, len(constraint.literals))
            if constraint.is_hard:
                constraint.weight = self.weight_hard
            for literal in constraint.literals:
                atom_id = abs(literal)
                if atom_id not in self._atoms:
                    raise MalformedStructureError(
                        f"constraint {constraint.id} references unknown atom {literal}")
                if literal > 0:
                    pos.setdefault(atom_id, []).append(constraint)
                else:
                    neg.setdefault(atom_id, []).append(constraint)

        self.max_clause_width = widest
        self.pos_index = MappingProxyType({a: tuple(cs) for a, cs in pos.items()})
        self.neg_index = MappingProxyType({a: tuple(cs) for a, cs in neg.items()})

        logger.debug(
            "MRF: %d constraints, %d atoms, query ids [%d, %d], max width %d",
            len(self._constraints), len(self._atoms),
            query_atom_start_id, query_atom_end_id, widest,
        )

    @property
    def number_of_constraints(self) -> int:
        return len(self._constraints)

    @property
    def number_of_atoms(self) -> int:
        return len(self._atoms)

    def fetch_atom(self, literal: int) -> GroundAtom:
        """The atom a signed literal refers to, or NO_ATOM."""
        return self._atoms.get(abs(literal), NO_ATOM)

    def lookup_constraint(self, cid: int) -> Constraint:
        """The constraint with id cid, or NO_CONSTRAINT."""
        return self._constraints.get(cid, NO_CONSTRAINT)

    def positive_occurrences(self, atom_id: int) -> tuple:
        return self.pos_index.get(atom_id, ())

    def negative_occurrences(self, atom_id: int) -> tuple:
        return self.neg_index.get(atom_id, ())

    def neighbours(self, atom_id: int) -> tuple:
        """Every constraint whose truth can change when atom_id flips."""
        return self.pos_index.get(atom_id, ()) + self.neg_index.get(atom_id, ())

    def is_query_atom(self, atom_id: int) -> bool:
        return self.query_atom_start_id <= atom_id <= self.query_atom_end_id

    def constraints(self):
        for cid in sorted(self._constraints):
            yield self._constraints[cid]

    def atoms(self):
        for aid in sorted(self._atoms):
            yield self._atoms[aid]

    def reconstruct(
        self,
        formula_weights,
        hard_flags,
        policy: MixedHardPolicy = MixedHardPolicy.HARD_WINS,
    ) -> int:
        """Recompute every constraint weight from per-formula weights. See reconstruct_weights."""
        return reconstruct_weights(self, formula_weights, hard_flags, policy)

    def __repr__(self):
        return (f"MRF({self.number_of_constraints} constraints, "
                f"{self.number_of_atoms} atoms, weight_hard={self.weight_hard:g})")
