"""
Reference grounder: weighted clause templates -> ground MRF.

Every clause template is instantiated with every assignment of its
variables to constants of their domains. Each ground clause is then
simplified against closed-world evidence:

    a literal evidence makes true   -> the ground clause is satisfied, dropped
    a literal evidence makes false  -> the literal is removed

Open-world literals become signed atom ids. Ground clauses with the same
literal set merge into one constraint whose weight is the sum of its
sources (any hard source makes it hard), and the dependency map records
which formulas produced it and how many times.

With no_negative_weights, a soft clause of weight w < 0 is replaced by
one unit clause per literal, negated, of weight -w and frequency -1:

    -1.2  P(A) v Q(A)   ->   1.2  !P(A)      1.2  !Q(A)
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.atoms import AtomSignature
from ..core.terms import Constant
from ..errors import MalformedStructureError
from ..network.dependency import DependencyMap
from ..network.mrf import MRF, Constraint
from .space import AtomSpace

logger = logging.getLogger(__name__)


@dataclass
class _Pending:
    weight: float = 0.0
    hard: bool = False
    sources: dict = field(default_factory=dict)


@dataclass
class GroundingResult:
    mrf: MRF
    space: AtomSpace
    groundings: int = 0
    dropped: int = 0


class NetworkBuilder:
    """
    Args:
        clauses:             WeightedClause templates; list position = formula index
        predicate_schema:    AtomSignature -> list of argument domain names
        domains:             DomainMap (or any mapping domain -> symbols)
        query_predicates:    signatures whose atoms are queried
        evidence:            AtomSignature -> set of true symbol tuples (closed world)
        hidden_predicates:   open-world signatures that are not queried
        weight_hard:         weight of hard constraints; default 1 + sum |soft weights|
        track_dependencies:  attach a DependencyMap so weights can be reconstructed
        no_negative_weights: rewrite negative-weight clauses into negated units
    """

    def __init__(
        self,
        clauses,
        predicate_schema: dict,
        domains,
        query_predicates: Iterable[AtomSignature],
        evidence: Optional[dict] = None,
        hidden_predicates: Iterable[AtomSignature] = (),
        weight_hard: Optional[float] = None,
        track_dependencies: bool = False,
        no_negative_weights: bool = False,
    ):
        self.clauses = list(clauses)
        self.predicate_schema = dict(predicate_schema)
        self.domains = domains
        self.query_predicates = list(query_predicates)
        self.hidden_predicates = list(hidden_predicates)
        self.evidence = {sig: {tuple(t) for t in facts}
                         for sig, facts in (evidence or {}).items()}
        self.weight_hard = weight_hard
        self.track_dependencies = track_dependencies
        self.no_negative_weights = no_negative_weights

        open_predicates = set(self.query_predicates) | set(self.hidden_predicates)
        for signature in self.evidence:
            if signature in open_predicates:
                raise MalformedStructureError(
                    f"evidence given for open-world predicate {signature}")

    def build(self) -> GroundingResult:
        space = AtomSpace(self.predicate_schema, self.domains,
                          self.query_predicates, self.hidden_predicates)
        pending = {}
        groundings = dropped = 0

        for index, clause in enumerate(self.clauses):
            variables = self._variables_of(clause)
            pools = [sorted(self.domains[v.domain]) for v in variables]
            for values in itertools.product(*pools):
                groundings += 1
                theta = {v: Constant(s, v.domain) for v, s in zip(variables, values)}
                literals = self._ground(clause, theta, space)
                if literals is None:
                    dropped += 1
                    continue
                if clause.is_hard:
                    self._merge(pending, literals, None, index, 1)
                elif clause.weight < 0 and self.no_negative_weights:
                    for literal in literals:
                        self._merge(pending, (-literal,), -clause.weight, index, -1)
                else:
                    self._merge(pending, literals, clause.weight, index, 1)

        weight_hard = self.weight_hard
        if weight_hard is None:
            weight_hard = 1.0 + sum(abs(p.weight) for p in pending.values() if not p.hard)

        constraints = []
        atom_ids = set()
        sources = {}
        for cid, (literals, entry) in enumerate(pending.items()):
            constraints.append(Constraint(cid, literals, entry.weight, entry.hard))
            atom_ids.update(abs(lit) for lit in literals)
            sources[cid] = entry.sources

        mrf = MRF(
            constraints,
            sorted(atom_ids),
            weight_hard,
            space.query_start_id,
            space.query_end_id,
            DependencyMap(sources) if self.track_dependencies else None,
        )
        logger.info(
            "grounded %d formulas: %d groundings, %d dropped, %d constraints over %d atoms",
            len(self.clauses), groundings, dropped,
            mrf.number_of_constraints, mrf.number_of_atoms,
        )
        return GroundingResult(mrf, space, groundings, dropped)

    def _variables_of(self, clause) -> list:
        for lit in clause.literals:
            if lit.atom.functions:
                raise MalformedStructureError(
                    f"function terms are not supported by the grounder: {lit.to_text()}")
        variables = sorted(clause.variables, key=lambda v: (v.name, v.domain or ""))
        for v in variables:
            if v.domain is None or v.domain not in self.domains:
                raise MalformedStructureError(
                    f"variable {v.name} in {clause.to_text()} has no known domain ({v.domain!r})")
        return variables

    def _ground(self, clause, theta, space) -> Optional[tuple]:
        """Signed literals of one grounding, or None when it is dropped."""
        result = set()
        for lit in clause.literals:
            atom = lit.atom.substitute(theta)
            symbols = tuple(t.symbol for t in atom.terms)
            signature = atom.signature
            if space.is_open(signature):
                atom_id = space.encode(signature, symbols)
                result.add(atom_id if lit.positive else -atom_id)
            elif (symbols in self.evidence.get(signature, ())) == lit.positive:
                return None
        if not result:
            if clause.is_hard:
                logger.warning("evidence violates hard clause %s under %s",
                               clause.to_text(),
                               {v.name: c.symbol for v, c in theta.items()})
            return None
        if any(-lit in result for lit in result):
            return None
        return tuple(sorted(result, key=lambda lit: (abs(lit), lit)))

    @staticmethod
    def _merge(pending, literals, weight, formula, frequency):
        entry = pending.get(literals)
        if entry is None:
            entry = pending[literals] = _Pending()
        if weight is None:
            entry.hard = True
        else:
            entry.weight += weight
        total = entry.sources.get(formula, 0) + frequency
        if total:
            entry.sources[formula] = total
        else:
            entry.sources.pop(formula, None)


def ground(clauses, predicate_schema, domains, query_predicates, **kwargs) -> GroundingResult:
    """Shorthand for NetworkBuilder(...).build()."""
    return NetworkBuilder(clauses, predicate_schema, domains, query_predicates, **kwargs).build()
