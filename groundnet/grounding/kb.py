"""
KnowledgeBase: everything the grounder needs in one value.
"""

from dataclasses import dataclass, field

from ..core.constants import DomainMap
from .builder import NetworkBuilder, GroundingResult


@dataclass
class KnowledgeBase:
    predicate_schema: dict
    clauses: list
    domains: DomainMap
    query_predicates: list
    hidden_predicates: list = field(default_factory=list)
    evidence: dict = field(default_factory=dict)
    description: str = ""

    @property
    def formula_weights(self) -> list:
        """Per-formula weights as grounded; hard formulas get 0.0."""
        return [0.0 if c.is_hard else float(c.weight) for c in self.clauses]

    @property
    def hard_flags(self) -> list:
        return [c.is_hard for c in self.clauses]

    def builder(self, **kwargs) -> NetworkBuilder:
        return NetworkBuilder(
            self.clauses, self.predicate_schema, self.domains,
            self.query_predicates,
            evidence=self.evidence,
            hidden_predicates=self.hidden_predicates,
            **kwargs,
        )

    def ground(self, **kwargs) -> GroundingResult:
        return self.builder(**kwargs).build()
