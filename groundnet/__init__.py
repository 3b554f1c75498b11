"""
groundnet: compile weighted first-order clauses into a ground Markov
Random Field and keep its constraint weights in step with learning.

Pieces, leaf-first:
    core        terms, atoms, clause templates, constant domains, parser
    grounding   atom-id space and the reference grounder
    network     the MRF with its literal indices, dependency map and
                weight reconstruction

Usage:
    python -m groundnet --kb smokers
    python -m groundnet --kb smokers --weights 1.0,1.0,0.5,-1.0,0
    python -m groundnet --kb university --no-neg-weights --dot mrf.dot
"""

from .errors import (
    GroundNetError, MalformedStructureError, ParseError, MissingDependencyMapError,
)
from .core.terms import Constant, Variable, Function, Term, is_ground, substitute
from .core.atoms import AtomSignature, AtomicFormula, Literal, WeightedClause
from .core.constants import ConstantsDomainBuilder, DomainMap
from .core.parser import AtomParser
from .network.dependency import DependencyMap
from .network.reconstruct import MixedHardPolicy, reconstruct_weights
from .network.mrf import (
    MRF, GroundAtom, Constraint,
    NO_ATOM, NO_ATOM_ID, NO_CONSTRAINT, NO_CONSTRAINT_ID,
)
from .grounding.space import AtomSpace
from .grounding.builder import NetworkBuilder, GroundingResult, ground
from .grounding.kb import KnowledgeBase

__all__ = [
    "GroundNetError", "MalformedStructureError", "ParseError", "MissingDependencyMapError",
    "Constant", "Variable", "Function", "Term", "is_ground", "substitute",
    "AtomSignature", "AtomicFormula", "Literal", "WeightedClause",
    "ConstantsDomainBuilder", "DomainMap",
    "AtomParser",
    "DependencyMap",
    "MixedHardPolicy", "reconstruct_weights",
    "MRF", "GroundAtom", "Constraint",
    "NO_ATOM", "NO_ATOM_ID", "NO_CONSTRAINT", "NO_CONSTRAINT_ID",
    "AtomSpace",
    "NetworkBuilder", "GroundingResult", "ground",
    "KnowledgeBase",
]
