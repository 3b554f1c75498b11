from .terms import (
    Constant, Variable, Function, Term,
    is_term, is_constant, is_variable, is_function,
    is_ground, subterms, occurs_in, substitute, render,
)
from .atoms import AtomSignature, AtomicFormula, Literal, WeightedClause
from .constants import ConstantsDomainBuilder, DomainMap
from .parser import AtomParser

__all__ = [
    "Constant", "Variable", "Function", "Term",
    "is_term", "is_constant", "is_variable", "is_function",
    "is_ground", "subterms", "occurs_in", "substitute", "render",
    "AtomSignature", "AtomicFormula", "Literal", "WeightedClause",
    "ConstantsDomainBuilder", "DomainMap",
    "AtomParser",
]
