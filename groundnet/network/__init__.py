from .dependency import DependencyMap
from .reconstruct import MixedHardPolicy, reconstruct_weights
from .mrf import (
    MRF, GroundAtom, Constraint,
    NO_ATOM, NO_ATOM_ID, NO_CONSTRAINT, NO_CONSTRAINT_ID,
)

__all__ = [
    "DependencyMap",
    "MixedHardPolicy", "reconstruct_weights",
    "MRF", "GroundAtom", "Constraint",
    "NO_ATOM", "NO_ATOM_ID", "NO_CONSTRAINT", "NO_CONSTRAINT_ID",
]
