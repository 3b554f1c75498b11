"""
Weight reconstruction: refresh constraint weights from learned formula weights.

After a learning step produces one weight per first-order formula, every
ground constraint's weight is recomputed from its dependency map entry
instead of grounding the knowledge base again:

    weight(c) = sum(formula_weights[f] * frequency  for f, frequency in deps[c])

A negative frequency flips the sign of that formula's contribution.
Hard formulas contribute the network's weight_hard instead of a learned
weight; how that combines with soft contributions to the same constraint
is chosen by MixedHardPolicy.
"""

import logging
from enum import Enum

from ..errors import MalformedStructureError, MissingDependencyMapError

logger = logging.getLogger(__name__)


class MixedHardPolicy(Enum):
    """
    HARD_WINS:   any hard contributor makes the weight weight_hard and the
                 soft contributions are dropped.
    SEQUENTIAL:  contributions apply in recording order; a hard contributor
                 resets the running weight to weight_hard and later soft
                 contributions are added on top of it.
    """
    HARD_WINS = "hard_wins"
    SEQUENTIAL = "sequential"


def _combine(frequencies, formula_weights, hard_flags, weight_hard, policy, hard=False) -> float:
    total = weight_hard if hard else 0.0
    for formula, frequency in frequencies.items():
        if hard_flags[formula]:
            hard = True
            total = weight_hard
        elif policy is MixedHardPolicy.SEQUENTIAL or not hard:
            total += formula_weights[formula] * frequency
    if hard and policy is MixedHardPolicy.HARD_WINS:
        return weight_hard
    return total


def reconstruct_weights(
    mrf,
    formula_weights,
    hard_flags,
    policy: MixedHardPolicy = MixedHardPolicy.HARD_WINS,
) -> int:
    """
    Recompute every constraint weight of mrf in place.

    Args:
        mrf:              network grounded with dependency tracking
        formula_weights:  learned weight per formula index
        hard_flags:       hard_flags[i] is True when formula i is hard
        policy:           how hard and soft contributions to one constraint mix

    A constraint the network marks hard counts as having a hard contributor
    even when hard_flags mark none of its formulas hard, so under HARD_WINS
    it always keeps weight_hard.

    Returns the number of constraints updated.

    Raises MissingDependencyMapError when the network (or one of its
    constraints) has no dependency entry, and MalformedStructureError
    when the weight vectors do not cover every referenced formula. Both
    checks run before any weight changes.
    """
    deps = mrf.dependency_map
    if deps is None:
        raise MissingDependencyMapError(
            "network was grounded without a dependency map; cannot reconstruct weights")

    formula_weights = [float(w) for w in formula_weights]
    hard_flags = [bool(h) for h in hard_flags]
    if len(formula_weights) != len(hard_flags):
        raise MalformedStructureError(
            f"{len(formula_weights)} formula weights but {len(hard_flags)} hard flags")

    constraints = list(mrf.constraints())
    for constraint in constraints:
        if constraint.id not in deps:
            raise MissingDependencyMapError(
                f"constraint {constraint.id} has no dependency map entry")
    referenced = deps.formula_indices
    if referenced and max(referenced) >= len(formula_weights):
        raise MalformedStructureError(
            f"dependency map references formula {max(referenced)} "
            f"but only {len(formula_weights)} weights were given")

    for constraint in constraints:
        constraint.weight = _combine(
            deps[constraint.id], formula_weights, hard_flags, mrf.weight_hard, policy,
            constraint.is_hard)

    logger.debug("reconstructed %d constraint weights (%s)", len(constraints), policy.value)
    return len(constraints)
