"""
Reporting utilities for ground networks.
"""

from typing import Optional

from .grounding.space import AtomSpace
from .network.mrf import MRF


def _describe(literal: int, space: Optional[AtomSpace]) -> str:
    if space is None:
        return str(literal)
    return space.describe(literal)


def format_constraint(constraint, space: Optional[AtomSpace] = None) -> str:
    body = " v ".join(_describe(lit, space) for lit in constraint.literals)
    weight = "hard" if constraint.is_hard else f"{constraint.weight:g}"
    return f"[{constraint.id}] {weight:>8}  {body}"


def print_network(mrf: MRF, space: Optional[AtomSpace] = None, limit: int = 50):
    """Print a summary of the network and its first constraints."""
    print(f"\n{'='*60}")
    print(f"Constraints: {mrf.number_of_constraints}   Atoms: {mrf.number_of_atoms}")
    print(f"Query atoms: [{mrf.query_atom_start_id}, {mrf.query_atom_end_id}]")
    print(f"Hard weight: {mrf.weight_hard:g}   Max clause width: {mrf.max_clause_width}")
    print(f"Dependency map: {'yes' if mrf.dependency_map is not None else 'no'}")
    print(f"{'='*60}")
    for i, constraint in enumerate(mrf.constraints()):
        if i >= limit:
            print(f"  ... {mrf.number_of_constraints - limit} more")
            break
        print(f"  {format_constraint(constraint, space)}")


def print_occurrences(mrf: MRF, space: Optional[AtomSpace] = None):
    """Print, per atom, how many constraints mention it positively / negatively."""
    print(f"\n{'='*60}")
    print("Literal occurrences (+ / -):")
    print(f"{'='*60}")
    for atom in mrf.atoms():
        name = _describe(atom.id, space)
        kind = "query" if mrf.is_query_atom(atom.id) else "hidden"
        print(f"  {name:<24} {len(mrf.positive_occurrences(atom.id)):>4} / "
              f"{len(mrf.negative_occurrences(atom.id)):<4} ({kind})")


def print_reweighting(before: dict, mrf: MRF, space: Optional[AtomSpace] = None):
    """Print the constraints whose weight changed since before (id -> weight)."""
    print(f"\n{'='*60}")
    print("Reconstructed weights:")
    print(f"{'='*60}")
    changed = 0
    for constraint in mrf.constraints():
        old = before.get(constraint.id)
        if old != constraint.weight:
            changed += 1
            print(f"  {old:g} -> {constraint.weight:g}  {format_constraint(constraint, space)}")
    if not changed:
        print("  (no weight changed)")


def export_dot(mrf: MRF, path="groundnet.dot", space: Optional[AtomSpace] = None):
    """Export the network as a bipartite atom/constraint graph for Graphviz."""
    with open(path, "w") as f:
        f.write("graph mrf {\n")
        f.write("  node [shape=ellipse];\n")
        for atom in mrf.atoms():
            label = _describe(atom.id, space).replace('"', '\\"')
            color = "lightblue" if mrf.is_query_atom(atom.id) else "lightgray"
            f.write(f'  a{atom.id} [label="{label}", fillcolor={color}, style=filled];\n')
        for constraint in mrf.constraints():
            weight = "hard" if constraint.is_hard else f"{constraint.weight:g}"
            f.write(f'  c{constraint.id} [label="{weight}", shape=box];\n')
            for literal in constraint.literals:
                style = "solid" if literal > 0 else "dashed"
                f.write(f"  c{constraint.id} -- a{abs(literal)} [style={style}];\n")
        f.write("}\n")
    print(f"Graph exported to {path}")
