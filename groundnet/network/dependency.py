"""
Dependency map: which first-order formulas produced each ground constraint.

    {constraint_id: {formula_index: frequency, ...}, ...}

frequency counts how many groundings of the formula collapsed into the
constraint. A negative frequency means the formula's weight was inverted
when the constraint was produced (a negative-weight clause rewritten into
negated unit clauses), so its learned weight enters with the opposite sign.

The map is filled once by the grounder and frozen on construction.
"""

from collections.abc import Mapping
from types import MappingProxyType

from ..errors import MalformedStructureError


class DependencyMap(Mapping):

    def __init__(self, entries: Mapping):
        frozen = {}
        for cid, frequencies in entries.items():
            checked = {}
            for formula, frequency in frequencies.items():
                if not isinstance(formula, int) or formula < 0:
                    raise MalformedStructureError(
                        f"constraint {cid}: formula index must be a non-negative int, got {formula!r}")
                if not isinstance(frequency, int) or frequency == 0:
                    raise MalformedStructureError(
                        f"constraint {cid}: frequency must be a non-zero int, got {frequency!r}")
                checked[formula] = frequency
            frozen[cid] = MappingProxyType(checked)
        self._entries = frozen
        self._by_formula = None

    def __getitem__(self, cid):
        return self._entries[cid]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def frequency(self, cid: int, formula: int) -> int:
        """Signed frequency of formula in constraint cid, 0 if unrelated."""
        return self._entries.get(cid, {}).get(formula, 0)

    @property
    def formula_indices(self) -> frozenset:
        return frozenset(f for freqs in self._entries.values() for f in freqs)

    def constraints_of(self, formula: int) -> tuple:
        """Ids of every constraint that formula contributed to."""
        if self._by_formula is None:
            by_formula = {}
            for cid, freqs in self._entries.items():
                for f in freqs:
                    by_formula.setdefault(f, []).append(cid)
            self._by_formula = {f: tuple(cids) for f, cids in by_formula.items()}
        return self._by_formula.get(formula, ())

    def __repr__(self):
        return f"DependencyMap({len(self._entries)} constraints)"
