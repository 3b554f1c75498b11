"""
Atom space: the bijection between ground atoms and integer ids.

Each open-world predicate owns a contiguous block of ids, one per tuple in
the cartesian product of its argument domains (symbols in sorted order,
first argument most significant, i.e. itertools.product order). Query
predicates are laid out first, starting at id 1, so query atoms occupy
[query_start_id, query_end_id]; hidden predicates follow. Predicates that
are neither are evidence and have no ids.
"""

import bisect
from math import prod
from typing import Iterable

from ..core.atoms import AtomSignature
from ..errors import MalformedStructureError


class AtomSpace:

    def __init__(
        self,
        predicate_schema: dict,
        domains,
        query_predicates: Iterable[AtomSignature],
        hidden_predicates: Iterable[AtomSignature] = (),
    ):
        self.predicate_schema = dict(predicate_schema)
        query_predicates = list(query_predicates)
        hidden_predicates = list(hidden_predicates)
        overlap = set(query_predicates) & set(hidden_predicates)
        if overlap:
            raise MalformedStructureError(
                f"predicates both query and hidden: {sorted(map(str, overlap))}")

        self._symbols = {}
        self._positions = {}
        for signature in query_predicates + hidden_predicates:
            if signature not in self.predicate_schema:
                raise MalformedStructureError(f"no schema for predicate {signature}")
            for domain in self.predicate_schema[signature]:
                if domain not in self._symbols:
                    if domain not in domains:
                        raise MalformedStructureError(
                            f"predicate {signature} ranges over unknown domain {domain!r}")
                    symbols = tuple(sorted(domains[domain]))
                    self._symbols[domain] = symbols
                    self._positions[domain] = {s: i for i, s in enumerate(symbols)}

        self._query = frozenset(query_predicates)
        self._order = []
        self._offsets = {}
        next_id = 1
        for signature in query_predicates:
            next_id = self._allocate(signature, next_id)
        self.query_start_id = 1
        self.query_end_id = next_id - 1
        for signature in hidden_predicates:
            next_id = self._allocate(signature, next_id)
        self.size = next_id - 1
        self._starts = [self._offsets[s] for s in self._order]

    def _allocate(self, signature, start) -> int:
        self._order.append(signature)
        self._offsets[signature] = start
        return start + self._block_size(signature)

    def is_open(self, signature: AtomSignature) -> bool:
        return signature in self._offsets

    def is_query(self, signature: AtomSignature) -> bool:
        return signature in self._query

    @property
    def predicates(self) -> tuple:
        return tuple(self._order)

    def block(self, signature: AtomSignature) -> range:
        """The ids owned by one predicate."""
        start = self._offsets[signature]
        return range(start, start + self._block_size(signature))

    def _block_size(self, signature) -> int:
        return prod(len(self._symbols[d]) for d in self.predicate_schema[signature])

    def encode(self, signature: AtomSignature, symbols) -> int:
        """Id of signature(symbols). Raises KeyError for unknown predicates or symbols."""
        if signature not in self._offsets:
            raise KeyError(f"{signature} is not an open-world predicate")
        domains = self.predicate_schema[signature]
        if len(symbols) != len(domains):
            raise KeyError(f"{signature} takes {len(domains)} arguments, got {len(symbols)}")
        index = 0
        for symbol, domain in zip(symbols, domains):
            positions = self._positions[domain]
            if symbol not in positions:
                raise KeyError(f"{symbol!r} is not in domain {domain!r}")
            index = index * len(positions) + positions[symbol]
        return self._offsets[signature] + index

    def decode(self, atom_id: int) -> tuple:
        """(signature, symbols) for an atom id. Raises KeyError if out of range."""
        if not 1 <= atom_id <= self.size:
            raise KeyError(f"atom id {atom_id} is outside [1, {self.size}]")
        signature = self._order[bisect.bisect_right(self._starts, atom_id) - 1]
        index = atom_id - self._offsets[signature]
        symbols = []
        for domain in reversed(self.predicate_schema[signature]):
            values = self._symbols[domain]
            index, position = divmod(index, len(values))
            symbols.append(values[position])
        return signature, tuple(reversed(symbols))

    def describe(self, literal: int) -> str:
        """Readable form of a signed literal: Smokes(Anna) or !Smokes(Anna)."""
        signature, symbols = self.decode(abs(literal))
        text = f"{signature.predicate}({','.join(symbols)})"
        return text if literal > 0 else f"!{text}"

    def __len__(self):
        return self.size

    def __repr__(self):
        return (f"AtomSpace({self.size} atoms, "
                f"query [{self.query_start_id}, {self.query_end_id}])")
