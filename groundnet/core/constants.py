"""
Constant-symbol universes ("domains") and their point-in-time snapshots.

A ConstantsDomainBuilder accumulates symbols per named domain. It only
ever grows. snapshot() hands out a DomainMap: a frozen copy that later
insertions cannot reach, so every later snapshot is a superset of every
earlier one.

    builder = ConstantsDomainBuilder()
    builder.insert_all("time", ["1", "2", "3"])
    first = builder.snapshot()
    builder.insert("time", "4")
    first["time"]                  -> frozenset({"1", "2", "3"})
    builder.snapshot()["time"]     -> frozenset({"1", "2", "3", "4"})
"""

import threading
from collections.abc import Mapping
from typing import Iterable

from ..errors import MalformedStructureError


class DomainMap(Mapping):
    """Immutable mapping of domain name -> frozenset of symbols."""

    def __init__(self, domains=None):
        self._domains = {
            name: frozenset(symbols) for name, symbols in (domains or {}).items()
        }

    def __getitem__(self, name):
        return self._domains[name]

    def __iter__(self):
        return iter(self._domains)

    def __len__(self):
        return len(self._domains)

    def size_of(self, name: str) -> int:
        return len(self._domains.get(name, ()))

    def __repr__(self):
        sizes = ", ".join(f"{name}: {len(s)}" for name, s in self._domains.items())
        return f"DomainMap({{{sizes}}})"


def _check(domain, symbol) -> None:
    if not isinstance(domain, str) or not domain:
        raise MalformedStructureError(f"domain name must be a non-empty string, got {domain!r}")
    if not isinstance(symbol, str) or not symbol:
        raise MalformedStructureError(f"constant symbol must be a non-empty string, got {symbol!r}")


class ConstantsDomainBuilder:
    """
    Working state for the constant domains of one grounding pipeline.

    Each domain is kept as an insertion-ordered dict used as a set, so
    duplicate checks are O(1) and the order symbols arrived in is kept.
    Insertions take a lock: concurrent producers feeding the same builder
    are serialised.
    """

    def __init__(self):
        self._domains = {}
        self._lock = threading.Lock()

    @classmethod
    def from_domain_map(cls, domain_map: Mapping) -> "ConstantsDomainBuilder":
        """Start a builder that extends an earlier snapshot."""
        builder = cls()
        for name, symbols in domain_map.items():
            builder.insert_all(name, sorted(symbols))
        return builder

    def insert(self, domain: str, symbol: str) -> bool:
        """Add symbol to domain. Returns False if it was already there."""
        _check(domain, symbol)
        with self._lock:
            symbols = self._domains.setdefault(domain, {})
            if symbol in symbols:
                return False
            symbols[symbol] = None
            return True

    def insert_all(self, domain: str, symbols: Iterable[str]) -> int:
        """Batch insert. Returns how many symbols were new."""
        symbols = list(symbols)
        for symbol in symbols:
            _check(domain, symbol)
        with self._lock:
            target = self._domains.setdefault(domain, {})
            before = len(target)
            for symbol in symbols:
                target.setdefault(symbol, None)
            return len(target) - before

    def size_of(self, domain: str) -> int:
        return len(self._domains.get(domain, ()))

    def contains(self, domain: str, symbol: str) -> bool:
        return symbol in self._domains.get(domain, ())

    def symbols(self, domain: str) -> tuple:
        """Symbols of domain in insertion order (a copy)."""
        with self._lock:
            return tuple(self._domains.get(domain, ()))

    def domains(self) -> tuple:
        return tuple(self._domains)

    def snapshot(self) -> DomainMap:
        with self._lock:
            return DomainMap(self._domains)

    def __repr__(self):
        sizes = ", ".join(f"{name}: {len(s)}" for name, s in self._domains.items())
        return f"ConstantsDomainBuilder({{{sizes}}})"
