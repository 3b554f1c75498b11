"""
Tests for the atom space.

Core claims:
    - encode / decode form a bijection over [1, size]
    - Query predicates occupy the contiguous range starting at 1
    - Hidden predicates follow the query range
    - Ids follow itertools.product order within a predicate
"""

import itertools

import pytest
from hypothesis import given
from hypothesis import strategies as st

from groundnet.core.atoms import AtomSignature
from groundnet.core.constants import DomainMap
from groundnet.grounding.space import AtomSpace
from groundnet.errors import MalformedStructureError


SMOKES = AtomSignature("Smokes", 1)
FRIENDS = AtomSignature("Friends", 2)
CANCER = AtomSignature("Cancer", 1)
RAINS = AtomSignature("Rains", 0)

SCHEMA = {
    SMOKES: ["person"],
    FRIENDS: ["person", "person"],
    CANCER: ["person"],
    RAINS: [],
}
DOMAINS = DomainMap({"person": ["Bob", "Anna", "Cleo"]})


def make_space():
    return AtomSpace(SCHEMA, DOMAINS, [SMOKES, RAINS, CANCER], [FRIENDS])


class TestLayout:
    def test_query_range(self):
        space = make_space()
        assert space.query_start_id == 1
        assert space.query_end_id == 3 + 1 + 3

    def test_hidden_after_query(self):
        space = make_space()
        assert space.block(FRIENDS) == range(8, 17)
        assert len(space) == 16

    def test_sorted_symbols(self):
        space = make_space()
        assert space.encode(SMOKES, ("Anna",)) == 1
        assert space.encode(SMOKES, ("Cleo",)) == 3

    def test_zero_arity_gets_one_id(self):
        space = make_space()
        assert space.encode(RAINS, ()) == 4
        assert space.decode(4) == (RAINS, ())

    def test_product_order(self):
        space = make_space()
        people = ["Anna", "Bob", "Cleo"]
        ids = [space.encode(FRIENDS, pair) for pair in itertools.product(people, people)]
        assert ids == list(space.block(FRIENDS))

    def test_query_flags(self):
        space = make_space()
        assert space.is_query(SMOKES)
        assert not space.is_query(FRIENDS)
        assert space.is_open(FRIENDS)
        assert not space.is_open(AtomSignature("Other", 1))

    def test_describe(self):
        space = make_space()
        assert space.describe(space.encode(FRIENDS, ("Bob", "Anna"))) == "Friends(Bob,Anna)"
        assert space.describe(-1) == "!Smokes(Anna)"


class TestBijection:
    @given(st.data())
    def test_decode_inverts_encode(self, data):
        space = make_space()
        atom_id = data.draw(st.integers(1, len(space)))
        signature, symbols = space.decode(atom_id)
        assert space.encode(signature, symbols) == atom_id

    def test_every_id_used_once(self):
        space = make_space()
        seen = {space.decode(i) for i in range(1, len(space) + 1)}
        assert len(seen) == len(space)


class TestErrors:
    def test_unknown_symbol(self):
        with pytest.raises(KeyError):
            make_space().encode(SMOKES, ("Zed",))

    def test_evidence_predicate_has_no_ids(self):
        space = AtomSpace(SCHEMA, DOMAINS, [SMOKES])
        with pytest.raises(KeyError):
            space.encode(FRIENDS, ("Anna", "Bob"))

    def test_wrong_arity(self):
        with pytest.raises(KeyError):
            make_space().encode(SMOKES, ("Anna", "Bob"))

    def test_out_of_range(self):
        with pytest.raises(KeyError):
            make_space().decode(0)

    def test_missing_domain(self):
        with pytest.raises(MalformedStructureError):
            AtomSpace({SMOKES: ["human"]}, DOMAINS, [SMOKES])

    def test_missing_schema(self):
        with pytest.raises(MalformedStructureError):
            AtomSpace({}, DOMAINS, [SMOKES])

    def test_query_and_hidden_overlap(self):
        with pytest.raises(MalformedStructureError):
            AtomSpace(SCHEMA, DOMAINS, [SMOKES], [SMOKES])
