"""
End-to-end tests over the sample knowledge bases.

Friends & Smokers (4 people, symmetric friendships Anna-Bob, Anna-Edward):
    - 44 groundings, 24 dropped by friendship evidence, 16 constraints
    - formulas 0 and 1 merge into 4 constraints of weight 2.8
    - Smokes / Cancer occupy query ids 1..8

University (Ada professor, Ben and Cleo students):
    - the hard typing rules leave 7 hard negative AdvisedBy units
    - CoAuthor is hidden: its ids follow the query range
"""

import pytest

from groundnet.knowledge import KNOWLEDGE_BASES
from groundnet.knowledge.smokers import make_smokers_kb, SMOKES, CANCER
from groundnet.knowledge.university import make_university_kb, ADVISED_BY, CO_AUTHOR
from groundnet.network.reconstruct import MixedHardPolicy


class TestRegistry:
    @pytest.mark.parametrize("name", sorted(KNOWLEDGE_BASES))
    def test_every_kb_grounds(self, name):
        kb = KNOWLEDGE_BASES[name]["make_kb"]()
        result = kb.ground(track_dependencies=True)
        assert result.mrf.number_of_constraints > 0
        assert len(kb.formula_weights) == len(kb.hard_flags) == len(kb.clauses)


class TestSmokers:
    def test_counts(self):
        result = make_smokers_kb().ground()
        assert result.groundings == 44
        assert result.dropped == 24
        assert result.mrf.number_of_constraints == 16
        assert result.mrf.number_of_atoms == 8
        assert result.mrf.max_clause_width == 2

    def test_query_range(self):
        result = make_smokers_kb().ground()
        assert (result.mrf.query_atom_start_id, result.mrf.query_atom_end_id) == (1, 8)
        assert result.space.encode(SMOKES, ("Anna",)) == 1
        assert result.space.encode(CANCER, ("Frank",)) == 8

    def test_symmetric_rules_merge(self):
        result = make_smokers_kb().ground(track_dependencies=True)
        mrf = result.mrf
        merged = mrf.dependency_map.constraints_of(0)
        assert len(merged) == 4
        assert merged == mrf.dependency_map.constraints_of(1)
        for cid in merged:
            assert mrf.lookup_constraint(cid).weight == pytest.approx(2.8)

    def test_friendship_spreads_smoking(self):
        result = make_smokers_kb().ground()
        space = result.space
        anna = space.encode(SMOKES, ("Anna",))
        # two friendship constraints each way, plus one Cancer rule each way
        assert len(result.mrf.positive_occurrences(anna)) == 3
        assert len(result.mrf.negative_occurrences(anna)) == 3
        frank = space.encode(SMOKES, ("Frank",))
        # Frank has no friends: only the Cancer rules mention him
        assert len(result.mrf.neighbours(frank)) == 2

    def test_default_weight_hard(self):
        result = make_smokers_kb().ground()
        assert result.mrf.weight_hard == pytest.approx(1.0 + 4 * 2.8 + 4 * 1.5 + 4 * 0.5)

    def test_learning_round(self):
        kb = make_smokers_kb()
        mrf = kb.ground(track_dependencies=True).mrf
        mrf.reconstruct([1.0, 1.0, 0.25, -2.0, 0.0], kb.hard_flags)
        weights = sorted(c.weight for c in mrf.constraints() if not c.is_hard)
        assert weights == [-2.0] * 4 + [0.25] * 4 + [2.0] * 4
        assert all(c.weight == mrf.weight_hard for c in mrf.constraints() if c.is_hard)

    def test_no_negative_weights_round_trip(self):
        kb = make_smokers_kb()
        mrf = kb.ground(track_dependencies=True, no_negative_weights=True).mrf
        assert all(c.weight > 0 for c in mrf.constraints())
        before = {c.id: c.weight for c in mrf.constraints()}
        mrf.reconstruct(kb.formula_weights, kb.hard_flags)
        assert {c.id: c.weight for c in mrf.constraints()} == pytest.approx(before)


class TestUniversity:
    def test_counts(self):
        result = make_university_kb().ground()
        mrf = result.mrf
        assert mrf.number_of_constraints == 34
        assert sum(c.is_hard for c in mrf.constraints()) == 7
        assert mrf.number_of_atoms == 18

    def test_hidden_atoms_follow_query_range(self):
        result = make_university_kb().ground()
        mrf, space = result.mrf, result.space
        assert mrf.query_atom_end_id == 9
        co_author = space.encode(CO_AUTHOR, ("Ben", "Ada"))
        assert co_author > mrf.query_atom_end_id
        assert not mrf.is_query_atom(co_author)
        assert mrf.is_query_atom(space.encode(ADVISED_BY, ("Ben", "Ada")))

    def test_hard_units_forbid_bad_advising(self):
        result = make_university_kb().ground()
        space = result.space
        hard = {space.describe(c.literals[0]) for c in result.mrf.constraints() if c.is_hard}
        assert "!AdvisedBy(Ben,Ada)" not in hard
        assert "!AdvisedBy(Ada,Ada)" in hard
        assert "!AdvisedBy(Ben,Cleo)" in hard

    def test_mixed_constraints_follow_policy(self):
        kb = make_university_kb()
        result = kb.ground(track_dependencies=True, no_negative_weights=True, weight_hard=100.0)
        mrf = result.mrf
        assert mrf.number_of_constraints == 27
        mixed = [c for c in mrf.constraints() if c.is_hard and 4 in mrf.dependency_map[c.id]]
        assert len(mixed) == 7

        mrf.reconstruct(kb.formula_weights, kb.hard_flags, MixedHardPolicy.HARD_WINS)
        assert all(c.weight == 100.0 for c in mixed)

        mrf.reconstruct(kb.formula_weights, kb.hard_flags, MixedHardPolicy.SEQUENTIAL)
        # the -0.3 formula was inverted (frequency -1) and recorded after the hard rules
        assert all(c.weight == pytest.approx(100.3) for c in mixed)
