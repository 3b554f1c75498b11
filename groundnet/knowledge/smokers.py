"""
Knowledge base: Friends & Smokers.

The classic Markov logic example. Friendship is evidence; who smokes and
who gets cancer is queried.

    0:  2.0  !Friends(x,y) v !Smokes(x) v Smokes(y)
    1:  0.8  !Friends(x,y) v !Smokes(y) v Smokes(x)
    2:  1.5  !Smokes(x) v Cancer(x)
    3: -0.5  Cancer(x)
    4:       !Cancer(x) v Smokes(x).

Friendship is symmetric in the evidence, so formulas 0 and 1 ground to the
same four constraints and merge: each carries weight 2.8 and depends on
both formulas.
"""

from ..core.atoms import AtomSignature
from ..core.constants import ConstantsDomainBuilder
from ..core.parser import AtomParser
from ..grounding.kb import KnowledgeBase


FRIENDS = AtomSignature("Friends", 2)
SMOKES = AtomSignature("Smokes", 1)
CANCER = AtomSignature("Cancer", 1)

SMOKERS_SCHEMA = {
    FRIENDS: ["person", "person"],
    SMOKES: ["person"],
    CANCER: ["person"],
}

SMOKERS_RULES = [
    "2.0 !Friends(x,y) v !Smokes(x) v Smokes(y)",
    "0.8 !Friends(x,y) v !Smokes(y) v Smokes(x)",
    "1.5 !Smokes(x) v Cancer(x)",
    "-0.5 Cancer(x)",
    "!Cancer(x) v Smokes(x).",
]

PEOPLE = ["Anna", "Bob", "Edward", "Frank"]

FRIENDSHIPS = [("Anna", "Bob"), ("Anna", "Edward")]


def make_smokers_kb() -> KnowledgeBase:
    parser = AtomParser(SMOKERS_SCHEMA)
    clauses = [parser.parse_clause(rule) for rule in SMOKERS_RULES]

    builder = ConstantsDomainBuilder()
    builder.insert_all("person", PEOPLE)

    friends = set()
    for a, b in FRIENDSHIPS:
        friends.add((a, b))
        friends.add((b, a))

    return KnowledgeBase(
        predicate_schema=SMOKERS_SCHEMA,
        clauses=clauses,
        domains=builder.snapshot(),
        query_predicates=[SMOKES, CANCER],
        evidence={FRIENDS: friends},
        description="Friends & Smokers: smoking spreads along friendship",
    )
