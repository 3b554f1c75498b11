"""
Knowledge base: advisors and co-authors.

Who is a professor and who is a student is evidence. AdvisedBy is
queried; CoAuthor is hidden (open world, not queried), so its atoms take
ids after the query range.

Hard rules restrict AdvisedBy(s,p) to students advised by professors;
under the evidence they collapse into hard negative unit constraints for
every pair that breaks them.
"""

from ..core.atoms import AtomSignature
from ..core.constants import ConstantsDomainBuilder
from ..core.parser import AtomParser
from ..grounding.kb import KnowledgeBase


PROFESSOR = AtomSignature("Professor", 1)
STUDENT = AtomSignature("Student", 1)
ADVISED_BY = AtomSignature("AdvisedBy", 2)
CO_AUTHOR = AtomSignature("CoAuthor", 2)

UNIVERSITY_SCHEMA = {
    PROFESSOR: ["person"],
    STUDENT: ["person"],
    ADVISED_BY: ["person", "person"],
    CO_AUTHOR: ["person", "person"],
}

UNIVERSITY_RULES = [
    "!AdvisedBy(s,p) v Professor(p).",
    "!AdvisedBy(s,p) v Student(s).",
    "1.2 !CoAuthor(s,p) v AdvisedBy(s,p)",
    "0.7 !AdvisedBy(s,p) v CoAuthor(s,p)",
    "-0.3 AdvisedBy(s,p)",
]


def make_university_kb() -> KnowledgeBase:
    parser = AtomParser(UNIVERSITY_SCHEMA)
    clauses = [parser.parse_clause(rule) for rule in UNIVERSITY_RULES]

    builder = ConstantsDomainBuilder()
    builder.insert("person", "Ada")
    builder.insert_all("person", ["Ben", "Cleo"])

    return KnowledgeBase(
        predicate_schema=UNIVERSITY_SCHEMA,
        clauses=clauses,
        domains=builder.snapshot(),
        query_predicates=[ADVISED_BY],
        hidden_predicates=[CO_AUTHOR],
        evidence={
            PROFESSOR: {("Ada",)},
            STUDENT: {("Ben",), ("Cleo",)},
        },
        description="Advisors: hard typing rules plus soft co-authorship links",
    )
