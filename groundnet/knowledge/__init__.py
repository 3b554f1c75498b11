"""
Knowledge-base registry.

Each entry describes one sample knowledge base:
    make_kb:      () -> KnowledgeBase
    description:  str
"""

from .smokers import make_smokers_kb
from .university import make_university_kb


KNOWLEDGE_BASES = {
    "smokers": {
        "make_kb":     make_smokers_kb,
        "description": "Friends & Smokers: smoking spreads along friendship",
    },
    "university": {
        "make_kb":     make_university_kb,
        "description": "Advisors: hard typing rules plus soft co-authorship links",
    },
}
