from .space import AtomSpace
from .builder import NetworkBuilder, GroundingResult, ground
from .kb import KnowledgeBase

__all__ = ["AtomSpace", "NetworkBuilder", "GroundingResult", "ground", "KnowledgeBase"]
