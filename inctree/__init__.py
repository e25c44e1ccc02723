"""Include tree analysis for C and C++ projects."""

from inctree.cache import DependencyCache
from inctree.config import AnalyzerConfig
from inctree.discovery import analyze, find_entry_points
from inctree.models import DependencyRecord, IncludeTree, NodeStatus, TreeEvent
from inctree.traversal import IncludeTraversal

__all__ = [
    "AnalyzerConfig",
    "DependencyCache",
    "DependencyRecord",
    "IncludeTraversal",
    "IncludeTree",
    "NodeStatus",
    "TreeEvent",
    "analyze",
    "find_entry_points",
]
