from effcheck.shrink.numeric import shrink_candidates, shrink_float, shrink_integer
from effcheck.shrink.search import ShrinkResult, ShrinkSearch, shrink
from effcheck.shrink.trie import RetainedPath, ShrinkTrie

__all__ = [
    "RetainedPath",
    "ShrinkResult",
    "ShrinkSearch",
    "ShrinkTrie",
    "shrink",
    "shrink_candidates",
    "shrink_float",
    "shrink_integer",
]
