"""Thread-safe LRU cache for parsed templates.

Parsing dominates the cost of formatting a template, and applications
format the same few templates over and over. MessageFormatter keeps parsed
trees here, keyed by the template text.

Architecture:
    - Thread-safe using threading.Lock
    - LRU eviction via OrderedDict
    - Only successful parses are stored; syntax errors are re-raised on
      every call so each caller sees them

Python 3.13+.
"""

from collections import OrderedDict
from threading import Lock

from icumessage.syntax.ast import Root

__all__ = ["ParseCache"]


class ParseCache:
    """Thread-safe LRU cache mapping template text to its parsed Root.

    Returns None on cache miss.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int) -> None:
        """Initialize parse cache.

        Args:
            maxsize: Maximum number of entries (must be positive)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, Root] = OrderedDict()
        self._maxsize = maxsize
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def get(self, template: str) -> Root | None:
        """Get the cached tree for a template, marking it recently used."""
        with self._lock:
            root = self._cache.get(template)
            if root is None:
                self._misses += 1
                return None
            self._cache.move_to_end(template)
            self._hits += 1
            return root

    def put(self, template: str, root: Root) -> None:
        """Store a parsed tree. Evicts the LRU entry if the cache is full."""
        with self._lock:
            if template in self._cache:
                self._cache.move_to_end(template)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)  # oldest
            self._cache[template] = root

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, template: object) -> bool:
        with self._lock:
            return template in self._cache

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses
