"""
Bounded dataset cache.

A least-recently-used MutableMapping that can be injected into
Sentinel2Service in place of the default unbounded dict.
"""

import logging
from collections import OrderedDict
from collections.abc import Iterator, MutableMapping

from fieldspectra.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class LRUCache(MutableMapping):
    """
    Mapping that evicts the least recently used entry beyond ``max_entries``.

    Reads through ``__getitem__`` (and therefore ``get``) refresh recency;
    ``in`` checks do not.

    Examples:
        >>> cache = LRUCache(2)
        >>> cache["a"] = 1; cache["b"] = 2; cache["c"] = 3
        >>> list(cache)
        ['b', 'c']
    """

    def __init__(self, max_entries: int):
        if max_entries <= 0:
            raise ValidationError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._data: OrderedDict = OrderedDict()

    def __getitem__(self, key):
        value = self._data[key]
        self._data.move_to_end(key)
        return value

    def __setitem__(self, key, value) -> None:
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self.max_entries:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("Evicted cache entry: %s", evicted)

    def __delitem__(self, key) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<LRUCache: {len(self._data)}/{self.max_entries} entries>"
