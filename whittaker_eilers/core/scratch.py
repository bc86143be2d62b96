"""
Scratch Buffers

Pre-sized working arrays for the banded solve, cached by augmented table
length so repeated calls with the same table size never reallocate.
"""

import threading
import logging
from collections import OrderedDict
from dataclasses import dataclass

import numpy as np

from .banded import BAND_WIDTH

logger = logging.getLogger(__name__)

@dataclass
class SmoothingWorkspace:
    """Working arrays for one table length ``m``"""
    m: int
    xi: np.ndarray
    yi: np.ndarray
    w: np.ndarray
    v1a: np.ndarray
    v2a: np.ndarray
    da: np.ndarray
    dtd: np.ndarray
    ca: np.ndarray
    b: np.ndarray
    za: np.ndarray
    zb: np.ndarray

    @classmethod
    def allocate(cls, m: int) -> "SmoothingWorkspace":
        return cls(
            m=m,
            xi=np.zeros(m),
            yi=np.zeros(m),
            w=np.zeros(m),
            v1a=np.zeros(m),
            v2a=np.zeros(m),
            da=np.zeros((m, BAND_WIDTH)),
            dtd=np.zeros((m, BAND_WIDTH)),
            ca=np.zeros((m, BAND_WIDTH)),
            b=np.zeros(m),
            za=np.zeros(m),
            zb=np.zeros(m),
        )

class ScratchPool:
    """
    Per-thread cache of :class:`SmoothingWorkspace` objects keyed by ``m``

    Each thread sees its own workspaces, so a workspace is never shared by
    two solves running at the same time.  The least recently used sizes are
    evicted once ``max_sizes`` distinct lengths are cached.
    """

    def __init__(self, max_sizes: int = 8):
        self.max_sizes = max_sizes
        self._local = threading.local()

    def _cache(self) -> OrderedDict:
        cache = getattr(self._local, "workspaces", None)
        if cache is None:
            cache = OrderedDict()
            self._local.workspaces = cache
        return cache

    def acquire(self, m: int) -> SmoothingWorkspace:
        cache = self._cache()
        workspace = cache.get(m)
        if workspace is None:
            logger.debug(f"Allocating smoothing workspace for m={m}")
            workspace = SmoothingWorkspace.allocate(m)
            cache[m] = workspace
            while len(cache) > self.max_sizes:
                cache.popitem(last=False)
        else:
            cache.move_to_end(m)
        return workspace

    def clear(self) -> None:
        self._cache().clear()

    def __len__(self):
        return len(self._cache())

    def __contains__(self, m):
        return m in self._cache()

default_pool = ScratchPool()
