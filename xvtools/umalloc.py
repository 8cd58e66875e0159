"""A simulated free-list memory allocator over a growable heap."""

from bisect import bisect_left

HEADER_SIZE = 16
MIN_GROW_UNITS = 4096

# The empty base block sits below every heap address.
_BASE = -1


class Heap:
    """A circular, address-ordered free list with a roving pointer.

    Memory is handed out in units of HEADER_SIZE bytes, each block preceded by
    a one-unit header. The heap grows by at least MIN_GROW_UNITS units at a
    time, up to limit bytes in all.
    """

    def __init__(self, limit):
        if limit < 0:
            raise ValueError("limit must not be negative")
        self.limit = limit
        self._brk = 0
        self._starts = [_BASE]
        self._sizes = {_BASE: 0}
        self._freep = _BASE
        self._used = {}

    def _next(self, unit):
        i = bisect_left(self._starts, unit)
        return self._starts[(i + 1) % len(self._starts)]

    def _take(self, unit):
        """Unlink a free block and return its size in units."""
        self._starts.pop(bisect_left(self._starts, unit))
        return self._sizes.pop(unit)

    def _morecore(self, nunits):
        nunits = max(nunits, MIN_GROW_UNITS)
        nbytes = nunits * HEADER_SIZE
        if self._brk + nbytes > self.limit:
            return None
        unit = self._brk // HEADER_SIZE
        self._brk += nbytes
        self._used[unit] = nunits
        self.free((unit + 1) * HEADER_SIZE)
        return self._freep

    def malloc(self, nbytes):
        """Allocate nbytes and return the block's address, or None when out of memory."""
        if nbytes < 0:
            raise ValueError("size must not be negative")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        prev = self._freep
        p = self._next(prev)
        while True:
            size = self._sizes[p]
            if size >= nunits:
                if size == nunits:
                    self._take(p)
                    block = p
                else:
                    self._sizes[p] = size - nunits
                    block = p + size - nunits
                self._freep = prev
                self._used[block] = nunits
                return (block + 1) * HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
                if p is None:
                    return None
            prev, p = p, self._next(p)

    def free(self, addr):
        """Return a block obtained from malloc to the free list."""
        unit, rem = divmod(addr, HEADER_SIZE)
        bp = unit - 1
        if rem or bp not in self._used:
            raise ValueError(f"address {addr} is not an allocated block")
        size = self._used.pop(bp)
        i = bisect_left(self._starts, bp)
        p = self._starts[i - 1]
        upper = self._starts[i % len(self._starts)]
        if bp + size == upper:
            size += self._take(upper)
        if p + self._sizes[p] == bp:
            self._sizes[p] += size
        else:
            self._starts.insert(i, bp)
            self._sizes[bp] = size
        self._freep = p

    def free_blocks(self):
        """Return (header address, length in bytes) of each free block in address order."""
        return [
            (unit * HEADER_SIZE, self._sizes[unit] * HEADER_SIZE)
            for unit in self._starts
            if unit != _BASE
        ]