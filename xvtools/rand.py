"""The Park-Miller minimal standard pseudo-random generator."""

from dataclasses import dataclass

_MASK64 = (1 << 64) - 1


def do_rand(state):
    """Advance state by one step and return the new state, in [0, 0x7ffffffd].

    Computes (7**5 * x) mod (2**31 - 1) without overflowing 31 bits, where
    x is state shifted into [1, 0x7ffffffe].
    """
    x = ((state & _MASK64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


@dataclass
class ParkMiller:
    """A generator holding its own state."""

    state: int = 1

    def next(self):
        """Return the next pseudo-random number."""
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self):
        while True:
            yield self.next()