"""
Seedable Alea PRNG used by every simulation routine.

Based on Johannes Baagøe's Alea algorithm. Each generator in the package
takes an instance of this class instead of touching a global random source,
so a campaign built from the same seed replays identically.
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG with the draw helpers the simulation needs.

    All integer helpers are inclusive on both ends, matching how ranges such
    as "15-25 percent youth" are stated throughout the game data.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000
            return _uint32(mash_n) * 2.3283064365386963e-10

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def randint(self, low: int, high: int) -> int:
        """Random integer in [low, high], both ends included."""
        low, high = int(low), int(high)
        if high < low:
            low, high = high, low
        return low + int(self.random() * (high - low + 1))

    def uniform(self, low: float, high: float) -> float:
        """Random float in [low, high)."""
        return low + self.random() * (high - low)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def shuffle(self, seq: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``seq``."""
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """Pick ``k`` distinct elements without replacement."""
        k = max(0, min(k, len(seq)))
        return self.shuffle(seq)[:k]

    def token(self, length: int = 9) -> str:
        """Short base-36 identifier drawn from this stream."""
        return "".join(self.choice(_ID_ALPHABET) for _ in range(length))

    def spawn(self, label: str) -> "AleaPRNG":
        """Derive an independent child stream keyed by ``label``."""
        return AleaPRNG(f"{self.seed}:{label}:{self.randint(0, 2**31 - 1)}")
