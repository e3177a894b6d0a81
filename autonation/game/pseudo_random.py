import random


class PseudoRandom:
    """Seeded random source owned by a single execution."""

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high)."""
        if high <= low:
            return low
        return low + int(self._rng.random() * (high - low))

    def chance(self, odds: int) -> bool:
        """True with probability 1/odds."""
        return int(self._rng.random() * odds) == 0

    def rand_element(self, seq):
        if not seq:
            raise ValueError("cannot pick from an empty sequence")
        return seq[self.next_int(0, len(seq))]

    def shuffle(self, seq) -> list:
        """Fisher-Yates shuffle into a new list."""
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            items[i], items[j] = items[j], items[i]
        return items
