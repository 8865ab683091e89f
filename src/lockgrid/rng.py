from dataclasses import dataclass

MASK64 = 0xFFFFFFFFFFFFFFFF
U64_MAX = MASK64

# Non-zero starting words; seed() mixes caller values into these.
DEFAULT_S0 = 0x9E3779B97F4A7C15
DEFAULT_S1 = 0xBF58476D1CE4E5B9

WARMUP = 64  # outputs discarded after seeding

def rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & MASK64

@dataclass
class Xoroshiro128Plus:
    """
    xoroshiro128+ generator (rotations 55/14/36), period 2^128 - 1.

    Not cryptographically secure. One instance is one stream with no
    locking: give every generation task its own instance.
    """
    s0: int = DEFAULT_S0
    s1: int = DEFAULT_S1

    @classmethod
    def from_seed(cls, a: int, b: int) -> "Xoroshiro128Plus":
        r = cls()
        r.seed(a, b)
        return r

    def seed(self, a: int, b: int) -> None:
        self.s0 ^= a & MASK64
        self.s1 ^= b & MASK64
        if self.s0 == 0 and self.s1 == 0:
            raise ValueError("seed would leave the generator in the all-zero state")
        for _ in range(WARMUP):
            self.next_u64()

    def next_u64(self) -> int:
        s0, s1 = self.s0, self.s1
        result = (s0 + s1) & MASK64
        s1 ^= s0
        self.s0 = rotl(s0, 55) ^ s1 ^ ((s1 << 14) & MASK64)
        self.s1 = rotl(s1, 36)
        return result

    def uniform_float(self) -> float:
        """Next draw mapped onto [0.0, 1.0], both ends included."""
        return self.next_u64() / U64_MAX

    def int_range(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] inclusive."""
        if low > high:
            raise ValueError(f"int_range: low {low} > high {high}")
        d = high - low + 1
        # A draw of exactly 1.0 would land on high + 1.
        return min(int(self.uniform_float() * d) + low, high)

    def bernoulli(self, p: float) -> bool:
        """
        True with probability p. p=1.0 always succeeds; p=0.0 still succeeds
        on the single draw that maps to exactly 0.0.
        """
        return self.uniform_float() <= p
