"""Multi-stream Lehmer random number generator.

There are 256 independent streams, each with its own state. A stream's
state is a value in ``[1, MODULUS - 1]``. Each call to :meth:`random`
advances the current stream and returns a float in the open interval
``(0, 1)``.
"""

from __future__ import annotations

import math
import time

MODULUS = 2147483647
MULTIPLIER = 48271
CHECK = 399268537
STREAMS = 256
A256 = 22925
DEFAULT = 123456789


def _lehmer_step(state: int, multiplier: int) -> int:
    """Advance ``state`` by ``multiplier`` modulo MODULUS without overflow."""
    q, r = divmod(MODULUS, multiplier)
    t = multiplier * (state % q) - r * (state // q)
    return t if t > 0 else t + MODULUS


class RandomStreams:
    """A set of 256 Lehmer generator streams with one current stream."""

    def __init__(self) -> None:
        self._seeds = [0] * STREAMS
        self._seeds[0] = DEFAULT
        self._stream = 0
        self._initialized = False

    @property
    def stream(self) -> int:
        """Index of the stream that :meth:`random` draws from."""
        return self._stream

    def random(self) -> float:
        """Advance the current stream and return a value in ``(0, 1)``."""
        state = _lehmer_step(self._seeds[self._stream], MULTIPLIER)
        self._seeds[self._stream] = state
        return state / MODULUS

    def plant_seeds(self, x: int) -> None:
        """Seed stream 0 with ``x`` and derive every other stream from it.

        Consecutive streams are separated by 8,367,782 draws.
        """
        self._initialized = True
        current = self._stream
        self.select_stream(0)
        self.put_seed(x)
        self._stream = current
        for j in range(1, STREAMS):
            self._seeds[j] = _lehmer_step(self._seeds[j - 1], A256)

    def put_seed(self, x: int) -> None:
        """Set the state of the current stream.

        A positive ``x`` is reduced modulo MODULUS; a negative ``x`` takes
        its value from the clock; a zero is asked for on standard input.
        """
        if x > 0:
            x %= MODULUS
        if x < 0:
            x = int(time.time()) % MODULUS
        while x == 0 or not 0 < x < MODULUS:
            reply = input("\nEnter a positive integer seed (9 digits or less) >> ")
            try:
                x = int(reply.strip())
            except ValueError:
                x = 0
            if not 0 < x < MODULUS:
                print("\nInput out of range ... try again")
                x = 0
        self._seeds[self._stream] = x

    def get_seed(self) -> int:
        """Return the state of the current stream."""
        return self._seeds[self._stream]

    def select_stream(self, index: int) -> None:
        """Make stream ``index`` (taken modulo 256) the current stream."""
        self._stream = index % STREAMS
        if not self._initialized and self._stream != 0:
            self.plant_seeds(DEFAULT)

    def self_test(self) -> bool:
        """Check the generator against its known reference values."""
        self.select_stream(0)
        self.put_seed(1)
        for _ in range(10000):
            self.random()
        ok = self.get_seed() == CHECK
        self.select_stream(1)
        self.plant_seeds(1)
        return ok and self.get_seed() == A256


def find_value(seed: int, target: int) -> int:
    """Count draws from stream 1 until ``floor(random() * 1e9)`` hits ``target``.

    Stream 1 is seeded with ``seed``. Raises ValueError if ``target`` can
    never be produced: it is out of range or the stream's full period
    passes without reaching it.
    """
    if not 0 <= target < 1_000_000_000:
        raise ValueError(f"target {target} is outside [0, 1000000000)")
    rng = RandomStreams()
    rng.select_stream(1)
    rng.put_seed(seed)
    start = rng.get_seed()
    draws = 0
    while True:
        value = math.floor(rng.random() * 1_000_000_000)
        draws += 1
        if value == target:
            return draws
        if rng.get_seed() == start:
            raise ValueError(f"target {target} never occurs for seed {seed}")