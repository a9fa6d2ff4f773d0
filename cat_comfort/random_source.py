"""
Random number provider used for every draw the game makes.

Injecting a source keeps target temperatures, interference intervals and
interference types replayable: pass random.Random(seed) or any object with
the same three methods.
"""
import random
from typing import Optional, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """The subset of random.Random the game relies on."""

    def uniform(self, a: float, b: float) -> float:
        """Uniform float between a and b."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        ...


def create_random_source(seed: Optional[int] = None) -> RandomSource:
    """Default source. A seed makes the whole round reproducible."""
    return random.Random(seed)
