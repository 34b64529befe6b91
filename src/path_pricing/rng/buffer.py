"""
Block-buffered access to a sequence generator.

Pre-draws fixed-size blocks of sequences to amortize per-draw overhead,
which matters when the number of paths is small relative to the generator's
setup cost. The most recent draw is kept for antithetic reuse.

[T1] Amortized cost per draw: O(D), plus one generator block of B draws
     every B calls.

Not thread-safe: the cursor, storage and last sample are mutated by every
draw. Give each worker its own buffer.
"""

import logging

import numpy as np

from path_pricing.config.settings import SETTINGS
from path_pricing.errors import ConstructionError, SamplingError
from path_pricing.rng.sequences import SequenceGenerator, SequenceSample

logger = logging.getLogger(__name__)


class RandomSequenceBuffer:
    """
    Random sequence buffer with automatic refill.

    Owns the wrapped generator: after construction the generator must not be
    drawn from directly, or the buffered stream and the generator's own stream
    interleave.

    Parameters
    ----------
    source : SequenceGenerator
        Underlying generator (exposes ``dimension`` and ``next_sequence()``)
    dimension : int, optional
        Declared dimension; must equal ``source.dimension`` when given
    block_size : int, optional
        Sequences per refill (default: SETTINGS.simulation.buffer_block_size)

    Examples
    --------
    >>> from path_pricing.rng.sequences import PseudoRandomSequenceGenerator
    >>> buffer = RandomSequenceBuffer(PseudoRandomSequenceGenerator(4, seed=42))
    >>> sample = buffer.next_sequence()
    >>> buffer.last_sequence() is sample
    True
    """

    def __init__(
        self,
        source: SequenceGenerator,
        dimension: int | None = None,
        block_size: int | None = None,
    ):
        source_dimension = source.dimension
        if dimension is None:
            dimension = source_dimension
        if dimension != source_dimension:
            raise ConstructionError(
                f"CRITICAL: sequence generator dimensionality ({source_dimension}) "
                f"!= buffer dimension ({dimension})"
            )
        if dimension <= 0:
            raise ConstructionError(f"CRITICAL: dimension must be > 0, got {dimension}")

        if block_size is None:
            block_size = SETTINGS.simulation.buffer_block_size
        if block_size <= 0:
            raise ConstructionError(f"CRITICAL: block_size must be > 0, got {block_size}")

        self._source = source
        self._dimension = int(dimension)
        self._block_size = int(block_size)
        self._storage = np.empty((self._block_size, self._dimension))
        self._cursor = self._block_size
        self._last_sample: SequenceSample | None = None
        self._refill_count = 0

        self._refill()

    @property
    def dimension(self) -> int:
        """Dimension D of every draw."""
        return self._dimension

    @property
    def block_size(self) -> int:
        """Number of sequences drawn per refill."""
        return self._block_size

    @property
    def refill_count(self) -> int:
        """Number of refills performed so far (including the eager one)."""
        return self._refill_count

    @property
    def remaining(self) -> int:
        """Unconsumed sequences left in the current block."""
        return self._block_size - self._cursor

    def _refill(self) -> None:
        for i in range(self._block_size):
            value = self._source.next_sequence().value
            if len(value) != self._dimension:
                # refill_count == 0 only during construction
                error = ConstructionError if self._refill_count == 0 else SamplingError
                raise error(
                    f"CRITICAL: sequence generator returned {len(value)} values, "
                    f"expected {self._dimension}"
                )
            self._storage[i] = value
        self._cursor = 0
        self._refill_count += 1
        logger.debug(
            f"Refilled buffer: {self._block_size} x {self._dimension} "
            f"(refill #{self._refill_count})"
        )

    def next_sequence(self) -> SequenceSample:
        """
        Draw the next buffered sequence.

        Advances the cursor and replaces the stored last sample. Refills the
        block from the source when it is exhausted; this is the only point at
        which the source is called.

        Returns
        -------
        SequenceSample
            Next draw, weight 1.0

        Raises
        ------
        SamplingError
            If a refill receives a draw of the wrong length
        """
        if self._cursor >= self._block_size:
            self._refill()

        sample = SequenceSample(value=self._storage[self._cursor].copy(), weight=1.0)
        self._cursor += 1
        self._last_sample = sample
        return sample

    def last_sequence(self) -> SequenceSample:
        """
        Return the most recent draw without drawing.

        Does not move the cursor; repeated calls return the same sample.

        Raises
        ------
        SamplingError
            If next_sequence() has never been called
        """
        if self._last_sample is None:
            raise SamplingError(
                "CRITICAL: no sequence drawn yet; call next_sequence() before last_sequence()"
            )
        return self._last_sample
