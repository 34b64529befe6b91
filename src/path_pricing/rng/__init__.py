"""
Random sequence generation for path simulation.

Provides:
- Gaussian sequence generators (pseudo-random and Sobol)
- Block-buffered sequence access with last-draw reuse
"""

from path_pricing.rng.buffer import RandomSequenceBuffer
from path_pricing.rng.sequences import (
    PseudoRandomSequenceGenerator,
    SequenceGenerator,
    SequenceSample,
    SobolSequenceGenerator,
)

__all__ = [
    "PseudoRandomSequenceGenerator",
    "RandomSequenceBuffer",
    "SequenceGenerator",
    "SequenceSample",
    "SobolSequenceGenerator",
]
