"""Seeded random generators for reproducible system generation.

All randomness in a generation call comes from one ``numpy`` Generator that
is passed explicitly down the pipeline. Independent sub-objects (a star, a
planet, an asteroid) get their own generator, seeded by a single draw from
the parent, so the draws a sub-object makes never shift its siblings.
"""

from __future__ import annotations

import numpy as np

SEED_BITS = 63


def make_rng(seed: int) -> np.random.Generator:
    """Generator for a top-level seed."""
    return np.random.default_rng(int(seed))


def draw_seed(rng: np.random.Generator) -> int:
    """Consume exactly one draw from ``rng`` and return it as a seed."""
    return int(rng.integers(0, 2**SEED_BITS))


def fork(rng: np.random.Generator) -> np.random.Generator:
    """Independent generator for a sub-object, seeded from ``rng``."""
    return make_rng(draw_seed(rng))


def weighted_index(rng: np.random.Generator, weights) -> int:
    """Index drawn with probability proportional to ``weights``."""
    weights = np.asarray(weights, dtype=float)
    return int(rng.choice(len(weights), p=weights / weights.sum()))
