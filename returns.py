"""
Market return sampling for the Monte Carlo engine.
Normal draws via the Box-Muller transform over an injected uniform source.
"""
import math
from typing import Callable, Optional

import numpy as np

UniformSource = Callable[[], float]

# Lower clamp for the first uniform draw so log() stays finite
MIN_UNIFORM = float(np.finfo(float).eps)


def make_uniform_source(seed: Optional[int] = None) -> UniformSource:
    """
    Create a uniform(0, 1) source backed by its own numpy Generator.

    Args:
        seed: Optional seed for reproducible draws

    Returns:
        Zero-argument callable returning a float in [0, 1)
    """
    rng = np.random.default_rng(seed)
    return lambda: float(rng.random())


def generate_normal_return(mean: float, std_dev: float,
                           uniform_source: UniformSource) -> float:
    """
    Draw a normally distributed return using the Box-Muller transform.

    Args:
        mean: Distribution mean (decimal, e.g. 0.07)
        std_dev: Standard deviation (decimal)
        uniform_source: Zero-argument callable returning uniform(0, 1) values

    Returns:
        Sampled return. Exactly ``mean`` when ``std_dev`` is 0.
    """
    u1 = max(uniform_source(), MIN_UNIFORM)
    u2 = uniform_source()

    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std_dev * z0
