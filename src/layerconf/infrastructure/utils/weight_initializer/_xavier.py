"""
Xavier/Glorot weight initializers.

This module provides Xavier (Glorot) initialization strategies and registers
them into the global `WeightInitializer` registry.

Implemented variants
--------------------
- ``xavier``:
    Xavier normal initialization using ``std = sqrt(2 / (fan_in + fan_out))``.
- ``xavier_uniform``:
    Xavier uniform initialization using
    ``U(-sqrt(6/(fan_in+fan_out)), +sqrt(6/(fan_in+fan_out)))``.
- ``xavier_fan_in``:
    Xavier normal scaled by fan-in only, ``std = sqrt(1 / fan_in)``.

Notes
-----
- Fan values are supplied by the caller (see `WeightInitializer.__call__`).
- Initializers mutate the provided array in-place and return it.
"""

import math

import numpy as np

from ._base import WeightInitializer


@WeightInitializer.register_initializer("xavier")
def xavier(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    """
    Apply Xavier (Glorot) normal initialization.

    This initializes weights from a zero-mean normal distribution with
    standard deviation:

        std = sqrt(2 / (fan_in + fan_out))

    Parameters
    ----------
    array:
        The array to initialize in-place.
    fan_in, fan_out:
        Fan values of the owning layer.
    rng:
        Random generator.

    Returns
    -------
    np.ndarray
        The initialized array (same object).
    """
    std = math.sqrt(2.0 / float(fan_in + fan_out))
    array[...] = rng.standard_normal(array.shape) * std
    return array


@WeightInitializer.register_initializer("xavier_uniform")
def xavier_uniform(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    """
    Apply Xavier (Glorot) uniform initialization.

    This initializes weights from a uniform distribution:

        U(-bound, +bound), where bound = sqrt(6 / (fan_in + fan_out))
    """
    bound = math.sqrt(6.0 / float(fan_in + fan_out))
    array[...] = rng.uniform(-bound, bound, size=array.shape)
    return array


@WeightInitializer.register_initializer("xavier_fan_in")
def xavier_fan_in(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    std = math.sqrt(1.0 / float(fan_in))
    array[...] = rng.standard_normal(array.shape) * std
    return array
