"""
Fan-scaled uniform and LeCun weight initializers.

Provided initializers
---------------------
- ``uniform``:
    ``U(-a, +a)`` with ``a = 1 / sqrt(fan_in)``.
- ``sigmoid_uniform``:
    ``U(-r, +r)`` with ``r = 4 * sqrt(6 / (fan_in + fan_out))``, the Xavier
    uniform bound rescaled for sigmoid activations.
- ``lecun_normal``:
    Truncation-free LeCun normal, ``std = sqrt(1 / fan_in)``.
- ``lecun_uniform``:
    ``U(-b, +b)`` with ``b = 3 / sqrt(fan_in)``.
"""

import math

import numpy as np

from ._base import WeightInitializer


@WeightInitializer.register_initializer("uniform")
def uniform(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    a = 1.0 / math.sqrt(float(fan_in))
    array[...] = rng.uniform(-a, a, size=array.shape)
    return array


@WeightInitializer.register_initializer("sigmoid_uniform")
def sigmoid_uniform(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    r = 4.0 * math.sqrt(6.0 / float(fan_in + fan_out))
    array[...] = rng.uniform(-r, r, size=array.shape)
    return array


@WeightInitializer.register_initializer("lecun_normal")
def lecun_normal(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    std = math.sqrt(1.0 / float(fan_in))
    array[...] = rng.standard_normal(array.shape) * std
    return array


@WeightInitializer.register_initializer("lecun_uniform")
def lecun_uniform(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    b = 3.0 / math.sqrt(float(fan_in))
    array[...] = rng.uniform(-b, b, size=array.shape)
    return array
