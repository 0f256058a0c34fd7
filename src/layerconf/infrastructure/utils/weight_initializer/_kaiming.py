"""
Kaiming (He) weight initializers.

This module provides Kaiming (He) initialization strategies for ReLU-family
activations and registers them into the global `WeightInitializer` registry.

Implemented variants
--------------------
- ``relu``:
    Kaiming normal initialization using ``std = sqrt(2 / fan_in)``.
- ``relu_uniform``:
    Kaiming uniform initialization using ``U(-sqrt(6/fan_in), +sqrt(6/fan_in))``.
- ``relu_leaky_*``:
    Kaiming normal initialization adjusted for LeakyReLU activations with
    different negative slopes, registered via a helper.
"""

import math

import numpy as np

from ._base import WeightInitializer


@WeightInitializer.register_initializer("relu")
def relu(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    """
    Apply Kaiming normal initialization for ReLU activations.

    This is the canonical He initialization derived specifically for ReLU:

        std = sqrt(2 / fan_in)

    Parameters
    ----------
    array:
        The array to initialize in-place.

    Returns
    -------
    np.ndarray
        The initialized array (same object).
    """
    std = math.sqrt(2.0 / float(fan_in))
    array[...] = rng.standard_normal(array.shape) * std
    return array


@WeightInitializer.register_initializer("relu_uniform")
def relu_uniform(
    array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
) -> np.ndarray:
    """
    Apply Kaiming uniform initialization for ReLU activations.

        U(-bound, +bound), where bound = sqrt(6 / fan_in)
    """
    bound = math.sqrt(6.0 / float(fan_in))
    array[...] = rng.uniform(-bound, bound, size=array.shape)
    return array


def register_relu_leaky(name: str, *, negative_slope: float) -> None:
    """
    Register a Kaiming initializer configured for LeakyReLU.

    For LeakyReLU with negative slope ``a``, the Kaiming variance becomes:

        std = sqrt(2 / ((1 + a^2) * fan_in))

    Parameters
    ----------
    name:
        Registry key to associate with the initializer.
    negative_slope:
        The LeakyReLU negative slope parameter (``a``).
    """

    @WeightInitializer.register_initializer(name)
    def _init(
        array: np.ndarray, *, fan_in: float, fan_out: float, rng: np.random.Generator
    ) -> np.ndarray:
        a = float(negative_slope)
        std = math.sqrt(2.0 / ((1.0 + a * a) * float(fan_in)))
        array[...] = rng.standard_normal(array.shape) * std
        return array


register_relu_leaky("relu_leaky_0.2", negative_slope=0.2)
register_relu_leaky("relu_leaky_0.01", negative_slope=0.01)
