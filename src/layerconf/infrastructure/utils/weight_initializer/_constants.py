"""
Constant weight initializers.

This module defines simple constant-valued weight initializers and registers
them with the global `WeightInitializer` registry.

Provided initializers
---------------------
- ``zeros``:
    Initialize an array with all elements set to zero.
- ``ones``:
    Initialize an array with all elements set to one.

These initializers are typically used for testing or deterministic setups.
Fan values and the random generator are accepted but ignored.
"""

import numpy as np

from ._base import WeightInitializer


@WeightInitializer.register_initializer("zeros")
def zeros(array: np.ndarray, *, fan_in: float, fan_out: float, rng) -> np.ndarray:
    """
    Initialize an array with all elements set to zero.

    Parameters
    ----------
    array : np.ndarray
        The array to initialize in-place.

    Returns
    -------
    np.ndarray
        The initialized array (same object).
    """
    array[...] = 0
    return array


@WeightInitializer.register_initializer("ones")
def ones(array: np.ndarray, *, fan_in: float, fan_out: float, rng) -> np.ndarray:
    """
    Initialize an array with all elements set to one.
    """
    array[...] = 1
    return array
