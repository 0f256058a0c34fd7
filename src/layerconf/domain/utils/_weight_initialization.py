"""
Abstract interfaces and utilities for weight initialization.

This module defines the abstract base class for weight initializers used by
parameter initializers, along with shared helper functions for computing
fan-in and fan-out values.

The concrete registry and the initialization strategies live in the
infrastructure layer. This module only defines the contract and the shared
arithmetic, without binding to any random number source.
"""

from abc import ABC
from typing import Callable, Dict, Optional, Sequence, Tuple, TypeVar

import numpy as np


T = TypeVar("T", bound=Callable[..., np.ndarray])


class _WeightInitializer(ABC):
    """
    Abstract base class for weight initializer dispatchers.

    Design notes
    ------------
    - Initializers are identified by string names.
    - Each initializer is a callable that fills a numpy array in-place and
      returns it. It receives the fan-in / fan-out of the owning layer as
      keyword arguments, since those cannot always be recovered from the
      array shape alone (transposed convolutions scale fan-out by stride).
    - This class does not prescribe how initializers are stored; it only
      defines the expected interface.
    """

    INITIALIZERS: Dict[str, Callable] = {}

    def __init__(self, initializer_name: str) -> None:
        """
        Construct a weight initializer dispatcher.

        Parameters
        ----------
        initializer_name:
            The string key identifying a registered initializer.
        """
        ...

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Register a weight initializer under a given name.

        Parameters
        ----------
        name:
            Name used to identify the initializer.
        overwrite:
            Whether to allow overwriting an existing registration.

        Returns
        -------
        Callable
            A decorator that registers the initializer function.
        """
        ...

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """
        Return the names of all registered initializers.
        """
        ...

    @classmethod
    def get(cls, name: str) -> Callable[..., np.ndarray]:
        """
        Get a registered initializer callable by name.
        """
        ...

    def __call__(
        self,
        array: np.ndarray,
        *,
        fan_in: Optional[float] = None,
        fan_out: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """
        Apply the initializer to an array.

        Parameters
        ----------
        array:
            The array (usually a view into a flat parameter buffer) to fill.
        fan_in, fan_out:
            Fan values of the layer owning the parameter. When omitted they
            are derived from the array shape.
        rng:
            Random generator; a fresh default generator is used when omitted.

        Returns
        -------
        np.ndarray
            The initialized array (same object).
        """
        ...


def _calculate_fan_in_and_fan_out(shape: tuple[int, ...]) -> tuple[int, int]:
    """
    Compute fan-in and fan-out values for a weight shape.

    Fan-in represents the number of inputs to a single output unit, while
    fan-out represents the number of outputs influenced by a single input
    unit.

    Parameters
    ----------
    shape:
        Shape of the weight tensor. Convolution weights are expected in
        (out_channels, in_channels, k1, k2, ...) layout.

    Returns
    -------
    tuple[int, int]
        A tuple of (fan_in, fan_out).
    """
    if len(shape) == 0:
        return 1, 1  # scalar
    if len(shape) == 1:
        # Bias or vector parameter
        return shape[0], shape[0]
    if len(shape) == 2:
        # Dense: (out_features, in_features)
        fan_out, fan_in = shape
        return fan_in, fan_out

    # ConvNd: (out_channels, in_channels, k1, k2, ...)
    receptive_field = 1
    for d in shape[2:]:
        receptive_field *= int(d)

    fan_in = int(shape[1]) * receptive_field
    fan_out = int(shape[0]) * receptive_field
    return fan_in, fan_out


def _calculate_deconvolution_fan_in_and_fan_out(
    n_in: int,
    n_out: int,
    kernel_size: Sequence[int],
    stride: Sequence[int],
) -> Tuple[float, float]:
    """
    Compute fan-in and fan-out for a transposed convolution.

    Each input unit of a transposed convolution is connected to
    `n_in * prod(kernel)` weights, while output units overlap according to
    the stride, so the fan-out is divided by the product of the strides:

        fan_in  = n_in  * k_h * k_w
        fan_out = n_out * k_h * k_w / (s_h * s_w)

    Returns
    -------
    tuple[float, float]
        A tuple of (fan_in, fan_out).
    """
    receptive_field = 1
    for k in kernel_size:
        receptive_field *= int(k)
    stride_area = 1
    for s in stride:
        stride_area *= int(s)

    fan_in = float(int(n_in) * receptive_field)
    fan_out = float(int(n_out) * receptive_field) / float(stride_area)
    return fan_in, fan_out
