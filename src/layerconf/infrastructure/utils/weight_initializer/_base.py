"""
Weight initializer registry and dispatch utilities.

This module defines the concrete `WeightInitializer` used by parameter
initializers to fill parameter views with a registered initialization
strategy (e.g. Xavier, ReLU/He, LeCun).

Design
------
- Initializers are registered by string name via a decorator-based registry.
- Each initializer fills a numpy array *in-place* and returns it. It is
  called as ``fn(array, fan_in=..., fan_out=..., rng=...)``.
- The dispatcher resolves an initializer by name at construction time and
  invokes it via `__call__`, filling in default fan values and a default
  random generator.

Usage example
-------------
Registering an initializer:

    @WeightInitializer.register_initializer("half")
    def half(array, *, fan_in, fan_out, rng):
        array[...] = 0.5
        return array

Applying an initializer:

    init = WeightInitializer("xavier")
    init(weight_view, fan_in=27.0, fan_out=72.0)

Notes
-----
- Layer configurations select a strategy by name (``weight_init="relu"``);
  no subclassing is involved.
- Registration keys must be unique unless explicitly overwritten.
"""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, Optional, TypeVar

import numpy as np

from ....domain.utils._weight_initialization import (
    _WeightInitializer,
    _calculate_fan_in_and_fan_out,
)

T = TypeVar("T", bound=Callable[..., np.ndarray])


class WeightInitializer(_WeightInitializer):
    """
    Registry-backed weight initializer dispatcher.

    Usage
    -----
    Register:
        @WeightInitializer.register_initializer("relu")
        def relu(array, *, fan_in, fan_out, rng): ...

    Dispatch:
        init = WeightInitializer("relu")
        init(array, fan_in=fan_in, fan_out=fan_out)
    """

    INITIALIZERS: ClassVar[Dict[str, Callable[..., np.ndarray]]] = {}

    def __init__(self, initializer_name: str) -> None:
        try:
            self._initializer: Callable[..., np.ndarray] = self.INITIALIZERS[
                initializer_name
            ]
        except KeyError as e:
            available = ", ".join(sorted(self.INITIALIZERS)) or "<none>"
            raise ValueError(
                f"Unsupported initializer name: {initializer_name!r}. "
                f"Available: {available}"
            ) from e
        self.name = initializer_name

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator to register a weight initializer under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the initializer later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.INITIALIZERS:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered initializer names (sorted)."""
        return tuple(sorted(cls.INITIALIZERS))

    @classmethod
    def get(cls, name: str) -> Callable[..., np.ndarray]:
        """Get a registered initializer callable by name."""
        return cls.INITIALIZERS[name]

    def __call__(
        self,
        array: np.ndarray,
        *,
        fan_in: Optional[float] = None,
        fan_out: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        if fan_in is None or fan_out is None:
            shape_fan_in, shape_fan_out = _calculate_fan_in_and_fan_out(
                tuple(array.shape)
            )
            fan_in = shape_fan_in if fan_in is None else fan_in
            fan_out = shape_fan_out if fan_out is None else fan_out
        if rng is None:
            rng = np.random.default_rng()
        return self._initializer(
            array,
            fan_in=max(1.0, float(fan_in)),
            fan_out=max(1.0, float(fan_out)),
            rng=rng,
        )
