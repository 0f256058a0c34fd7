"""
Layer configuration interface definitions.

This module defines the domain-level contracts for layer configurations and
their parameter initializers using structural subtyping via
`typing.Protocol`.

A layer configuration is an immutable description of a layer. It can answer
two questions without allocating anything:

- what output type does the layer produce for a given input type, and
- which named parameters (and of which shapes) does the layer own.

A parameter initializer turns that description into concrete storage.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from ._input_type import InputType


ParameterTable = Dict[str, Tuple[int, ...]]
"""Mapping from parameter name (e.g. "W", "b") to its shape."""


@runtime_checkable
class ILayerConfig(Protocol):
    """
    Domain-level layer configuration interface.

    Notes
    -----
    - Implementations are expected to be immutable values.
    - `get_output_type` and `param_table` must be pure: repeated calls with
      the same arguments return equal results.
    """

    @property
    def name(self) -> Optional[str]:
        """Optional human-readable layer name."""
        ...

    def get_output_type(self, layer_index: int, input_type: InputType) -> InputType:
        """
        Compute the output type produced for `input_type`.

        Parameters
        ----------
        layer_index : int
            Position of the layer in its network (used in error messages).
        input_type : InputType
            Type of the layer input.

        Returns
        -------
        InputType
            Type of the layer output.
        """
        ...

    def param_table(self) -> ParameterTable:
        """Return the parameter name -> shape layout of this layer."""
        ...

    def get_config(self) -> Dict[str, Any]:
        """Return a JSON-serializable configuration dictionary."""
        ...


@runtime_checkable
class IParamInitializer(Protocol):
    """
    Domain-level parameter initializer interface.

    A parameter initializer owns the mapping between a layer configuration
    and the flat parameter buffer backing that layer.
    """

    def num_params(self, conf: Any) -> int:
        """Total number of scalar parameters required by `conf`."""
        ...

    def param_shapes(self, conf: Any) -> ParameterTable:
        """Parameter name -> shape layout for `conf`."""
        ...

    def init(
        self,
        conf: Any,
        params_view: np.ndarray,
        initialize_params: bool,
    ) -> Mapping[str, np.ndarray]:
        """
        Slice `params_view` into named parameter views, optionally filling them.
        """
        ...
