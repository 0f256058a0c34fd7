"""
Configuration- and input-related exceptions for layerconf.

This module defines the errors raised while building layer configurations
and while resolving their output shapes and parameter layouts. Both error
kinds signal a model-definition mistake rather than a transient condition:
they are raised eagerly, at the first point the malformed value is used,
and are never retried or silently coerced.

Both exceptions derive from `ValueError` (via `LayerConfError`) so callers
that already guard configuration code with `except ValueError` keep working.
"""

from __future__ import annotations

from typing import Optional


def _layer_context(layer_name: Optional[str], layer_index: Optional[int]) -> str:
    """
    Format an optional " (layer name=..., layer index=...)" suffix.
    """
    parts = []
    if layer_name is not None:
        parts.append(f'layer name="{layer_name}"')
    if layer_index is not None:
        parts.append(f"layer index={layer_index}")
    return f" ({', '.join(parts)})" if parts else ""


class LayerConfError(ValueError):
    """
    Common base class for all layerconf errors.
    """


class ConfigurationError(LayerConfError):
    """
    Raised when a layer configuration is malformed.

    Typical causes are kernel/stride/padding/dilation values that are not
    (rows, columns) pairs, unset input or output channel counts, an output
    size that is not a positive integer under the current convolution mode,
    or an unknown enumeration / initializer name.

    Attributes
    ----------
    layer_name : Optional[str]
        Name of the offending layer, when known.
    layer_index : Optional[int]
        Index of the offending layer inside a network, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        layer_name: Optional[str] = None,
        layer_index: Optional[int] = None,
    ) -> None:
        """
        Initialize the ConfigurationError.

        Parameters
        ----------
        message : str
            Human-readable description of the problem.
        layer_name : Optional[str]
            Name of the layer being configured, if any.
        layer_index : Optional[int]
            Position of the layer in its network, if any.
        """
        super().__init__(f"{message}{_layer_context(layer_name, layer_index)}")
        self.layer_name = layer_name
        self.layer_index = layer_index


class InvalidInputError(LayerConfError):
    """
    Raised when a layer receives an input type of the wrong category.

    For example, feeding a feed-forward input into a layer that only accepts
    CNN (image) inputs.

    Attributes
    ----------
    layer_type : str
        Name of the layer class that rejected the input.
    expected : str
        Name of the expected input category (e.g., "CNN").
    got : object
        The input type that was actually supplied (may be None).
    """

    def __init__(
        self,
        layer_type: str,
        expected: str,
        got: object,
        *,
        layer_name: Optional[str] = None,
        layer_index: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Invalid input for {layer_type} layer"
            f"{_layer_context(layer_name, layer_index)}: "
            f"Expected {expected} input, got {got}"
        )
        self.layer_type = layer_type
        self.expected = expected
        self.got = got
        self.layer_name = layer_name
        self.layer_index = layer_index
