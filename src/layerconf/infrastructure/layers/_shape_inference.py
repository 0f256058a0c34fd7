"""
Layer-by-layer output type inference.

`infer_output_types` walks a stack of layer configurations, feeds each one
the previous layer's output type, and collects the results. Layers that
support it (`with_n_in_from`) have an unset input channel count filled in
from the incoming type, so a stack can be declared with only `n_out` values.
An explicit channel count that disagrees with the incoming type is an error.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from ...domain._input_type import InputType
from ...domain._layer import ILayerConfig

logger = logging.getLogger(__name__)


def infer_output_types(
    layers: Sequence[ILayerConfig], input_type: InputType
) -> Tuple[List[ILayerConfig], List[InputType]]:
    """
    Resolve the output type of every layer in `layers`.

    Parameters
    ----------
    layers : Sequence[ILayerConfig]
        Layer configurations in network order.
    input_type : InputType
        Type of the network input.

    Returns
    -------
    tuple[list[ILayerConfig], list[InputType]]
        The layers (with `n_in` filled where it was unset) and the output
        type of each layer, in order.

    Raises
    ------
    InvalidInputError, ConfigurationError
        Propagated unchanged from the first failing layer.
    """
    resolved: List[ILayerConfig] = []
    outputs: List[InputType] = []

    current = input_type
    for index, layer in enumerate(layers):
        output = layer.get_output_type(index, current)
        set_n_in = getattr(layer, "with_n_in_from", None)
        if callable(set_n_in):
            layer = set_n_in(current, layer_index=index)
        current = output
        logger.debug("layer %d (%s): output type %s", index, type(layer).__name__, current)
        resolved.append(layer)
        outputs.append(current)

    return resolved, outputs
