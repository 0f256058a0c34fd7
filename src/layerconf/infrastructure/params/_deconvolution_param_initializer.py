"""
Parameter layout and initialization for 2D deconvolution layers.

This module defines `DeconvolutionParamInitializer`, which maps a
`Deconvolution2D` configuration onto named parameters:

- ``W`` : weights, shape (n_out, n_in, k_h, k_w)
- ``b`` : bias, shape (n_out,), present only when bias is enabled

Flat buffer layout
------------------
A layer's parameters live in one contiguous 1-D buffer. The bias occupies
the first `n_out` elements (if present), followed by the weights in C order.
`init` returns *views* into that buffer, so writes through the returned
arrays are visible in the buffer and vice versa.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

import numpy as np

from ...domain._errors import ConfigurationError
from ...domain._layer import ParameterTable
from ...domain.utils._weight_initialization import (
    _calculate_deconvolution_fan_in_and_fan_out,
)
from ..utils.weight_initializer import WeightInitializer

if TYPE_CHECKING:
    from ..layers._deconvolution2d import Deconvolution2D

logger = logging.getLogger(__name__)

WEIGHT_KEY = "W"
BIAS_KEY = "b"


def _require_channels(conf: "Deconvolution2D") -> None:
    if conf.n_in <= 0 or conf.n_out <= 0:
        raise ConfigurationError(
            f"Deconvolution2D: nIn and nOut must be set to positive values "
            f"(nIn={conf.n_in}, nOut={conf.n_out})",
            layer_name=conf.name,
        )


class DeconvolutionParamInitializer:
    """
    Parameter initializer for `Deconvolution2D` layers.

    The initializer is stateless; use `get_instance()` to obtain the shared
    instance.
    """

    _INSTANCE: Optional["DeconvolutionParamInitializer"] = None

    @classmethod
    def get_instance(cls) -> "DeconvolutionParamInitializer":
        if cls._INSTANCE is None:
            cls._INSTANCE = cls()
        return cls._INSTANCE

    def weight_keys(self, conf: "Deconvolution2D") -> List[str]:
        return [WEIGHT_KEY]

    def bias_keys(self, conf: "Deconvolution2D") -> List[str]:
        return [BIAS_KEY] if conf.has_bias else []

    def param_shapes(self, conf: "Deconvolution2D") -> ParameterTable:
        """
        Return the parameter name -> shape layout of `conf`.

        Parameters
        ----------
        conf : Deconvolution2D
            Layer configuration with `n_in` and `n_out` set.

        Returns
        -------
        ParameterTable
            `{"W": (n_out, n_in, k_h, k_w)}`, plus `{"b": (n_out,)}` when bias
            is enabled.

        Raises
        ------
        ConfigurationError
            If `n_in` or `n_out` is unset.
        """
        _require_channels(conf)
        k_h, k_w = conf.kernel_size
        table: ParameterTable = {WEIGHT_KEY: (conf.n_out, conf.n_in, k_h, k_w)}
        if conf.has_bias:
            table[BIAS_KEY] = (conf.n_out,)
        return table

    def num_params(self, conf: "Deconvolution2D") -> int:
        """Total number of scalar parameters of `conf`."""
        return sum(int(np.prod(shape)) for shape in self.param_shapes(conf).values())

    def init(
        self,
        conf: "Deconvolution2D",
        params_view: np.ndarray,
        initialize_params: bool,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> Dict[str, np.ndarray]:
        """
        Slice a flat parameter buffer into named views.

        Parameters
        ----------
        conf : Deconvolution2D
            Layer configuration.
        params_view : np.ndarray
            1-D buffer of exactly `num_params(conf)` elements.
        initialize_params : bool
            If True, fill the bias with `conf.bias_init` and the weights with
            the initializer named by `conf.weight_init`. If False, the views
            keep the buffer's current contents (e.g. when loading a model).
        rng : Optional[np.random.Generator]
            Random generator for the weight initializer.

        Returns
        -------
        dict[str, np.ndarray]
            `{"W": weight_view}` plus `{"b": bias_view}` when bias is enabled.

        Raises
        ------
        ConfigurationError
            If channels are unset or `params_view` has the wrong shape or dtype.
        """
        shapes = self.param_shapes(conf)
        expected = sum(int(np.prod(shape)) for shape in shapes.values())

        if params_view.ndim != 1 or params_view.shape[0] != expected:
            raise ConfigurationError(
                f"Deconvolution2D: expected a 1-D parameter view of length "
                f"{expected}, got shape {params_view.shape}",
                layer_name=conf.name,
            )
        if not params_view.flags["C_CONTIGUOUS"]:
            raise ConfigurationError(
                "Deconvolution2D: parameter view must be C-contiguous",
                layer_name=conf.name,
            )
        if not np.issubdtype(params_view.dtype, np.floating):
            raise ConfigurationError(
                f"Deconvolution2D: parameter view must have a floating dtype, "
                f"got {params_view.dtype}",
                layer_name=conf.name,
            )

        params: Dict[str, np.ndarray] = {}
        offset = 0
        if conf.has_bias:
            n_bias = conf.n_out
            params[BIAS_KEY] = params_view[offset : offset + n_bias]
            offset += n_bias

        weight_shape = shapes[WEIGHT_KEY]
        params[WEIGHT_KEY] = params_view[offset:].reshape(weight_shape, order="C")

        if initialize_params:
            if BIAS_KEY in params:
                params[BIAS_KEY][...] = conf.bias_init
            fan_in, fan_out = _calculate_deconvolution_fan_in_and_fan_out(
                conf.n_in, conf.n_out, conf.kernel_size, conf.stride
            )
            WeightInitializer(conf.weight_init)(
                params[WEIGHT_KEY], fan_in=fan_in, fan_out=fan_out, rng=rng
            )
            logger.debug(
                "initialized Deconvolution2D params with %r (fan_in=%s, fan_out=%s)",
                conf.weight_init,
                fan_in,
                fan_out,
            )

        # Keep "W" first for callers that iterate the table.
        return {key: params[key] for key in (WEIGHT_KEY, BIAS_KEY) if key in params}
