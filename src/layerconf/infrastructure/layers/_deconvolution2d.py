"""
2D deconvolution (transposed convolution) layer configuration.

This module defines `Deconvolution2D`, an immutable configuration value
describing a transposed convolution layer, and `deconvolution2d`, the
validating construction function used to build it.

Design overview
---------------
- `Deconvolution2D` is a frozen dataclass. Copying is ordinary value copying
  (`copy.copy`, `dataclasses.replace`); every copy is re-validated.
- Hyperparameters accept either an int or a (rows, columns) pair and are
  normalized to 2-tuples. Anything else is a `ConfigurationError` raised at
  construction time.
- Output-shape arithmetic is delegated to the convolution shape resolver, and
  parameter layout to `DeconvolutionParamInitializer`, keeping this class
  focused on validation and wiring.

Layout and semantics
--------------------
- Input/output activations: CNN input types (channels, height, width).
- Weight layout: (n_out, n_in, K_h, K_w).
- Bias: optional, one value per output filter.

Example
-------
>>> conf = deconvolution2d(kernel_size=3, stride=2, n_in=16, n_out=3)
>>> conf.get_output_type(0, InputType.convolutional(8, 8, 16))
InputType(kind=<InputTypeKind.CNN: 'cnn'>, ..., channels=3, height=17, width=17)
"""

from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ...domain._enums import (
    Activation,
    AlgoMode,
    BwdDataAlgo,
    BwdFilterAlgo,
    ConvolutionMode,
    FwdAlgo,
)
from ...domain._errors import ConfigurationError, InvalidInputError
from ...domain._input_type import InputType, InputTypeKind
from ...domain._layer import ParameterTable
from ..convolution._deconvolution_shape import _pair, get_output_type_cnn
from ..params._deconvolution_param_initializer import DeconvolutionParamInitializer
from ..utils.weight_initializer import WeightInitializer
from ._serialization import register_layer


def _non_negative_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if int(value) < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value!r}")
    return int(value)


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
    return bool(value)


def _real(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a real number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Deconvolution2DParams:
    """
    Parameters materialized for one `Deconvolution2D` layer.

    Attributes
    ----------
    conf : Deconvolution2D
        The configuration the parameters were laid out for.
    flat : np.ndarray
        The flat 1-D buffer backing every parameter.
    params : dict[str, np.ndarray]
        Named views into `flat` ("W" and, with bias, "b").
    """

    conf: "Deconvolution2D"
    flat: np.ndarray = dataclasses.field(compare=False)
    params: Dict[str, np.ndarray] = dataclasses.field(compare=False)


@register_layer()
@dataclass(frozen=True)
class Deconvolution2D:
    """
    Immutable configuration of a 2D deconvolution layer.

    Parameters
    ----------
    kernel_size : int or tuple[int, int]
        Kernel (rows, columns). Defaults to (5, 5).
    stride : int or tuple[int, int]
        Stride (rows, columns). Defaults to (1, 1).
    padding : int or tuple[int, int]
        Padding (rows, columns). Defaults to (0, 0). Ignored in Same mode.
    dilation : int or tuple[int, int]
        Dilation (rows, columns). Defaults to (1, 1).
    convolution_mode : ConvolutionMode or str
        Padding policy. Defaults to `TRUNCATE`.
    n_in : int
        Number of input channels; 0 means "not set yet".
    n_out : int
        Number of output filters; 0 means "not set yet".
    has_bias : bool
        Whether the layer owns a bias parameter. Defaults to True.
    name : Optional[str]
        Optional layer name used in error messages.
    activation : Activation or str
        Activation applied to the layer output. Defaults to `IDENTITY`.
    weight_init : str
        Name of a registered weight initializer. Defaults to "xavier".
    bias_init : float
        Initial bias value. Defaults to 0.0.
    cudnn_algo_mode : AlgoMode or str
        cuDNN algorithm preference. Defaults to `PREFER_FASTEST`.
    cudnn_fwd_algo, cudnn_bwd_filter_algo, cudnn_bwd_data_algo : optional
        Explicit cuDNN algorithms; only allowed with `USER_SPECIFIED`.

    Raises
    ------
    ConfigurationError
        If any hyperparameter is malformed.
    """

    kernel_size: Tuple[int, int] = (5, 5)
    stride: Tuple[int, int] = (1, 1)
    padding: Tuple[int, int] = (0, 0)
    dilation: Tuple[int, int] = (1, 1)
    convolution_mode: ConvolutionMode = ConvolutionMode.TRUNCATE
    n_in: int = 0
    n_out: int = 0
    has_bias: bool = True
    name: Optional[str] = None
    activation: Activation = Activation.IDENTITY
    weight_init: str = "xavier"
    bias_init: float = 0.0
    cudnn_algo_mode: AlgoMode = AlgoMode.PREFER_FASTEST
    cudnn_fwd_algo: Optional[FwdAlgo] = None
    cudnn_bwd_filter_algo: Optional[BwdFilterAlgo] = None
    cudnn_bwd_data_algo: Optional[BwdDataAlgo] = None

    def __post_init__(self) -> None:
        def _set(field_name: str, value: Any) -> None:
            object.__setattr__(self, field_name, value)

        def _fail(message: str) -> None:
            raise ConfigurationError(f"Deconvolution2D: {message}", layer_name=self.name)

        kernel = _pair(self.kernel_size, "kernel_size")
        stride = _pair(self.stride, "stride")
        padding = _pair(self.padding, "padding")
        dilation = _pair(self.dilation, "dilation")

        if min(kernel) <= 0:
            _fail(f"kernel_size entries must be positive, got {kernel}")
        if min(stride) <= 0:
            _fail(f"stride entries must be positive, got {stride}")
        if min(padding) < 0:
            _fail(f"padding entries must be non-negative, got {padding}")
        if min(dilation) <= 0:
            _fail(f"dilation entries must be positive, got {dilation}")

        _set("kernel_size", kernel)
        _set("stride", stride)
        _set("padding", padding)
        _set("dilation", dilation)

        _set("n_in", _non_negative_int(self.n_in, "n_in"))
        _set("n_out", _non_negative_int(self.n_out, "n_out"))
        _set("has_bias", _bool(self.has_bias, "has_bias"))
        _set("bias_init", _real(self.bias_init, "bias_init"))

        _set("convolution_mode", ConvolutionMode.parse(self.convolution_mode))
        _set("activation", Activation.parse(self.activation))
        _set("cudnn_algo_mode", AlgoMode.parse(self.cudnn_algo_mode))
        _set("cudnn_fwd_algo", FwdAlgo.parse_optional(self.cudnn_fwd_algo))
        _set(
            "cudnn_bwd_filter_algo",
            BwdFilterAlgo.parse_optional(self.cudnn_bwd_filter_algo),
        )
        _set("cudnn_bwd_data_algo", BwdDataAlgo.parse_optional(self.cudnn_bwd_data_algo))

        explicit_algos = (
            self.cudnn_fwd_algo,
            self.cudnn_bwd_filter_algo,
            self.cudnn_bwd_data_algo,
        )
        if self.cudnn_algo_mode is not AlgoMode.USER_SPECIFIED and any(
            algo is not None for algo in explicit_algos
        ):
            _fail(
                "explicit cuDNN algorithms require "
                f"cudnn_algo_mode=USER_SPECIFIED, got {self.cudnn_algo_mode.name}"
            )

        if self.weight_init not in WeightInitializer.available():
            _fail(
                f"unknown weight_init {self.weight_init!r}. "
                f"Available: {', '.join(WeightInitializer.available())}"
            )

    # -------------------------------------------------------------------------
    # Shape and parameter resolution
    # -------------------------------------------------------------------------
    def get_output_type(
        self, layer_index: Optional[int], input_type: Optional[InputType]
    ) -> InputType:
        """
        Compute the output type of this layer for a CNN input.

        Parameters
        ----------
        layer_index : Optional[int]
            Position of the layer in its network (for error messages).
        input_type : Optional[InputType]
            Layer input; must be tagged `CNN`.

        Returns
        -------
        InputType
            CNN output type with `n_out` channels.

        Raises
        ------
        InvalidInputError
            If `input_type` is missing or not a CNN input.
        ConfigurationError
            If `n_out` is unset or the output size is invalid.
        """
        return get_output_type_cnn(
            input_type,
            self.kernel_size,
            self.stride,
            self.padding,
            self.dilation,
            self.convolution_mode,
            self.n_out,
            layer_type=type(self).__name__,
            layer_name=self.name,
            layer_index=layer_index,
        )

    def initializer(self) -> DeconvolutionParamInitializer:
        return DeconvolutionParamInitializer.get_instance()

    def param_table(self) -> ParameterTable:
        """Return `{"W": (n_out, n_in, k_h, k_w)}` plus `{"b": (n_out,)}` with bias."""
        return self.initializer().param_shapes(self)

    def num_params(self) -> int:
        return self.initializer().num_params(self)

    def with_n_in_from(
        self,
        input_type: Optional[InputType],
        *,
        override: bool = False,
        layer_index: Optional[int] = None,
    ) -> "Deconvolution2D":
        """
        Return a copy whose `n_in` is taken from a CNN input's channel count.

        An unset `n_in` is filled in. A set `n_in` that already matches the
        input is kept as is; one that disagrees is replaced only when
        `override` is True.

        Raises
        ------
        InvalidInputError
            If `input_type` is missing or not a CNN input.
        ConfigurationError
            If `n_in` is set, differs from the input channel count, and
            `override` is False.
        """
        if input_type is None or input_type.kind is not InputTypeKind.CNN:
            raise InvalidInputError(
                type(self).__name__,
                "CNN",
                input_type,
                layer_name=self.name,
                layer_index=layer_index,
            )
        if self.n_in == input_type.channels:
            return self
        if self.n_in > 0 and not override:
            raise ConfigurationError(
                f"Deconvolution2D: nIn={self.n_in} does not match the "
                f"{input_type.channels} channels of input {input_type}",
                layer_name=self.name,
                layer_index=layer_index,
            )
        return dataclasses.replace(self, n_in=input_type.channels)

    def instantiate(
        self,
        params_view: Optional[np.ndarray] = None,
        initialize_params: bool = True,
        *,
        layer_index: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Deconvolution2DParams:
        """
        Materialize this layer's parameters.

        Parameters
        ----------
        params_view : Optional[np.ndarray]
            Flat buffer of `num_params()` elements to lay the parameters
            over. A zeroed float32 buffer is allocated when omitted.
        initialize_params : bool
            Whether to fill the parameters (bias_init / weight_init) or keep
            the buffer contents.
        layer_index : Optional[int]
            Position of the layer in its network (for error messages).
        rng : Optional[np.random.Generator]
            Random generator for weight initialization.

        Returns
        -------
        Deconvolution2DParams
            The flat buffer and the named views into it.

        Raises
        ------
        ConfigurationError
            If `n_in`/`n_out` are unset or `params_view` has the wrong size.
        """
        if self.n_in <= 0 or self.n_out <= 0:
            raise ConfigurationError(
                f"Deconvolution2D: nIn and nOut must be set to positive values "
                f"(nIn={self.n_in}, nOut={self.n_out})",
                layer_name=self.name,
                layer_index=layer_index,
            )

        initializer = self.initializer()
        if params_view is None:
            params_view = np.zeros(initializer.num_params(self), dtype=np.float32)

        params = initializer.init(self, params_view, initialize_params, rng=rng)
        return Deconvolution2DParams(conf=self, flat=params_view, params=params)

    # -------------------------------------------------------------------------
    # JSON serialization hooks
    # -------------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        def _name(value: Any) -> Optional[str]:
            return None if value is None else value.name

        return {
            "name": self.name,
            "n_in": int(self.n_in),
            "n_out": int(self.n_out),
            "kernel_size": list(self.kernel_size),
            "stride": list(self.stride),
            "padding": list(self.padding),
            "dilation": list(self.dilation),
            "convolution_mode": self.convolution_mode.name,
            "has_bias": bool(self.has_bias),
            "activation": self.activation.name,
            "weight_init": self.weight_init,
            "bias_init": float(self.bias_init),
            "cudnn_algo_mode": self.cudnn_algo_mode.name,
            "cudnn_fwd_algo": _name(self.cudnn_fwd_algo),
            "cudnn_bwd_filter_algo": _name(self.cudnn_bwd_filter_algo),
            "cudnn_bwd_data_algo": _name(self.cudnn_bwd_data_algo),
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Deconvolution2D":
        return deconvolution2d(
            kernel_size=cfg.get("kernel_size", (5, 5)),
            stride=cfg.get("stride", (1, 1)),
            padding=cfg.get("padding", (0, 0)),
            dilation=cfg.get("dilation", (1, 1)),
            convolution_mode=cfg.get("convolution_mode", "TRUNCATE"),
            n_in=cfg.get("n_in", 0),
            n_out=cfg.get("n_out", 0),
            has_bias=cfg.get("has_bias", True),
            name=cfg.get("name"),
            activation=cfg.get("activation", "IDENTITY"),
            weight_init=cfg.get("weight_init", "xavier"),
            bias_init=cfg.get("bias_init", 0.0),
            cudnn_algo_mode=cfg.get("cudnn_algo_mode", "PREFER_FASTEST"),
            cudnn_fwd_algo=cfg.get("cudnn_fwd_algo"),
            cudnn_bwd_filter_algo=cfg.get("cudnn_bwd_filter_algo"),
            cudnn_bwd_data_algo=cfg.get("cudnn_bwd_data_algo"),
        )


def deconvolution2d(
    kernel_size: int | Tuple[int, int] = (5, 5),
    stride: int | Tuple[int, int] = (1, 1),
    padding: int | Tuple[int, int] = (0, 0),
    *,
    dilation: int | Tuple[int, int] = (1, 1),
    convolution_mode: ConvolutionMode | str = ConvolutionMode.TRUNCATE,
    n_in: int = 0,
    n_out: int = 0,
    has_bias: bool = True,
    name: Optional[str] = None,
    activation: Activation | str = Activation.IDENTITY,
    weight_init: str = "xavier",
    bias_init: float = 0.0,
    cudnn_algo_mode: AlgoMode | str = AlgoMode.PREFER_FASTEST,
    cudnn_fwd_algo: Optional[FwdAlgo | str] = None,
    cudnn_bwd_filter_algo: Optional[BwdFilterAlgo | str] = None,
    cudnn_bwd_data_algo: Optional[BwdDataAlgo | str] = None,
) -> Deconvolution2D:
    """
    Build and validate a `Deconvolution2D` configuration.

    Hyperparameters accept an int (expanded to `(v, v)`) or a
    (rows, columns) sequence; enum-valued arguments also accept their
    case-insensitive member names.

    Returns
    -------
    Deconvolution2D
        The validated, immutable configuration.

    Raises
    ------
    ConfigurationError
        If any argument is malformed (e.g. a kernel size with 3 entries).
    """
    return Deconvolution2D(
        kernel_size=kernel_size,
        stride=stride,
        padding=padding,
        dilation=dilation,
        convolution_mode=convolution_mode,
        n_in=n_in,
        n_out=n_out,
        has_bias=has_bias,
        name=name,
        activation=activation,
        weight_init=weight_init,
        bias_init=bias_init,
        cudnn_algo_mode=cudnn_algo_mode,
        cudnn_fwd_algo=cudnn_fwd_algo,
        cudnn_bwd_filter_algo=cudnn_bwd_filter_algo,
        cudnn_bwd_data_algo=cudnn_bwd_data_algo,
    )
