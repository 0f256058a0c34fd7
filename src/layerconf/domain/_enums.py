"""
Named configuration variants used by layer configurations.

Every choice a layer configuration makes between a fixed set of behaviors
(convolution mode, activation, cuDNN algorithm preference) is modelled as an
`Enum`. Enums serialize by member name and can be parsed back from their
case-insensitive names via `parse`.

The cuDNN enumerations are carried purely as configuration: nothing in this
package selects or dispatches kernels.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ._errors import ConfigurationError

E = TypeVar("E", bound="ParsableEnum")


class ParsableEnum(Enum):
    """
    Enum base class that can be parsed from member names.
    """

    @classmethod
    def parse(cls: Type[E], value: Any) -> E:
        """
        Resolve `value` to a member of this enum.

        Parameters
        ----------
        value : Any
            Either a member of this enum, or a member name (case-insensitive).

        Returns
        -------
        ParsableEnum
            The matching member.

        Raises
        ------
        ConfigurationError
            If `value` does not name a member of this enum.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls.__members__[key]
        available = ", ".join(cls.__members__)
        raise ConfigurationError(
            f"Unknown {cls.__name__} {value!r}. Available: {available}"
        )

    @classmethod
    def parse_optional(cls: Type[E], value: Any) -> Optional[E]:
        """Like `parse`, but maps None to None."""
        return None if value is None else cls.parse(value)


class ConvolutionMode(ParsableEnum):
    """
    Policy governing how padding and output sizes are derived.

    Attributes
    ----------
    SAME : ConvolutionMode
        Padding is derived so that each output spatial dimension equals
        `stride * input_dim`; explicit padding is ignored.
    TRUNCATE : ConvolutionMode
        Explicit padding is used as given.
    STRICT : ConvolutionMode
        Explicit padding is used as given, and the configuration is rejected
        when an output dimension is not positive.
    """

    SAME = "same"
    TRUNCATE = "truncate"
    STRICT = "strict"


class Activation(ParsableEnum):
    """
    Activation function applied to a layer's output.
    """

    IDENTITY = "identity"
    RELU = "relu"
    RELU6 = "relu6"
    LEAKYRELU = "leakyrelu"
    ELU = "elu"
    SELU = "selu"
    SIGMOID = "sigmoid"
    HARDSIGMOID = "hardsigmoid"
    TANH = "tanh"
    HARDTANH = "hardtanh"
    SOFTMAX = "softmax"
    SOFTPLUS = "softplus"
    SOFTSIGN = "softsign"
    SWISH = "swish"


class AlgoMode(ParsableEnum):
    """
    cuDNN algorithm selection preference.

    `PREFER_FASTEST` lets the backend pick the fastest algorithm,
    `NO_WORKSPACE` trades speed for lower memory use, and `USER_SPECIFIED`
    requires explicit forward/backward algorithms on the configuration.
    """

    PREFER_FASTEST = "prefer_fastest"
    NO_WORKSPACE = "no_workspace"
    USER_SPECIFIED = "user_specified"


class FwdAlgo(ParsableEnum):
    IMPLICIT_GEMM = "implicit_gemm"
    IMPLICIT_PRECOMP_GEMM = "implicit_precomp_gemm"
    GEMM = "gemm"
    DIRECT = "direct"
    FFT = "fft"
    FFT_TILING = "fft_tiling"
    WINOGRAD = "winograd"
    WINOGRAD_NONFUSED = "winograd_nonfused"


class BwdFilterAlgo(ParsableEnum):
    ALGO_0 = "algo_0"
    ALGO_1 = "algo_1"
    FFT = "fft"
    ALGO_3 = "algo_3"
    WINOGRAD = "winograd"
    WINOGRAD_NONFUSED = "winograd_nonfused"
    FFT_TILING = "fft_tiling"


class BwdDataAlgo(ParsableEnum):
    ALGO_0 = "algo_0"
    ALGO_1 = "algo_1"
    FFT = "fft"
    FFT_TILING = "fft_tiling"
    WINOGRAD = "winograd"
    WINOGRAD_NONFUSED = "winograd_nonfused"
