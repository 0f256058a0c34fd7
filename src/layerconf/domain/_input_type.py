"""
Input type descriptors used for layer shape inference.

An `InputType` describes the per-example shape of the activations flowing
into a layer, tagged with its category:

- `FF`       : feed-forward vectors, shape (size,)
- `RNN`      : recurrent sequences, shape (size, time_series_length)
- `CNN`      : images, shape (channels, height, width); rank 4 once batched
- `CNN_FLAT` : images flattened to vectors, shape (channels * height * width,)

Layers inspect the tag to reject inputs they cannot consume, and return a new
`InputType` describing their own output.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ._errors import ConfigurationError


class InputTypeKind(Enum):
    """
    Category tag of an `InputType`.
    """

    FF = "ff"
    RNN = "rnn"
    CNN = "cnn"
    CNN_FLAT = "cnn_flat"


def _positive_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if int(value) <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class InputType:
    """
    Immutable, tagged description of a layer input.

    Instances should be created through the factory classmethods, which
    validate dimensions. Fields that do not apply to a given kind are 0.

    Attributes
    ----------
    kind : InputTypeKind
        Category tag.
    size : int
        Vector size (FF, RNN).
    time_series_length : int
        Sequence length (RNN); 0 when variable/unknown.
    channels : int
        Channel count (CNN, CNN_FLAT).
    height : int
        Image height (CNN, CNN_FLAT).
    width : int
        Image width (CNN, CNN_FLAT).
    """

    kind: InputTypeKind
    size: int = 0
    time_series_length: int = 0
    channels: int = 0
    height: int = 0
    width: int = 0

    @classmethod
    def feed_forward(cls, size: int) -> "InputType":
        return cls(InputTypeKind.FF, size=_positive_int(size, "size"))

    @classmethod
    def recurrent(cls, size: int, time_series_length: int = 0) -> "InputType":
        """
        Create a recurrent input type.

        A `time_series_length` of 0 denotes a variable-length sequence.
        """
        length = int(time_series_length)
        if length < 0:
            raise ConfigurationError(
                f"time_series_length must be non-negative, got {time_series_length!r}"
            )
        return cls(
            InputTypeKind.RNN,
            size=_positive_int(size, "size"),
            time_series_length=length,
        )

    @classmethod
    def convolutional(cls, height: int, width: int, channels: int) -> "InputType":
        """
        Create a CNN (image) input type.

        Parameters
        ----------
        height : int
            Image height in pixels.
        width : int
            Image width in pixels.
        channels : int
            Number of channels (depth).

        Returns
        -------
        InputType
            A `CNN`-tagged input type.

        Raises
        ------
        ConfigurationError
            If any dimension is not a positive integer.
        """
        return cls(
            InputTypeKind.CNN,
            channels=_positive_int(channels, "channels"),
            height=_positive_int(height, "height"),
            width=_positive_int(width, "width"),
        )

    @classmethod
    def convolutional_flat(cls, height: int, width: int, channels: int) -> "InputType":
        return cls(
            InputTypeKind.CNN_FLAT,
            channels=_positive_int(channels, "channels"),
            height=_positive_int(height, "height"),
            width=_positive_int(width, "width"),
        )

    def shape(self) -> Tuple[int, ...]:
        """
        Return the per-example activation shape (no batch dimension).
        """
        if self.kind is InputTypeKind.FF:
            return (self.size,)
        if self.kind is InputTypeKind.RNN:
            return (self.size, self.time_series_length)
        if self.kind is InputTypeKind.CNN:
            return (self.channels, self.height, self.width)
        return (self.channels * self.height * self.width,)

    def __str__(self) -> str:
        if self.kind is InputTypeKind.FF:
            return f"InputTypeFeedForward(size={self.size})"
        if self.kind is InputTypeKind.RNN:
            return (
                f"InputTypeRecurrent(size={self.size}, "
                f"time_series_length={self.time_series_length})"
            )
        name = "Convolutional" if self.kind is InputTypeKind.CNN else "ConvolutionalFlat"
        return (
            f"InputType{name}(h={self.height},w={self.width},c={self.channels})"
        )
