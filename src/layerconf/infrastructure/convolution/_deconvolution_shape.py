"""
Output-shape resolution for 2D transposed convolutions (deconvolutions).

This module contains the pure shape arithmetic used by deconvolution layer
configurations. Nothing here allocates arrays or keeps state: every function
is a deterministic function of its arguments and is safe to call from any
thread.

Shape semantics
---------------
For each spatial dimension (height, width) independently:

    effective_kernel = dilation * (kernel - 1) + 1

    Truncate / Strict:
        out = stride * (in - 1) + effective_kernel - 2 * padding

    Same:
        out = stride * in

The output channel count is the layer's number of filters (`n_out`).

Convolution modes
-----------------
- `TRUNCATE` uses the explicit padding as given.
- `SAME` ignores the explicit padding; `same_mode_padding` reports the
  padding that produces `stride * in`.
- `STRICT` uses the explicit padding like `TRUNCATE`. With integer
  hyperparameters the transposed size always maps back onto the input
  exactly, so the only rejection is a non-positive output, reported as a
  Strict-mode error.

All modes reject a non-positive output size.
"""

from __future__ import annotations

import logging
import numbers
import warnings
from typing import Any, Optional, Tuple

from ...domain._enums import ConvolutionMode
from ...domain._errors import ConfigurationError, InvalidInputError
from ...domain._input_type import InputType, InputTypeKind

logger = logging.getLogger(__name__)


def _pair(v: Any, name: str = "value") -> Tuple[int, int]:
    """
    Normalize an integer or (rows, columns) sequence into a 2-tuple.

    Parameters
    ----------
    v : int or sequence of int
        A scalar value (expanded to `(v, v)`) or a 2-element sequence.
    name : str
        Field name used in error messages.

    Returns
    -------
    tuple[int, int]
        A normalized (height, width) pair.

    Raises
    ------
    ConfigurationError
        If `v` is neither an integer nor a sequence of exactly two integers.
    """
    if isinstance(v, numbers.Integral) and not isinstance(v, bool):
        return (int(v), int(v))
    try:
        items = tuple(v)
    except TypeError:
        raise ConfigurationError(
            f"{name} should be an integer or a (rows, columns) pair, got {v!r}"
        ) from None
    if len(items) != 2:
        raise ConfigurationError(
            f"{name} should include values for rows and columns "
            f"(a length-2 sequence), got {len(items)} value(s): {v!r}"
        )
    for item in items:
        if isinstance(item, bool) or not isinstance(item, numbers.Integral):
            raise ConfigurationError(f"{name} entries must be integers, got {v!r}")
    return (int(items[0]), int(items[1]))


def effective_kernel_size(
    kernel_size: Tuple[int, int], dilation: Tuple[int, int]
) -> Tuple[int, int]:
    """
    Return the dilated kernel footprint `dilation * (kernel - 1) + 1` per dim.
    """
    k_h, k_w = kernel_size
    d_h, d_w = dilation
    return (d_h * (k_h - 1) + 1, d_w * (k_w - 1) + 1)


def _output_dim(
    dim_name: str,
    in_dim: int,
    kernel: int,
    stride: int,
    padding: int,
    dilation: int,
    mode: ConvolutionMode,
    *,
    layer_name: Optional[str],
    layer_index: Optional[int],
) -> int:
    eff_k = dilation * (kernel - 1) + 1

    if mode is ConvolutionMode.SAME:
        return stride * in_dim

    out_dim = stride * (in_dim - 1) + eff_k - 2 * padding

    if mode is ConvolutionMode.STRICT:
        if out_dim <= 0:
            raise ConfigurationError(
                f"Invalid output size for {dim_name} in Strict convolution mode: "
                f"non-positive output size {dim_name}_out={out_dim} "
                f"(input {dim_name}={in_dim}, kernel={kernel}, stride={stride}, "
                f"padding={padding}, dilation={dilation}). "
                "Use ConvolutionMode.TRUNCATE or ConvolutionMode.SAME, or adjust "
                "kernel/stride/padding",
                layer_name=layer_name,
                layer_index=layer_index,
            )
        return out_dim

    if out_dim <= 0:
        raise ConfigurationError(
            f"Invalid output size: {dim_name}_out={out_dim} "
            f"(input {dim_name}={in_dim}, kernel={kernel}, stride={stride}, "
            f"padding={padding}, dilation={dilation})",
            layer_name=layer_name,
            layer_index=layer_index,
        )
    return out_dim


def deconvolution_output_size(
    in_hw: Tuple[int, int],
    kernel_size: Tuple[int, int],
    stride: Tuple[int, int],
    padding: Tuple[int, int],
    dilation: Tuple[int, int],
    mode: ConvolutionMode,
    *,
    layer_name: Optional[str] = None,
    layer_index: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Compute the spatial output size of a 2D transposed convolution.

    Parameters
    ----------
    in_hw : tuple[int, int]
        Input (height, width).
    kernel_size, stride, padding, dilation : tuple[int, int]
        Layer hyperparameters as (rows, columns) pairs.
    mode : ConvolutionMode
        Padding policy.
    layer_name, layer_index : optional
        Included in error messages.

    Returns
    -------
    tuple[int, int]
        Output (height, width).

    Raises
    ------
    ConfigurationError
        If the output size is not a positive integer under `mode`.
    """
    h_in, w_in = in_hw
    h_out = _output_dim(
        "height",
        int(h_in),
        kernel_size[0],
        stride[0],
        padding[0],
        dilation[0],
        mode,
        layer_name=layer_name,
        layer_index=layer_index,
    )
    w_out = _output_dim(
        "width",
        int(w_in),
        kernel_size[1],
        stride[1],
        padding[1],
        dilation[1],
        mode,
        layer_name=layer_name,
        layer_index=layer_index,
    )
    logger.debug(
        "deconvolution output size: in=(%d, %d) kernel=%s stride=%s padding=%s "
        "dilation=%s mode=%s -> out=(%d, %d)",
        h_in,
        w_in,
        kernel_size,
        stride,
        padding,
        dilation,
        mode.name,
        h_out,
        w_out,
    )
    return (h_out, w_out)


def same_mode_padding(
    kernel_size: Tuple[int, int],
    stride: Tuple[int, int],
    dilation: Tuple[int, int] = (1, 1),
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Compute the padding that makes a transposed convolution output
    `stride * in` in each spatial dimension.

    A transposed convolution with total cropping `P` (top + bottom) produces
    `stride * (in - 1) + effective_kernel - P` rows, so `P` must equal
    `effective_kernel - stride`, independently of the input size. The total is
    split with the extra row (if any) on the bottom/right side.

    Parameters
    ----------
    kernel_size, stride, dilation : tuple[int, int]
        Layer hyperparameters as (rows, columns) pairs.

    Returns
    -------
    tuple[tuple[int, int], tuple[int, int]]
        `((top, bottom), (left, right))`. When the effective kernel is
        smaller than the stride the deficit is reported as a negative
        `bottom`/`right` value: that many rows/columns must be appended to
        the output (equivalent to an output padding).

    Warns
    -----
    UserWarning
        If any dilation is greater than 1; the padding derivation for dilated
        transposed kernels has not been confirmed against a reference
        implementation.
    """
    if dilation[0] > 1 or dilation[1] > 1:
        warnings.warn(
            "Same-mode padding for dilated transposed convolutions "
            f"(dilation={tuple(dilation)}) is unconfirmed; verify the result "
            "numerically before relying on it.",
            UserWarning,
            stacklevel=2,
        )

    pads = []
    for k, s in zip(effective_kernel_size(kernel_size, dilation), stride):
        total = k - s
        if total >= 0:
            before = total // 2
            pads.append((before, total - before))
        else:
            pads.append((0, total))
    return (pads[0], pads[1])


def get_output_type_cnn(
    input_type: Optional[InputType],
    kernel_size: Tuple[int, int],
    stride: Tuple[int, int],
    padding: Tuple[int, int],
    dilation: Tuple[int, int],
    mode: ConvolutionMode,
    n_out: int,
    *,
    layer_type: str,
    layer_name: Optional[str] = None,
    layer_index: Optional[int] = None,
) -> InputType:
    """
    Resolve the CNN output type of a transposed convolution layer.

    Parameters
    ----------
    input_type : Optional[InputType]
        Layer input; must be tagged `CNN`.
    kernel_size, stride, padding, dilation : tuple[int, int]
        Layer hyperparameters as (rows, columns) pairs.
    mode : ConvolutionMode
        Padding policy.
    n_out : int
        Number of output filters (the output channel count).
    layer_type : str
        Layer class name used in error messages.
    layer_name, layer_index : optional
        Included in error messages.

    Returns
    -------
    InputType
        `InputType.convolutional(h_out, w_out, n_out)`.

    Raises
    ------
    InvalidInputError
        If `input_type` is None or not tagged `CNN`.
    ConfigurationError
        If `n_out` is unset or the output size is invalid under `mode`.
    """
    if input_type is None or input_type.kind is not InputTypeKind.CNN:
        raise InvalidInputError(
            layer_type,
            "CNN",
            input_type,
            layer_name=layer_name,
            layer_index=layer_index,
        )
    if n_out <= 0:
        raise ConfigurationError(
            f"{layer_type}: nOut must be set to a positive value, got {n_out}",
            layer_name=layer_name,
            layer_index=layer_index,
        )

    h_out, w_out = deconvolution_output_size(
        (input_type.height, input_type.width),
        kernel_size,
        stride,
        padding,
        dilation,
        mode,
        layer_name=layer_name,
        layer_index=layer_index,
    )
    return InputType.convolutional(h_out, w_out, n_out)
