"""
layerconf public API.

Declarative layer configurations with shape and parameter-layout resolution
for a 2D deconvolution (transposed convolution) layer.

Importing this package registers the built-in weight initializers and the
serializable layer types.
"""

from .domain._enums import (
    Activation,
    AlgoMode,
    BwdDataAlgo,
    BwdFilterAlgo,
    ConvolutionMode,
    FwdAlgo,
)
from .domain._errors import ConfigurationError, InvalidInputError, LayerConfError
from .domain._input_type import InputType, InputTypeKind
from .domain._layer import ILayerConfig, IParamInitializer, ParameterTable
from .infrastructure.convolution._deconvolution_shape import (
    deconvolution_output_size,
    effective_kernel_size,
    get_output_type_cnn,
    same_mode_padding,
)
from .infrastructure.layers._deconvolution2d import (
    Deconvolution2D,
    Deconvolution2DParams,
    deconvolution2d,
)
from .infrastructure.layers._serialization import (
    layer_from_config,
    layer_from_json,
    layer_to_config,
    layer_to_json,
    register_layer,
)
from .infrastructure.layers._shape_inference import infer_output_types
from .infrastructure.params._deconvolution_param_initializer import (
    DeconvolutionParamInitializer,
)
from .infrastructure.utils.weight_initializer import WeightInitializer

__all__ = [
    Activation.__name__,
    AlgoMode.__name__,
    BwdDataAlgo.__name__,
    BwdFilterAlgo.__name__,
    ConvolutionMode.__name__,
    FwdAlgo.__name__,
    ConfigurationError.__name__,
    InvalidInputError.__name__,
    LayerConfError.__name__,
    InputType.__name__,
    InputTypeKind.__name__,
    ILayerConfig.__name__,
    IParamInitializer.__name__,
    "ParameterTable",
    deconvolution_output_size.__name__,
    effective_kernel_size.__name__,
    get_output_type_cnn.__name__,
    same_mode_padding.__name__,
    Deconvolution2D.__name__,
    Deconvolution2DParams.__name__,
    deconvolution2d.__name__,
    layer_from_config.__name__,
    layer_from_json.__name__,
    layer_to_config.__name__,
    layer_to_json.__name__,
    register_layer.__name__,
    infer_output_types.__name__,
    DeconvolutionParamInitializer.__name__,
    WeightInitializer.__name__,
]
