"""
Weight initialization public API.

This module aggregates all supported weight initialization strategies
(constant, uniform, Xavier, Kaiming/ReLU and LeCun) and registers them into
the global `WeightInitializer` registry via import side effects.

Importing this module ensures that all built-in initializers are available
for lookup and dispatch through `WeightInitializer`.

Exports
-------
- WeightInitializer:
    The registry-backed initializer dispatcher used to apply a selected
    initialization strategy to parameter arrays.
"""

from ._constants import *
from ._uniform import *
from ._xavier import *
from ._kaiming import *
from ._base import WeightInitializer

__all__ = [
    WeightInitializer.__name__,
]
