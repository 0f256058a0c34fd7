from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Type

from ...domain._errors import ConfigurationError

_LAYER_REGISTRY: dict[str, Type[Any]] = {}


def register_layer(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a layer configuration class for JSON deserialization.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _LAYER_REGISTRY[key] = cls
        cls._layer_type = key
        return cls

    return deco


def layer_to_config(layer: Any) -> dict[str, Any]:
    """
    Convert a layer configuration into a JSON-serializable node.

    Node format
    -----------
    {
      "type": "Deconvolution2D",
      "config": {...}
    }
    """
    get_cfg = getattr(layer, "get_config", None)
    cfg = get_cfg() if callable(get_cfg) else {}
    type_name = vars(type(layer)).get("_layer_type", type(layer).__name__)
    return {"type": type_name, "config": cfg}


def layer_from_config(node: Dict[str, Any]) -> Any:
    """
    Rebuild a layer configuration from a node produced by `layer_to_config`.
    """
    type_name = str(node["type"])
    if type_name not in _LAYER_REGISTRY:
        raise ConfigurationError(
            f"Unknown layer type '{type_name}'. Register it via @register_layer."
        )

    cls = _LAYER_REGISTRY[type_name]
    cfg = node.get("config", {}) or {}

    from_cfg = getattr(cls, "from_config", None)
    if callable(from_cfg):
        return from_cfg(cfg)
    return cls(**cfg)


def layer_to_json(layer: Any, *, indent: Optional[int] = None) -> str:
    return json.dumps(layer_to_config(layer), indent=indent)


def layer_from_json(text: str) -> Any:
    return layer_from_config(json.loads(text))
