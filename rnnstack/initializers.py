"""
Weight initializer registry

Maps scheme names to in-place ``torch.nn.init`` routines. The factory weight
is a vector, so fan-based schemes view tensors with fewer than two dimensions
as a single-row matrix before computing fan-in and fan-out.
"""

from enum import Enum
from typing import Callable, Dict, List, Union

import torch
import torch.nn as nn

from .errors import UnknownInitializer

InitFn = Callable[[torch.Tensor], torch.Tensor]


class Initializer(str, Enum):
    """Built-in weight initialization schemes"""
    XAVIER = 'Xavier'
    GLOROT_UNIFORM = 'GlorotUniform'
    GLOROT_NORMAL = 'GlorotNormal'
    HE_UNIFORM = 'HeUniform'
    HE_NORMAL = 'HeNormal'
    UNIFORM = 'Uniform'
    NORMAL = 'Normal'
    TRUNCATED_NORMAL = 'TruncatedNormal'
    ORTHOGONAL = 'Orthogonal'
    ZEROS = 'Zeros'
    ONES = 'Ones'

    def __str__(self):
        return self.value


def _as_matrix(tensor: torch.Tensor) -> torch.Tensor:
    if tensor.dim() >= 2:
        return tensor
    return tensor.reshape(1, -1)


def _fan_based(init_fn: Callable, **kwargs) -> InitFn:
    def initialize(tensor: torch.Tensor) -> torch.Tensor:
        # reshape() of a contiguous tensor is a view, so the fill lands in place
        init_fn(_as_matrix(tensor), **kwargs)
        return tensor
    initialize.__name__ = init_fn.__name__
    return initialize


_BUILTINS: Dict[str, InitFn] = {
    Initializer.XAVIER.value: _fan_based(nn.init.xavier_uniform_),
    Initializer.GLOROT_UNIFORM.value: _fan_based(nn.init.xavier_uniform_),
    Initializer.GLOROT_NORMAL.value: _fan_based(nn.init.xavier_normal_),
    Initializer.HE_UNIFORM.value: _fan_based(nn.init.kaiming_uniform_, nonlinearity='relu'),
    Initializer.HE_NORMAL.value: _fan_based(nn.init.kaiming_normal_, nonlinearity='relu'),
    Initializer.UNIFORM.value: lambda t: nn.init.uniform_(t, a=-0.05, b=0.05),
    Initializer.NORMAL.value: lambda t: nn.init.normal_(t, mean=0.0, std=0.05),
    Initializer.TRUNCATED_NORMAL.value: lambda t: nn.init.trunc_normal_(t, std=0.05, a=-0.1, b=0.1),
    Initializer.ORTHOGONAL.value: _fan_based(nn.init.orthogonal_),
    Initializer.ZEROS.value: nn.init.zeros_,
    Initializer.ONES.value: nn.init.ones_,
}

_registry: Dict[str, InitFn] = dict(_BUILTINS)


def _key(name: Union[Initializer, str]) -> str:
    if isinstance(name, Initializer):
        return name.value
    return name


def get(name: Union[Initializer, str]) -> InitFn:
    """
    Resolve an initializer name to its in-place init routine

    Args:
        name: Initializer member or exact (case-sensitive) registered name

    Returns:
        Callable filling a tensor in place and returning it

    Raises:
        UnknownInitializer: if the name is not registered
    """
    key = _key(name)
    try:
        return _registry[key]
    except (KeyError, TypeError):
        raise UnknownInitializer(name, available()) from None


def register(name: str, fn: InitFn):
    """
    Register a custom scheme under ``name``; built-in names are reserved

    ``fn`` may fill its tensor in place or return a new tensor of the same
    shape, the result is copied into the target either way.
    """
    key = _key(name)
    if key in _BUILTINS:
        raise ValueError(f"Cannot override built-in initializer: {key!r}")
    if not callable(fn):
        raise TypeError(f"Initializer {key!r} must be callable")
    _registry[key] = fn


def unregister(name: str):
    """Remove a custom scheme registered with ``register``"""
    key = _key(name)
    if key in _BUILTINS:
        raise ValueError(f"Cannot remove built-in initializer: {key!r}")
    if key not in _registry:
        raise UnknownInitializer(name, available())
    del _registry[key]


def available() -> List[str]:
    """Sorted names of every registered scheme"""
    return sorted(_registry)


def apply(init_fn: InitFn, tensor: torch.Tensor) -> torch.Tensor:
    """
    Fill ``tensor`` with ``init_fn`` and return it

    Args:
        init_fn: Routine from ``get``, in place or returning a new tensor
        tensor: Target tensor or parameter

    Raises:
        ValueError: if the routine returns a tensor of a different shape
    """
    with torch.no_grad():
        result = init_fn(tensor)
        if result is not None and result is not tensor:
            if result.shape != tensor.shape:
                raise ValueError(f"Initializer returned shape {tuple(result.shape)} "
                                 f"for a tensor of shape {tuple(tensor.shape)}")
            tensor.copy_(result)
    return tensor
