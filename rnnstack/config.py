"""
Configuration objects for recurrent layer construction
"""

from dataclasses import dataclass
from typing import Union

import torch

from .device_utils import get_best_device
from .initializers import Initializer

VARIANTS = ('lstm', 'gru', 'rnnReLU', 'rnnTanh')


@dataclass
class BuildContext:
    """
    Compute context that layer parameters are allocated in.

    Passed explicitly to every factory call instead of being read from
    process-wide state. ``device`` accepts anything ``get_best_device``
    understands ('auto', 'cpu', 'cuda', 'mps') or a ``torch.device``.
    """
    device: Union[str, torch.device] = 'auto'
    dtype: torch.dtype = torch.float32

    def __post_init__(self):
        if isinstance(self.device, torch.device):
            return
        if self.device in ('auto', 'cpu', 'cuda', 'mps'):
            self.device = get_best_device(self.device)
        else:
            # Indexed devices such as 'cuda:1'
            self.device = torch.device(self.device)

    @property
    def factory_kwargs(self) -> dict:
        return {'device': self.device, 'dtype': self.dtype}


def default_context() -> BuildContext:
    return BuildContext()


@dataclass(frozen=True)
class LayerSpec:
    """Arguments of one layer construction request"""
    input_dim: int
    hidden_size: int
    num_layers: int
    bidirectional: bool = False
    weight_initializer: Union[Initializer, str] = Initializer.XAVIER
    variant: str = 'lstm'

    def __post_init__(self):
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown recurrent variant: {self.variant!r} "
                             f"(expected one of {', '.join(VARIANTS)})")

    @property
    def num_directions(self) -> int:
        return 2 if self.bidirectional else 1

    @property
    def output_size(self) -> int:
        return self.hidden_size * self.num_directions
