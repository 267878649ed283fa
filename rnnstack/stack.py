"""
Stacked recurrent primitive built on torch.nn recurrent modules
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import torch
import torch.nn as nn
from torch.nn.utils.rnn import PackedSequence

from . import initializers
from .config import BuildContext
from .initializers import InitFn

Hidden = Union[torch.Tensor, Tuple[torch.Tensor, torch.Tensor]]

# variant tag -> (module class, extra constructor kwargs)
_RECURRENT_OPS = {
    'lstm': (nn.LSTM, {}),
    'gru': (nn.GRU, {}),
    'rnnReLU': (nn.RNN, {'nonlinearity': 'relu'}),
    'rnnTanh': (nn.RNN, {'nonlinearity': 'tanh'}),
}


@dataclass(frozen=True)
class InputVariable:
    """Placeholder describing the per-step features a stack will be fed"""
    shape: Tuple[int, ...]
    dtype: torch.dtype = torch.float32
    device: torch.device = torch.device('cpu')

    @property
    def features(self) -> int:
        return self.shape[-1]


def input_variable(shape, context: BuildContext) -> InputVariable:
    return InputVariable(tuple(shape), context.dtype, context.device)


class StackedRNN(nn.Module):
    """
    Multi-layer recurrent stack produced by ``optimized_rnn_stack``.

    Features:
    - LSTM, GRU, and ReLU/Tanh vanilla RNN variants
    - Bidirectional support
    - Per-feature input weight of shape [input_dim]
    - Packed sequence support
    """

    def __init__(self, operand: InputVariable, weights: nn.Parameter,
                 hidden_size: int, num_layers: int, bidirectional: bool = False,
                 recurrent_op: str = 'lstm', batch_first: bool = True,
                 weight_init: Optional[InitFn] = None):
        super().__init__()
        if recurrent_op not in _RECURRENT_OPS:
            raise ValueError(f"Unsupported recurrent op: {recurrent_op!r} "
                             f"(expected one of {', '.join(_RECURRENT_OPS)})")

        self.operand = operand
        self.mode = recurrent_op
        self.batch_first = batch_first
        self.weights = weights

        rnn_cls, extra = _RECURRENT_OPS[recurrent_op]
        self.rnn = rnn_cls(operand.features, hidden_size, num_layers,
                           bidirectional=bidirectional, batch_first=batch_first,
                           device=operand.device, dtype=operand.dtype, **extra)

        if weight_init is not None:
            self._init_weights(weight_init)

    def _init_weights(self, weight_init: InitFn):
        """Apply the named scheme to recurrent weights, zero the biases"""
        for name, param in self.rnn.named_parameters():
            if 'weight' in name:
                initializers.apply(weight_init, param)
            elif 'bias' in name:
                nn.init.zeros_(param)

    @property
    def hidden_size(self) -> int:
        return self.rnn.hidden_size

    @property
    def num_layers(self) -> int:
        return self.rnn.num_layers

    @property
    def bidirectional(self) -> bool:
        return self.rnn.bidirectional

    @property
    def num_directions(self) -> int:
        return 2 if self.bidirectional else 1

    @property
    def output_size(self) -> int:
        return self.hidden_size * self.num_directions

    def _check_features(self, x: torch.Tensor):
        if x.size(-1) != self.operand.features:
            raise ValueError(f"Expected {self.operand.features} input features, "
                             f"got {x.size(-1)}")

    def forward(self, x: Union[torch.Tensor, PackedSequence],
                hidden: Optional[Hidden] = None):
        """
        Forward pass through the stack

        Args:
            x: Input tensor (batch, seq, input_dim) when batch_first, or PackedSequence
            hidden: Initial hidden state, (h_0, c_0) for LSTM

        Returns:
            output, hidden as returned by the underlying torch module
        """
        if isinstance(x, PackedSequence):
            self._check_features(x.data)
            x = PackedSequence(x.data * self.weights, x.batch_sizes,
                               x.sorted_indices, x.unsorted_indices)
        else:
            self._check_features(x)
            x = x * self.weights

        return self.rnn(x, hidden)

    def extra_repr(self) -> str:
        return f"mode={self.mode}, input_dim={self.operand.features}"


def optimized_rnn_stack(operand: InputVariable, weights: nn.Parameter,
                        hidden_size: int, num_layers: int,
                        bidirectional: bool = False, recurrent_op: str = 'lstm',
                        batch_first: bool = True,
                        weight_init: Optional[InitFn] = None) -> StackedRNN:
    """
    Build a stacked recurrent layer

    Args:
        operand: Input placeholder, its last dimension is the feature size
        weights: Input weight parameter of shape [input_dim]
        hidden_size: Hidden units per direction
        num_layers: Number of stacked layers
        bidirectional: Run a backward pass alongside the forward pass
        recurrent_op: One of 'lstm', 'gru', 'rnnReLU', 'rnnTanh'
        weight_init: Scheme for the recurrent weights, torch defaults if None

    Returns:
        StackedRNN: a new module on the operand's device
    """
    return StackedRNN(operand, weights, hidden_size, num_layers,
                      bidirectional=bidirectional, recurrent_op=recurrent_op,
                      batch_first=batch_first, weight_init=weight_init)
