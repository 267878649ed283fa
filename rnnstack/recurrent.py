"""
Recurrent layer factories

A recurrent neural network keeps an internal state across the steps of a
sequence, which lets it model temporal behaviour over inputs of arbitrary
length. These factories assemble stacked LSTM, GRU and plain RNN layers from a
few hyperparameters and hand the work to ``optimized_rnn_stack``.
"""

import logging
from enum import Enum
from typing import Optional, Union

import torch
import torch.nn as nn

from . import initializers
from .config import BuildContext, LayerSpec, default_context
from .errors import UnsupportedActivation
from .initializers import Initializer
from .stack import StackedRNN, input_variable, optimized_rnn_stack

logger = logging.getLogger(__name__)


class Activation(str, Enum):
    """Activations supported by the plain RNN variant"""
    RELU = 'ReLU'
    TANH = 'Tanh'

    def __str__(self):
        return self.value


_ACTIVATION_VARIANTS = {
    Activation.RELU: 'rnnReLU',
    Activation.TANH: 'rnnTanh',
}


def LSTM(input_dim: int, hidden_size: int, num_layers: int,
         bidirectional: bool = False,
         weight_initializer: Union[Initializer, str] = Initializer.XAVIER,
         context: Optional[BuildContext] = None) -> StackedRNN:
    """
    Long short-term memory stack, remembers values over arbitrary intervals

    Args:
        input_dim: Number of input features
        hidden_size: Hidden units per direction
        num_layers: Number of stacked layers
        bidirectional: If True, build a bidirectional stack
        weight_initializer: Scheme for the input weight and the recurrent weights
        context: Device and dtype to allocate on, default_context() if None
    """
    spec = LayerSpec(input_dim, hidden_size, num_layers, bidirectional,
                     weight_initializer, 'lstm')
    return _build_recurrent_layer(spec, context)


def GRU(input_dim: int, hidden_size: int, num_layers: int,
        bidirectional: bool = False,
        weight_initializer: Union[Initializer, str] = Initializer.XAVIER,
        context: Optional[BuildContext] = None) -> StackedRNN:
    """
    Gated recurrent unit stack. Fewer parameters than LSTM as GRUs lack an
    output gate. Arguments as for ``LSTM``.
    """
    spec = LayerSpec(input_dim, hidden_size, num_layers, bidirectional,
                     weight_initializer, 'gru')
    return _build_recurrent_layer(spec, context)


def RNN(input_dim: int, hidden_size: int, num_layers: int,
        activation: Union[Activation, str],
        bidirectional: bool = False,
        weight_initializer: Union[Initializer, str] = Initializer.XAVIER,
        context: Optional[BuildContext] = None) -> StackedRNN:
    """
    Plain recurrent stack with a ReLU or Tanh activation

    Args:
        activation: Activation.RELU / Activation.TANH, or exactly 'ReLU' / 'Tanh'

    Raises:
        UnsupportedActivation: for any other activation
    """
    try:
        variant = _ACTIVATION_VARIANTS[Activation(activation)]
    except ValueError:
        raise UnsupportedActivation(activation) from None

    spec = LayerSpec(input_dim, hidden_size, num_layers, bidirectional,
                     weight_initializer, variant)
    return _build_recurrent_layer(spec, context)


def _build_recurrent_layer(spec: LayerSpec,
                           context: Optional[BuildContext] = None) -> StackedRNN:
    if context is None:
        context = default_context()

    init_fn = initializers.get(spec.weight_initializer)

    data = torch.empty(spec.input_dim, **context.factory_kwargs)
    weights = nn.Parameter(initializers.apply(init_fn, data))

    operand = input_variable((spec.input_dim,), context)

    logger.debug("Building %s stack: input_dim=%s hidden_size=%s num_layers=%s "
                 "bidirectional=%s init=%s device=%s", spec.variant, spec.input_dim,
                 spec.hidden_size, spec.num_layers, spec.bidirectional,
                 spec.weight_initializer, context.device)

    return optimized_rnn_stack(operand, weights, spec.hidden_size, spec.num_layers,
                               spec.bidirectional, spec.variant, weight_init=init_fn)
