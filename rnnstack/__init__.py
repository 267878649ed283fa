"""
rnnstack - Stacked recurrent layer factories for PyTorch

Builds LSTM, GRU and plain ReLU/Tanh RNN stacks from a handful of
hyperparameters: input dimension, hidden size, layer count,
bidirectionality and weight initialization scheme.
"""

__version__ = "0.1.0"

from .config import BuildContext, LayerSpec, default_context
from .errors import RecurrentBuildError, UnknownInitializer, UnsupportedActivation
from .initializers import Initializer
from .recurrent import GRU, LSTM, RNN, Activation
from .stack import InputVariable, StackedRNN, input_variable, optimized_rnn_stack

__all__ = [
    # Factories
    'LSTM', 'GRU', 'RNN', 'Activation', 'Initializer',

    # Primitive
    'StackedRNN', 'InputVariable', 'input_variable', 'optimized_rnn_stack',

    # Configuration
    'BuildContext', 'LayerSpec', 'default_context',

    # Errors
    'RecurrentBuildError', 'UnsupportedActivation', 'UnknownInitializer'
]
