"""
Errors raised while assembling recurrent layers
"""

from typing import Iterable


class RecurrentBuildError(Exception):
    """Base class for layer construction failures raised by rnnstack"""


class UnsupportedActivation(RecurrentBuildError, ValueError):
    """Plain RNN requested with an activation other than ReLU or Tanh"""

    def __init__(self, activation):
        self.activation = activation
        super().__init__(
            f"Supported activation for RNN is ReLU and Tanh, got {activation!r}"
        )


class UnknownInitializer(RecurrentBuildError, LookupError):
    """Weight initializer name is not present in the registry"""

    def __init__(self, name, available: Iterable[str] = ()):
        self.name = name
        self.available = tuple(available)
        message = f"Unknown weight initializer: {name!r}"
        if self.available:
            message += f" (registered: {', '.join(self.available)})"
        super().__init__(message)
