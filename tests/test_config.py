"""
Tests for build configuration and device selection
"""

import pytest
import torch

from rnnstack import BuildContext, Initializer, LayerSpec, default_context
from rnnstack import device_utils


def test_context_resolves_device_names():
    context = BuildContext(device='cpu')

    assert context.device == torch.device('cpu')
    assert context.factory_kwargs == {'device': torch.device('cpu'),
                                      'dtype': torch.float32}


def test_context_accepts_torch_device_and_indexed_names():
    assert BuildContext(torch.device('cpu')).device == torch.device('cpu')
    assert BuildContext('cpu:0').device == torch.device('cpu', 0)


def test_default_context_uses_best_device(monkeypatch):
    monkeypatch.setattr('rnnstack.config.get_best_device',
                        lambda prefer_device='auto': torch.device('cpu'))

    first, second = default_context(), default_context()
    assert first.device == torch.device('cpu')
    assert first is not second


def test_layer_spec_defaults():
    spec = LayerSpec(10, 20, 2)

    assert spec.variant == 'lstm'
    assert spec.bidirectional is False
    assert spec.weight_initializer is Initializer.XAVIER
    assert spec.output_size == 20


def test_layer_spec_bidirectional_output_size():
    assert LayerSpec(10, 20, 1, bidirectional=True, variant='gru').output_size == 40


def test_layer_spec_rejects_unknown_variant():
    with pytest.raises(ValueError, match='Unknown recurrent variant'):
        LayerSpec(10, 20, 1, variant='rnnSigmoid')


def test_layer_spec_is_frozen():
    spec = LayerSpec(10, 20, 1)
    with pytest.raises(AttributeError):
        spec.num_layers = 3


def test_get_best_device_cpu():
    assert device_utils.get_best_device('cpu') == torch.device('cpu')


def test_get_best_device_rejects_unknown_preference():
    with pytest.raises(ValueError):
        device_utils.get_best_device('tpu')


def test_get_best_device_missing_cuda(monkeypatch):
    monkeypatch.setattr(torch.cuda, 'is_available', lambda: False)

    with pytest.raises(RuntimeError, match='CUDA requested'):
        device_utils.get_best_device('cuda')


def test_auto_falls_back_to_cpu(monkeypatch):
    monkeypatch.setattr(torch.cuda, 'is_available', lambda: False)
    monkeypatch.setattr(torch.backends.mps, 'is_available', lambda: False)

    assert device_utils.get_best_device() == torch.device('cpu')



def test_get_best_device_missing_mps(monkeypatch):
    monkeypatch.setattr(torch.backends.mps, 'is_available', lambda: False)

    with pytest.raises(RuntimeError, match='MPS requested'):
        device_utils.get_best_device('mps')
