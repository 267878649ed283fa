import pytest
import torch

from rnnstack import BuildContext


@pytest.fixture
def cpu_context():
    return BuildContext(device='cpu')


@pytest.fixture(autouse=True)
def seed():
    torch.manual_seed(0)
