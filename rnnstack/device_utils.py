"""
Device selection for BuildContext
Supports CUDA (NVIDIA), MPS (Apple Silicon), and CPU fallback
"""

import torch

# Looked up at call time so availability reflects the running process
_ACCELERATORS = {
    'mps': lambda: torch.backends.mps.is_available(),
    'cuda': lambda: torch.cuda.is_available(),
}

# Priority for 'auto': MPS > CUDA > CPU
_AUTO_ORDER = ('mps', 'cuda')


def get_best_device(prefer_device: str = 'auto') -> torch.device:
    """
    Resolve a device preference to a torch.device

    Args:
        prefer_device: 'auto', 'mps', 'cuda', or 'cpu'

    Returns:
        torch.device: The requested device, or the best available for 'auto'

    Raises:
        RuntimeError: if an explicitly requested accelerator is unavailable
    """
    if prefer_device == 'cpu':
        return torch.device('cpu')

    if prefer_device in _ACCELERATORS:
        if not _ACCELERATORS[prefer_device]():
            raise RuntimeError(f"{prefer_device.upper()} requested but not available")
        return torch.device(prefer_device)

    if prefer_device != 'auto':
        raise ValueError(f"Unknown device preference: {prefer_device!r} "
                         f"(expected one of auto, mps, cuda, cpu)")

    for name in _AUTO_ORDER:
        if _ACCELERATORS[name]():
            return torch.device(name)
    return torch.device('cpu')
