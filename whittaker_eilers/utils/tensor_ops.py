"""
Tensor Operations Utilities

Utilities for converting caller tables (Python sequences, NumPy arrays or
PyTorch tensors) into the float arrays the smoother works on.
"""

import torch
import numpy as np
from typing import Any

from ..exceptions import InvalidArgumentError

def is_defined(value: Any) -> bool:
    """True when a value is present (not ``None``)"""
    return value is not None

def tensor_to_numpy(tensor: torch.Tensor) -> np.ndarray:
    """Convert PyTorch tensor to NumPy array safely

    Args:
        tensor: Input PyTorch tensor

    Returns:
        NumPy array
    """
    return tensor.detach().cpu().numpy()

def as_float_array(values: Any, name: str = "values") -> np.ndarray:
    """Coerce a table to a contiguous float64 array

    Args:
        values: Sequence, NumPy array or PyTorch tensor
        name: Argument name used in error messages

    Returns:
        NumPy array of dtype float64
    """
    if isinstance(values, torch.Tensor):
        values = tensor_to_numpy(values)

    try:
        return np.ascontiguousarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"cannot convert to float array ({e})", argument=name)

def as_scalar(value: Any, name: str = "x") -> float:
    """Coerce a scalar (Python number, NumPy scalar, 0-d tensor) to float"""
    if isinstance(value, torch.Tensor):
        if value.numel() != 1:
            raise InvalidArgumentError(
                f"expected a scalar, got tensor of shape {tuple(value.shape)}",
                argument=name
            )
        return float(value.item())

    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"expected a real number ({e})", argument=name)
