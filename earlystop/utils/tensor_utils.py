# earlystop/utils/tensor_utils.py

"""Loss coercion: training loops hand us torch tensors, criteria want floats."""

from __future__ import annotations

from typing import Any

import torch


def to_scalar_loss(loss: Any) -> float:
    """Convert a loss (number or single-element tensor) to a Python float.

    NaN and inf pass through unchanged; criteria decide what they mean.
    """
    if isinstance(loss, torch.Tensor):
        if loss.numel() != 1:
            raise ValueError(f"loss tensor must hold a single value, got shape {tuple(loss.shape)}")
        return float(loss.detach().cpu().item())  # no grads, no GPU dependency
    return float(loss)
