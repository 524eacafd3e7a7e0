import torch

from ..dynamics.base import ArrayLike, _as_tensor


def check_nan(values: ArrayLike, what: str = "rhs") -> None:
    """Raise ArithmeticError when a right-hand side (or any buffer) holds a NaN."""
    if torch.isnan(_as_tensor(values, what)).any():
        raise ArithmeticError(f"{what} contains NaN")
