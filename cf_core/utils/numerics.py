"""
Numerically stable scalar helpers shared by the loss implementations.
"""
import numpy as np

from cf_core.constants import EXP_CUTOFF


def softplus_neg(x: float) -> float:
    """log(1 + exp(-x)) without overflow or loss of the small tail."""
    if x > EXP_CUTOFF:
        # log1p(u) ~ u for tiny u
        return float(np.exp(-x))
    if x < -EXP_CUTOFF:
        return float(-x)
    return float(np.log1p(np.exp(-x)))


def sigmoid(x: float) -> float:
    # piecewise so exp() only ever sees a non-positive argument
    if x >= 0:
        return float(1.0 / (1.0 + np.exp(-x)))
    ex = np.exp(x)
    return float(ex / (1.0 + ex))
