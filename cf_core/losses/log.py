import numpy as np

from cf_core.abstractions.loss import Loss
from cf_core.constants import EXP_CUTOFF, SIGNED_LABELS
from cf_core.utils.checks import check_finite, check_label
from cf_core.utils.numerics import softplus_neg

class LogLoss(Loss):
    """
    Logistic loss on the margin z = a * y, y in {-1, +1}:

        l(a, y) = log(1 + exp(-z))
        dl/da   = -y / (1 + exp(z))
    """

    labels = SIGNED_LABELS
    branch_points = (-EXP_CUTOFF, EXP_CUTOFF)
    margin_based = True

    def name(self):
        return "Log"

    def evaluate(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check_label(truth, SIGNED_LABELS)
        return softplus_neg(pred * truth)

    def gradient(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check_label(truth, SIGNED_LABELS)
        z = pred * truth
        if z > EXP_CUTOFF:
            return float(-truth * np.exp(-z))
        if z < -EXP_CUTOFF:
            return -truth
        return float(-truth / (1.0 + np.exp(z)))

    def predict(self, x):
        return float(x)
