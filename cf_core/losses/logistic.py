import numpy as np

from cf_core.abstractions.loss import Loss
from cf_core.constants import LOGISTIC_EPS, BINARY_LABELS
from cf_core.utils.checks import check, check_finite, check_label

class LogisticLoss(Loss):
    """
    Negative log-likelihood of a score that is already a probability.

        l(p, y) = -y log(p) - (1 - y) log(1 - p)
        dl/dp   = (p - y) / (p (1 - p))

    The log argument is floored at LOGISTIC_EPS so a confidently wrong
    prediction costs -log(1e-4) instead of infinity.
    """

    labels = BINARY_LABELS
    pred_bounds = (0.0, 1.0)

    def name(self):
        return "Logistic"

    def evaluate(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check(0.0 <= pred <= 1.0, f"pred must lie in [0, 1], got {pred}")
        check_label(truth, BINARY_LABELS)
        if truth == 0.0:
            return float(-np.log(max(LOGISTIC_EPS, 1.0 - pred)))
        return float(-np.log(max(LOGISTIC_EPS, pred)))

    def gradient(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check(0.0 < pred < 1.0, f"pred must lie in (0, 1), got {pred}")
        check_label(truth, BINARY_LABELS)
        return (pred - truth) / (pred * (1.0 - pred))

    def predict(self, x):
        return float(x)
