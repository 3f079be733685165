from cf_core.abstractions.loss import Loss
from cf_core.utils.checks import check_finite

class SquareLoss(Loss):
    """l(a, y) = (y - a)^2"""

    def name(self):
        return "Square"

    def evaluate(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        err = truth - pred
        return err * err

    def gradient(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        return -2.0 * (truth - pred)

    def predict(self, x):
        return float(x)
