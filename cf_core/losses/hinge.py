from cf_core.abstractions.loss import Loss
from cf_core.constants import SIGNED_LABELS
from cf_core.utils.checks import check_finite, check_label


def _margin(pred, truth):
    pred, truth = float(pred), float(truth)
    check_finite(pred, truth)
    check_label(truth, SIGNED_LABELS)
    return pred * truth, truth


class HingeLoss(Loss):
    """
    l(a, y) = max(0, 1 - a y)

    At the kink a y == 1 the subgradient -y is returned.
    """

    labels = SIGNED_LABELS
    kink_margin = 1.0
    margin_based = True

    def name(self):
        return "Hinge"

    def evaluate(self, pred, truth):
        z, _ = _margin(pred, truth)
        if z > 1.0:
            return 0.0
        return 1.0 - z

    def gradient(self, pred, truth):
        z, truth = _margin(pred, truth)
        if z > 1.0:
            return 0.0
        return -truth

    def predict(self, x):
        return float(x)


class SquaredHingeLoss(Loss):
    """l(a, y) = 1/2 max(0, 1 - a y)^2"""

    labels = SIGNED_LABELS
    margin_based = True

    def name(self):
        return "SquaredHinge"

    def evaluate(self, pred, truth):
        z, _ = _margin(pred, truth)
        if z > 1.0:
            return 0.0
        d = 1.0 - z
        return 0.5 * d * d

    def gradient(self, pred, truth):
        z, truth = _margin(pred, truth)
        if z > 1.0:
            return 0.0
        return -truth * (1.0 - z)

    def predict(self, x):
        return float(x)
