import numpy as np

from cf_core.abstractions.loss import Loss
from cf_core.constants import EXP_CUTOFF, BINARY_LABELS
from cf_core.utils.checks import check_finite, check_label
from cf_core.utils.numerics import sigmoid, softplus_neg

class CrossEntropyLoss(Loss):
    """
    Cross entropy on a raw logit a, with p = sigmoid(a):

        l(a, y) = -y log(p) - (1 - y) log(1 - p)
                = (1 - y) a + log(1 + exp(-a))
        dl/da   = sigmoid(a) - y
    """

    labels = BINARY_LABELS
    branch_points = (-EXP_CUTOFF, EXP_CUTOFF)

    def name(self):
        return "CrossEntropy"

    def evaluate(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check_label(truth, BINARY_LABELS)
        return (1.0 - truth) * pred + softplus_neg(pred)

    def gradient(self, pred, truth):
        pred, truth = float(pred), float(truth)
        check_finite(pred, truth)
        check_label(truth, BINARY_LABELS)
        if pred < -EXP_CUTOFF:
            return float(np.exp(pred)) - truth
        if pred > EXP_CUTOFF:
            return 1.0 - truth
        return sigmoid(pred) - truth

    def predict(self, x):
        return sigmoid(float(x))
