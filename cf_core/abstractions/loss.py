from abc import ABC, abstractmethod

class Loss(ABC):
    """Abstract base for a scalar loss over a (prediction, label) pair.

    Class attributes describe the input domain for diagnostics:
    `labels` is the allowed label set (None for any real target),
    `pred_bounds` the closed interval pred must lie in (None if unbounded),
    `kink_margin` the margin at which the loss is not differentiable and
    `branch_points` the values where evaluate() switches formula. Both are
    measured on the margin pred * truth when `margin_based` is set, on
    pred otherwise.
    """

    labels = None
    pred_bounds = None
    kink_margin = None
    branch_points = ()
    margin_based = False

    @abstractmethod
    def name(self):
        """Return the name of the loss for logging."""
        pass

    @abstractmethod
    def evaluate(self, pred, truth) -> float:
        """
        Loss value for one example. Never negative.
        """
        pass

    @abstractmethod
    def gradient(self, pred, truth) -> float:
        """
        Derivative of evaluate() w.r.t. pred.
        """
        pass

    @abstractmethod
    def predict(self, x) -> float:
        """
        Map a raw model score to the reported prediction.
        """
        pass

    def __call__(self, pred, truth):
        return self.evaluate(pred, truth)

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name()!r})"
