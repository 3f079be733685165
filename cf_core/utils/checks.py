import math


class PreconditionError(AssertionError):
    """Raised when a loss is called outside its input domain.

    These are caller bugs (bad label encoding, a probability outside [0, 1])
    and are not meant to be caught and recovered from.
    """


def check(condition, message):
    if not condition:
        raise PreconditionError(message)


def check_finite(pred, truth):
    check(math.isfinite(pred), f"pred must be finite, got {pred}")
    check(math.isfinite(truth), f"truth must be finite, got {truth}")


def check_label(truth, labels):
    check(truth in labels, f"truth must be one of {labels}, got {truth}")
