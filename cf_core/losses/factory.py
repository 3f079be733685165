import logging

from cf_core.abstractions.loss_factory import LossFactory
from cf_core.losses.kinds import LossKind
from cf_core.losses.square import SquareLoss
from cf_core.losses.logistic import LogisticLoss
from cf_core.losses.cross_entropy import CrossEntropyLoss
from cf_core.losses.log import LogLoss
from cf_core.losses.hinge import HingeLoss, SquaredHingeLoss

logger = logging.getLogger(__name__)

# Losses hold no state, so every caller shares one instance per kind.
_INSTANCES = {
    LossKind.SQUARE: SquareLoss(),
    LossKind.LOGISTIC: LogisticLoss(),
    LossKind.LOG: LogLoss(),
    LossKind.HINGE: HingeLoss(),
    LossKind.SQUARED_HINGE: SquaredHingeLoss(),
    LossKind.CROSS_ENTROPY: CrossEntropyLoss(),
}

FALLBACK_KIND = LossKind.SQUARE


def _resolve(kind):
    if isinstance(kind, LossKind):
        return kind
    if isinstance(kind, str):
        try:
            return LossKind.from_name(kind)
        except ValueError:
            return None
    if isinstance(kind, int) and not isinstance(kind, bool):
        try:
            return LossKind(kind)
        except ValueError:
            return None
    return None


def create(kind, strict=False):
    """
    Return the shared Loss instance for `kind`.

    `kind` may be a LossKind, its integer value or a name string. An
    unrecognised kind falls back to the square loss with a warning; pass
    strict=True to get a ValueError instead.
    """
    resolved = _resolve(kind)
    if resolved is None:
        if strict:
            raise ValueError(f"Unknown loss kind: {kind!r}")
        logger.warning(
            "Unknown loss kind %r, falling back to %s", kind, FALLBACK_KIND.name
        )
        resolved = FALLBACK_KIND
    return _INSTANCES[resolved]


def create_from_config(config: dict):
    return create(config["loss"], strict=config.get("strict", False))


class DefaultLossFactory(LossFactory):
    def __init__(self, strict=False):
        self.strict = strict

    def available(self):
        return [loss.name() for loss in _INSTANCES.values()]

    def create_loss(self, kind):
        return create(kind, strict=self.strict)
