import matplotlib
import pytest

from cf_core.losses.factory import create
from cf_core.losses.kinds import LossKind

matplotlib.use("Agg")


@pytest.fixture(params=list(LossKind), ids=lambda k: k.name.lower())
def loss(request):
    return create(request.param)
