import math

import pytest

from cf_core.losses.square import SquareLoss
from cf_core.losses.logistic import LogisticLoss
from cf_core.losses.cross_entropy import CrossEntropyLoss
from cf_core.losses.log import LogLoss
from cf_core.losses.hinge import HingeLoss, SquaredHingeLoss
from cf_core.utils.checks import PreconditionError


class TestSquareLoss:

    def test_values(self):
        loss = SquareLoss()
        assert loss.evaluate(3, 1) == 4
        assert loss.gradient(3, 1) == 4
        assert loss.predict(5) == 5
        assert loss(1.0, 3.0) == 4

    def test_any_real_target(self):
        loss = SquareLoss()
        assert loss.evaluate(-2.5, 0.5) == 9.0
        assert loss.gradient(-2.5, 0.5) == -6.0

    def test_rejects_nan(self):
        with pytest.raises(PreconditionError):
            SquareLoss().evaluate(float("nan"), 1.0)


class TestLogisticLoss:

    def test_half_probability(self):
        loss = LogisticLoss()
        assert loss.evaluate(0.5, 1) == pytest.approx(math.log(2))
        assert loss.evaluate(0.5, 0) == pytest.approx(math.log(2))

    def test_clamps_instead_of_infinity(self):
        loss = LogisticLoss()
        assert loss.evaluate(1.0, 0) == pytest.approx(-math.log(1e-4))
        assert loss.evaluate(0.0, 1) == pytest.approx(-math.log(1e-4))
        assert loss.evaluate(1.0, 1) == 0.0

    def test_gradient(self):
        loss = LogisticLoss()
        assert loss.gradient(0.25, 1) == pytest.approx(-4.0)
        assert loss.gradient(0.25, 0) == pytest.approx(1 / 0.75)

    def test_identity_predict(self):
        assert LogisticLoss().predict(0.3) == 0.3

    @pytest.mark.parametrize("pred", [-0.1, 1.1])
    def test_evaluate_rejects_out_of_range(self, pred):
        with pytest.raises(PreconditionError):
            LogisticLoss().evaluate(pred, 1)

    @pytest.mark.parametrize("pred", [0.0, 1.0])
    def test_gradient_rejects_boundary(self, pred):
        with pytest.raises(PreconditionError):
            LogisticLoss().gradient(pred, 1)

    @pytest.mark.parametrize("truth", [0.5, -1.0, 2.0])
    def test_rejects_non_binary_label(self, truth):
        loss = LogisticLoss()
        with pytest.raises(PreconditionError):
            loss.evaluate(0.5, truth)
        with pytest.raises(PreconditionError):
            loss.gradient(0.5, truth)


class TestCrossEntropyLoss:

    def test_predict_is_sigmoid(self):
        loss = CrossEntropyLoss()
        assert loss.predict(0) == 0.5
        assert loss.predict(2.0) == pytest.approx(1 / (1 + math.exp(-2.0)))
        assert loss.predict(-1000.0) == 0.0
        assert loss.predict(1000.0) == 1.0

    def test_tail_branches(self):
        loss = CrossEntropyLoss()
        assert loss.evaluate(30, 1) == pytest.approx(math.exp(-30), rel=1e-12)
        assert loss.evaluate(30, 1) > 0.0
        assert loss.evaluate(30, 0) == pytest.approx(30.0)
        assert loss.evaluate(-30, 1) == pytest.approx(30.0)
        assert loss.evaluate(-30, 0) == 0.0
        assert loss.evaluate(-1000.0, 1) == 1000.0

    def test_matches_naive_formula_in_safe_range(self):
        loss = CrossEntropyLoss()
        for a in (-5.0, -0.3, 0.0, 1.7, 10.0):
            p = 1 / (1 + math.exp(-a))
            assert loss.evaluate(a, 1) == pytest.approx(-math.log(p))
            assert loss.evaluate(a, 0) == pytest.approx(-math.log(1 - p))

    def test_gradient(self):
        loss = CrossEntropyLoss()
        assert loss.gradient(30, 1) == 0
        assert loss.gradient(30, 0) == 1
        assert loss.gradient(-30, 0) == pytest.approx(math.exp(-30))
        assert loss.gradient(-30, 1) == pytest.approx(-1.0)
        assert loss.gradient(0, 1) == -0.5

    def test_rejects_signed_label(self):
        with pytest.raises(PreconditionError):
            CrossEntropyLoss().evaluate(0.0, -1)


class TestLogLoss:

    def test_values(self):
        loss = LogLoss()
        assert loss.evaluate(0, 1) == pytest.approx(math.log(2))
        assert loss.evaluate(25, 1) == pytest.approx(math.exp(-25), rel=1e-12)
        assert loss.evaluate(-25, 1) == 25.0
        assert loss.evaluate(25, -1) == 25.0

    def test_gradient(self):
        loss = LogLoss()
        assert loss.gradient(0, 1) == -0.5
        assert loss.gradient(0, -1) == 0.5
        assert loss.gradient(25, 1) == pytest.approx(-math.exp(-25))
        assert loss.gradient(-25, 1) == -1.0
        assert loss.gradient(-25, -1) == pytest.approx(math.exp(-25))

    def test_identity_predict(self):
        assert LogLoss().predict(-3.5) == -3.5

    @pytest.mark.parametrize("truth", [0.0, 0.5, 2.0])
    def test_rejects_unsigned_label(self, truth):
        with pytest.raises(PreconditionError):
            LogLoss().evaluate(0.0, truth)


class TestHingeLosses:

    def test_hinge(self):
        loss = HingeLoss()
        assert loss.evaluate(2, 1) == 0
        assert loss.evaluate(0, 1) == 1
        assert loss.evaluate(-2, 1) == 3
        assert loss.evaluate(2, -1) == 3

    def test_hinge_gradient(self):
        loss = HingeLoss()
        assert loss.gradient(2, 1) == 0
        assert loss.gradient(0, 1) == -1
        assert loss.gradient(0, -1) == 1
        # the kink takes the active branch
        assert loss.gradient(1, 1) == -1
        assert loss.gradient(-1, -1) == 1

    def test_squared_hinge(self):
        loss = SquaredHingeLoss()
        assert loss.evaluate(2, 1) == 0
        assert loss.evaluate(0, 1) == 0.5
        assert loss.evaluate(-1, 1) == 2.0
        assert loss.gradient(2, 1) == 0
        assert loss.gradient(0, 1) == -1
        assert loss.gradient(-1, 1) == -2
        assert loss.gradient(1, 1) == 0

    def test_identity_predict(self):
        assert HingeLoss().predict(0.7) == 0.7
        assert SquaredHingeLoss().predict(-0.7) == -0.7

    def test_rejects_binary_zero_label(self):
        with pytest.raises(PreconditionError):
            HingeLoss().evaluate(0.3, 0)
        with pytest.raises(PreconditionError):
            SquaredHingeLoss().gradient(0.3, 0)


def test_names():
    names = [cls().name() for cls in (
        SquareLoss, LogisticLoss, CrossEntropyLoss, LogLoss,
        HingeLoss, SquaredHingeLoss,
    )]
    assert names == ["Square", "Logistic", "CrossEntropy", "Log", "Hinge", "SquaredHinge"]
    assert repr(LogLoss()) == "LogLoss(name='Log')"


def test_precondition_error_is_assertion():
    assert issubclass(PreconditionError, AssertionError)
