import pytest

from pricenet.loss import mean_squared_error, mean_squared_error_derivative


@pytest.mark.parametrize("value", [-3.0, 0.0, 1.25, 1e4])
def test_loss_is_zero_for_exact_prediction(value):
    assert mean_squared_error(value, value) == 0.0
    assert mean_squared_error_derivative(value, value) == 0.0


def test_loss_worked_example():
    assert mean_squared_error(1.0, 3.0) == 2.0


@pytest.mark.parametrize("y_true,y_pred", [(1.0, 4.0), (-2.0, 0.5), (10.0, 7.0)])
def test_loss_is_symmetric_and_non_negative(y_true, y_pred):
    assert mean_squared_error(y_true, y_pred) == mean_squared_error(y_pred, y_true)
    assert mean_squared_error(y_true, y_pred) > 0.0


@pytest.mark.parametrize("y_true,y_pred", [(1.0, 4.0), (-2.0, 0.5), (10.0, 7.0)])
def test_derivative_matches_numerical_gradient(y_true, y_pred):
    h = 1e-6
    numerical = (
        mean_squared_error(y_true, y_pred + h) - mean_squared_error(y_true, y_pred - h)
    ) / (2 * h)
    assert mean_squared_error_derivative(y_true, y_pred) == pytest.approx(numerical, rel=1e-6)


def test_derivative_sign_follows_overshoot():
    assert mean_squared_error_derivative(2.0, 5.0) > 0.0
    assert mean_squared_error_derivative(5.0, 2.0) < 0.0
    assert mean_squared_error_derivative(2.0, 5.0) == -mean_squared_error_derivative(5.0, 2.0)