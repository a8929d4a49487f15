"""Tests for the Kalman forward pass and RTS smoother."""

import numpy as np
import pytest

from survey_signal.algorithms import kalman


class TestKalmanFilter:
    """Forward pass."""

    def test_first_step(self):
        """Initial estimate is y[0] with error 1.0, so step 0 keeps y[0]."""
        estimates, errors = kalman.kalman_filter([2.0, 4.0], 0.01, 0.1)
        predicted = 1.0 + 0.01
        gain = predicted / (predicted + 0.1)
        assert estimates[0] == pytest.approx(2.0)
        assert errors[0] == pytest.approx((1 - gain) * predicted)

    def test_second_step(self):
        estimates, errors = kalman.kalman_filter([2.0, 4.0], 0.01, 0.1)
        predicted = errors[0] + 0.01
        gain = predicted / (predicted + 0.1)
        assert estimates[1] == pytest.approx(2.0 + gain * 2.0)

    def test_errors_shrink_toward_steady_state(self):
        _, errors = kalman.kalman_filter(np.zeros(200), 0.01, 0.1)
        assert np.all(np.diff(errors) <= 1e-15)
        assert errors[-1] == pytest.approx(errors[-2])

    def test_zero_noise_does_not_divide_by_zero(self):
        estimates, errors = kalman.kalman_filter([1.0, 2.0, 3.0], 0.0, 0.0)
        assert np.all(np.isfinite(estimates))
        assert np.all(errors == 0.0)

    def test_empty(self):
        estimates, errors = kalman.kalman_filter([], 0.01, 0.1)
        assert estimates.size == 0 and errors.size == 0


class TestKalmanSmooth:
    """Forward-backward smoothing."""

    def test_last_sample_equals_forward_estimate(self, noisy_sine_wave):
        x, noisy_y, clean_y = noisy_sine_wave
        forward, _ = kalman.kalman_filter(noisy_y, 0.01, 0.1)
        smoothed = kalman.kalman_smooth(noisy_y, 0.01, 0.1)
        assert smoothed[-1] == forward[-1]

    def test_backward_recurrence(self):
        y = np.array([0.0, 1.0, 0.5, 2.0, 1.5])
        q, r = 0.05, 0.2
        forward, errors = kalman.kalman_filter(y, q, r)
        smoothed = kalman.kalman_smooth(y, q, r)
        for i in range(len(y) - 2, -1, -1):
            gain = errors[i] / (errors[i] + q)
            assert smoothed[i] == pytest.approx(forward[i] + gain * (smoothed[i + 1] - forward[i]))

    def test_constant_signal(self):
        y = np.full(30, -7.5)
        np.testing.assert_allclose(kalman.kalman_smooth(y, 0.01, 0.1), y)

    def test_uses_future_samples(self):
        """Unlike the forward pass, early outputs react to late samples."""
        y = np.zeros(10)
        altered = y.copy()
        altered[-1] = 10.0
        assert kalman.kalman_smooth(altered, 0.5, 0.5)[0] != kalman.kalman_smooth(y, 0.5, 0.5)[0]

    def test_reduces_noise(self, noisy_sine_wave):
        x, noisy_y, clean_y = noisy_sine_wave
        smoothed = kalman.kalman_smooth(noisy_y, 0.01, 0.1)
        assert np.mean((smoothed - clean_y) ** 2) < np.mean((noisy_y - clean_y) ** 2)

    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_short_signals_keep_length(self, n):
        assert kalman.kalman_smooth(np.arange(n, dtype=float)).size == n
