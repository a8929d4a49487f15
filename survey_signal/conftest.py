"""Pytest configuration and fixtures for signal-conditioning tests."""

import numpy as np
import pytest

from survey_signal.survey import SurveyPoint


@pytest.fixture
def clean_sine_wave():
    """One full swell period: a slowly varying channel sampled 100 times."""
    phase = np.linspace(0, 2 * np.pi, 100)
    return phase, np.sin(phase)


@pytest.fixture
def noisy_sine_wave(clean_sine_wave):
    """Generate a noisy sine wave for testing smoothing algorithms."""
    x, clean_y = clean_sine_wave
    rng = np.random.default_rng(42)
    noisy_y = clean_y + 0.1 * rng.standard_normal(len(clean_y))
    return x, noisy_y, clean_y


@pytest.fixture
def outlier_signal(noisy_sine_wave):
    """Noisy sine wave with one positive and one negative outlier."""
    x, noisy_y, clean_y = noisy_sine_wave
    outlier_y = noisy_y.copy()
    outlier_y[25] = 5.0
    outlier_y[75] = -5.0
    return x, outlier_y, clean_y


@pytest.fixture
def gnss_track():
    """Straight survey line with small position noise, depth and altitude."""
    rng = np.random.default_rng(7)
    n = 60
    eastings = 450000.0 + 0.5 * np.arange(n) + 0.05 * rng.standard_normal(n)
    northings = 6200000.0 + 0.25 * np.arange(n) + 0.05 * rng.standard_normal(n)
    depths = 120.0 + 0.2 * rng.standard_normal(n)
    altitudes = 3.0 + 0.1 * rng.standard_normal(n)
    return [
        SurveyPoint(easting=e, northing=nn, z=d, altitude=a, index=i)
        for i, (e, nn, d, a) in enumerate(zip(eastings, northings, depths, altitudes))
    ]


@pytest.fixture
def flat_track():
    """Points whose every channel is constant."""
    return [
        SurveyPoint(easting=100.0, northing=200.0, z=30.0, altitude=4.0, index=i)
        for i in range(10)
    ]


@pytest.fixture(params=[3, 5, 7, 9, 11])
def window_sizes(request):
    """Parametrized odd window sizes."""
    return request.param


@pytest.fixture
def frequency_data():
    """Two-tone signal sampled at 100 Hz."""
    fs = 100.0
    t = np.arange(0, 2, 1 / fs)
    slow = np.sin(2 * np.pi * 0.5 * t)
    fast = 0.5 * np.sin(2 * np.pi * 30 * t)
    return t, slow, fast, fs
