"""
Tests for the trend-strength model and its handle.
"""

import json
import math
import threading
import time

import numpy as np
import pytest

from marketlens.services.trend_model import (
    LinearTrendModel,
    TrendModel,
    TrendModelHandle,
    build_feature_vector,
    load_trend_model,
)
from marketlens.services.trend_model.model import DEFAULT_WEIGHTS


class NaNModel(TrendModel):
    def predict(self, features):
        return float("nan")


def test_feature_vector_shape(rising_prices, flat_volumes):
    features = build_feature_vector(rising_prices, flat_volumes)
    assert features.shape == (4,)
    assert features[0] == pytest.approx(100.0)
    assert features[1] == pytest.approx(1.0)
    assert features[3] == 0.0


def test_linear_model_direction(rising_prices, flat_volumes):
    model = LinearTrendModel.default()
    up = model.predict(build_feature_vector(rising_prices, flat_volumes))
    down = model.predict(build_feature_vector(list(reversed(rising_prices)), flat_volumes))
    assert 0.5 < up < 1.0
    assert -1.0 < down < -0.5


def test_linear_model_flat_market_is_zero():
    model = LinearTrendModel.default()
    assert model.predict(build_feature_vector([100.0] * 50, [0.0] * 50)) == 0.0


def test_linear_model_rejects_bad_shapes():
    with pytest.raises(ValueError):
        LinearTrendModel(weights=[1.0, 2.0])
    with pytest.raises(ValueError):
        LinearTrendModel.default().predict(np.zeros(3))


def test_from_file(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"weights": [0.0, 1.0, 0.0, 0.0], "bias": 0.5}))
    model = LinearTrendModel.from_file(path)
    assert model.bias == 0.5
    assert model.predict(np.array([0.0, 0.0, 0.0, 0.0])) == pytest.approx(math.tanh(0.5))


def test_load_falls_back_to_builtin(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    for path in (None, str(tmp_path / "missing.json"), str(bad)):
        model = load_trend_model(path)
        assert isinstance(model, LinearTrendModel)
        assert list(model.weights) == list(DEFAULT_WEIGHTS)


def test_handle_builds_once_under_concurrency():
    built = []

    def factory():
        time.sleep(0.05)
        built.append(1)
        return LinearTrendModel.default()

    handle = TrendModelHandle(factory)
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(handle.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert len(seen) == 8
    assert all(model is seen[0] for model in seen)
    assert handle.loaded


def test_handle_non_finite_output_is_zero():
    handle = TrendModelHandle(NaNModel)
    assert handle.estimate(np.zeros(4)) == 0.0
