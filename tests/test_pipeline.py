import sys

import pytest

from pricenet.pipeline import (
    MinMax,
    denormalize_target,
    format_features_summary,
    format_vector,
    main,
    normalize_features,
    normalize_targets,
    run_training_pipeline,
    time_series_split,
)


def test_normalize_features_columns_span_unit_interval():
    features = [[1.0, 10.0], [3.0, 30.0], [2.0, 20.0]]
    scaled, params = normalize_features(features)
    assert [(p.min_val, p.max_val) for p in params] == [(1.0, 3.0), (10.0, 30.0)]
    for column in zip(*scaled):
        assert min(column) == 0.0
        assert max(column) == 1.0
    assert scaled[2] == pytest.approx([0.5, 0.5])


def test_normalize_features_constant_column_becomes_zero():
    scaled, params = normalize_features([[5.0, 1.0], [5.0, 2.0]])
    assert [row[0] for row in scaled] == [0.0, 0.0]
    assert params[0].min_val == params[0].max_val == 5.0


def test_normalize_features_does_not_modify_input():
    features = [[1.0], [2.0]]
    normalize_features(features)
    assert features == [[1.0], [2.0]]


def test_normalize_features_empty():
    assert normalize_features([]) == ([], [])


def test_normalize_targets_round_trip():
    targets = [1800.5, 1900.25, 1850.0, 2000.0]
    scaled, params = normalize_targets(targets)
    assert min(scaled) == 0.0 and max(scaled) == 1.0
    restored = [denormalize_target(v, params) for v in scaled]
    assert restored == pytest.approx(targets)


def test_normalize_targets_empty_gives_default_range():
    scaled, params = normalize_targets([])
    assert scaled == []
    assert params == MinMax()
    assert params.min_val == sys.float_info.max
    assert params.max_val == -sys.float_info.max


def test_denormalize_constant_range_returns_minimum():
    assert denormalize_target(0.7, MinMax(42.0, 42.0)) == 42.0


def test_time_series_split_keeps_order(capsys):
    features = [[float(i)] for i in range(10)]
    targets = [float(i) for i in range(10)]
    train_x, train_y, val_x, val_y = time_series_split(features, targets, 0.2)
    assert len(val_x) == len(val_y) == 2
    assert train_x + val_x == features
    assert train_y + val_y == targets
    assert "Time-series split: Total=10" in capsys.readouterr().out


def test_time_series_split_small_dataset_has_no_validation():
    features = [[1.0], [2.0], [3.0]]
    train_x, train_y, val_x, val_y = time_series_split(features, [1.0, 2.0, 3.0], 0.2)
    assert train_x == features
    assert train_y == [1.0, 2.0, 3.0]
    assert val_x == [] and val_y == []


def test_time_series_split_empty():
    assert time_series_split([], [], 0.2) == ([], [], [], [])


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.1, 1.5])
def test_time_series_split_rejects_bad_ratio(ratio):
    with pytest.raises(ValueError):
        time_series_split([[1.0]], [1.0], ratio)


def test_time_series_split_rejects_mismatch():
    with pytest.raises(ValueError):
        time_series_split([[1.0], [2.0]], [1.0], 0.2)


def test_format_vector_full():
    assert format_vector("v", [1.0, 2.5]) == "v: [ 1.00000, 2.50000 ]"


def test_format_vector_with_limit():
    assert format_vector("v", [1.0, 2.0, 3.0], 2) == "v: [ 1.00000, 2.00000, ... ]"


def test_format_vector_empty():
    assert format_vector("v", []) == "v: [  ]"


def test_format_features_summary_empty():
    text = format_features_summary("X", [])
    assert text.splitlines()[-1] == "  <No features loaded>"


def test_format_features_summary_rows_and_columns():
    features = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]
    lines = format_features_summary("X", features, rows=2, cols=2).splitlines()
    assert lines[0] == "X (Summary - first 2 rows, first 2 cols if available):"
    assert lines[1] == "  Total samples: 3"
    assert lines[2] == "  Features per sample: 3"
    assert lines[3] == "  Sample   0: [ 1.00000, 2.00000... ]"
    assert len(lines) == 5


def test_run_training_pipeline_missing_file(tmp_path, capsys):
    result = run_training_pipeline(tmp_path / "missing.csv")
    assert result is None
    assert "Error loading CSV data" in capsys.readouterr().err


def test_run_training_pipeline_trains_on_small_file(tmp_path, capsys):
    data = tmp_path / "prices.csv"
    data.write_text(
        "open,high,low,close\n"
        "1.0,2.0,0.5,1.5\n"
        "1.5,2.5,1.0,2.0\n"
        "2.0,3.0,1.5,2.5\n"
        "2.5,3.5,2.0,3.0\n"
        "3.0,4.0,2.5,3.5\n"
    )
    network = run_training_pipeline(data)
    assert network is not None
    assert network.num_layers() == 3
    out = capsys.readouterr().out
    assert "Successfully loaded 5 original samples" in out
    assert "Final Training MSE (Normalized):" in out
    assert "Final Validation MSE (Normalized):" in out


def test_main_reports_completion(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 0
    out = capsys.readouterr().out
    assert "Main Training Pipeline Completed" in out