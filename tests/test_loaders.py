import json

import polars as pl
import pytest

from hybrid.data.loaders import load_bias_model, load_rating_summary, load_training_split


def test_load_training_split_uses_row_index(artifacts_dir):
    split = load_training_split(artifacts_dir / "logistic" / "tune_examples.parquet")
    examples = split.tuning_examples()

    assert len(examples) == 6
    assert [ex.example_id for ex in examples] == list(range(6))
    assert examples[0].user_id == 'u1'
    assert examples[0].item_id == 'i1'
    assert examples[1].label == -1.0


def test_load_training_split_falls_back_to_rating(tmp_path):
    path = tmp_path / "split.parquet"
    pl.DataFrame({
        'example_id': [10, 20],
        'user_id': ['a', 'b'],
        'item_id': ['x', 'y'],
        'rating': [4, 2],
    }).write_parquet(path)

    examples = load_training_split(path).tuning_examples()

    assert [ex.example_id for ex in examples] == [10, 20]
    assert [ex.label for ex in examples] == [4.0, 2.0]


def test_load_training_split_rejects_duplicate_ids(tmp_path):
    path = tmp_path / "split.parquet"
    pl.DataFrame({
        'example_id': [1, 1],
        'user_id': ['a', 'b'],
        'item_id': ['x', 'y'],
        'label': [1.0, -1.0],
    }).write_parquet(path)

    with pytest.raises(ValueError):
        load_training_split(path)


def test_load_training_split_missing_label(tmp_path):
    path = tmp_path / "split.parquet"
    pl.DataFrame({'user_id': ['a'], 'item_id': ['x']}).write_parquet(path)

    with pytest.raises(ValueError):
        load_training_split(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_training_split(tmp_path / "nope.parquet")
    with pytest.raises(FileNotFoundError):
        load_rating_summary(tmp_path / "nope.parquet")
    with pytest.raises(FileNotFoundError):
        load_bias_model(tmp_path / "nope.json")


def test_load_rating_summary(artifacts_dir):
    summary = load_rating_summary(artifacts_dir / "popularity" / "item_rating_counts.parquet")

    assert summary.item_rating_count('i1') == 1000
    assert summary.item_rating_count('i3') == 0
    assert summary.item_rating_count('unknown') == 0


def test_load_rating_summary_missing_column(tmp_path):
    path = tmp_path / "counts.parquet"
    pl.DataFrame({'item_id': ['x'], 'count': [3]}).write_parquet(path)

    with pytest.raises(ValueError):
        load_rating_summary(path)


def test_load_bias_model(artifacts_dir):
    bias = load_bias_model(artifacts_dir / "bias" / "bias_model.json")

    assert bias.intercept() == 3.0
    assert bias.user_bias('u1') == 0.2
    assert bias.item_bias('i2') == -0.4
    assert bias.user_bias('unknown') == 0.0
    assert bias.item_bias('i3') == 0.0


def test_load_bias_model_requires_intercept(tmp_path):
    path = tmp_path / "bias.json"
    path.write_text(json.dumps({'user_biases': {}}), encoding='utf-8')

    with pytest.raises(ValueError):
        load_bias_model(path)


def test_integer_ids_are_loaded_as_strings(tmp_path):
    split_path = tmp_path / "split.parquet"
    pl.DataFrame({'user_id': [1], 'item_id': [10], 'label': [1.0]}).write_parquet(split_path)
    counts_path = tmp_path / "counts.parquet"
    pl.DataFrame({'item_id': [10], 'rating_number': [100]}).write_parquet(counts_path)

    example = load_training_split(split_path).tuning_examples()[0]
    summary = load_rating_summary(counts_path)

    assert example.user_id == '1'
    assert example.item_id == '10'
    assert summary.item_rating_count('10') == 100
    assert summary.item_rating_count(10) == 0
