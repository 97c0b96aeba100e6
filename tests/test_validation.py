import numpy as np
import pytest
from id3py import DatasetBuilder, cross_validate, evaluate, induce, train_and_tune, train_tune_split


def _separable_dataset(n=20, seed=0):
    rng = np.random.RandomState(seed)
    b = DatasetBuilder()
    for i in range(n):
        label = "DR"[i % 2]
        features = ("+" if label == "D" else "-") + "".join(rng.choice(list("+-"), size=3))
        b.add_datum(f"rep-{i}", label, features)
    return b.build()


def _noisy_dataset(n=30, seed=0):
    rng = np.random.RandomState(seed)
    b = DatasetBuilder()
    for i in range(n):
        features = "".join(rng.choice(list("+-."), size=5))
        label = "D" if features[1] != "-" else "R"
        if i < 2:
            label = "DR"[i]
        elif rng.rand() < 0.25:
            label = "R" if label == "D" else "D"
        b.add_datum(f"rep-{i}", label, features)
    return b.build()


def test_train_tune_split_takes_every_fourth_record():
    ds = _separable_dataset(n=10)
    train, tune = train_tune_split(ds)
    assert [d.identifier for d in tune] == ["rep-0", "rep-4", "rep-8"]
    assert [d.identifier for d in train] == [f"rep-{i}" for i in (1, 2, 3, 5, 6, 7, 9)]
    assert train.feature_values == ds.feature_values


def test_train_tune_split_rejects_bad_spacing():
    with pytest.raises(ValueError):
        train_tune_split(_separable_dataset(), spacing=0)


def test_train_and_tune_without_pruning_uses_all_records():
    ds = _separable_dataset()
    tree = train_and_tune(ds, random_state=0, pruning=False)
    assert len(tree.root.data) == len(ds)
    tuned = train_and_tune(ds, random_state=0)
    assert len(tuned.root.data) == len(ds) - 5


def test_cross_validation_on_separable_data_is_perfect():
    assert cross_validate(_separable_dataset(), random_state=0) == 100.0


def test_cross_validation_is_reproducible_with_seed():
    ds = _noisy_dataset()
    first = cross_validate(ds, random_state=3)
    second = cross_validate(ds, random_state=3)
    assert first == second
    assert 0.0 <= first <= 100.0
    # mean of N single-record scores of 0 or 100
    hits = first * len(ds) / 100.0
    assert hits == pytest.approx(round(hits))


def test_cross_validation_needs_two_records():
    ds = _separable_dataset()
    with pytest.raises(ValueError):
        cross_validate(ds.subset([0]))


def test_cross_validation_with_two_records():
    b = DatasetBuilder()
    b.add_datum("a", "D", "+")
    b.add_datum("b", "R", "-")
    accuracy = cross_validate(b.build(), random_state=0)
    assert accuracy in (0.0, 50.0, 100.0)


def test_unpruned_tree_beats_pruned_on_training_data():
    ds = _noisy_dataset(seed=2)
    train, tune = train_tune_split(ds)
    unpruned = induce(train, random_state=0)
    pruned = train_and_tune(ds, random_state=0)
    assert evaluate(unpruned, train) >= evaluate(pruned, train)
