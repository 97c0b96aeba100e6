import os

import numpy as np
import pytest
from sklearn.base import clone
from id3py import ID3Classifier, TreeStructureError


def _tiny_dataset():
    """Eight rows, four binary features; feature 0 separates the two classes."""
    X = ["++-+", "+-+-", "++--", "+-++", "+++-", "-+-+", "--+-", "-+--"]
    y = np.array(["D", "D", "D", "D", "D", "R", "R", "R"])
    return X, y


def test_classifier_smoke():
    X, y = _tiny_dataset()
    clf = ID3Classifier(random_state=0)
    clf.fit(X, y)
    pred = clf.predict(X)
    assert pred.shape == y.shape
    assert list(clf.classes_) == ["D", "R"]
    assert clf.n_features_ == 4


def test_classifier_fits_separable_data():
    X, y = _tiny_dataset()
    clf = ID3Classifier(pruning=False, random_state=0).fit(X, y)
    assert clf.score(X, y) == 1.0
    assert clf.tree_.root.split_feature == 0


def test_classifier_accepts_character_rows():
    X, y = _tiny_dataset()
    X_chars = np.array([list(row) for row in X], dtype=object)
    clf = ID3Classifier(random_state=0).fit(X, y)
    clf_chars = ID3Classifier(random_state=0).fit(X_chars, y)
    assert list(clf.predict(X)) == list(clf_chars.predict(X_chars))


def test_classifier_rejects_bad_input():
    X, y = _tiny_dataset()
    with pytest.raises(ValueError):
        ID3Classifier().fit([["ab", "+"], ["-", "-"]], ["D", "R"])
    with pytest.raises(ValueError):
        ID3Classifier().fit(X, y[:-1])
    with pytest.raises(ValueError):
        ID3Classifier().fit(X, np.array(["D", "R", "I", "D", "D", "R", "R", "R"]))
    clf = ID3Classifier(random_state=0).fit(X, y)
    with pytest.raises(ValueError):
        clf.predict(["++"])
    with pytest.raises(TreeStructureError):
        clf.predict(["?+-+"])


def test_classifier_params_round_trip():
    clf = ID3Classifier(pruning=False, tune_spacing=3, random_state=5)
    assert clf.get_params() == {"pruning": False, "tune_spacing": 3,
                                "random_state": 5, "feature_names": None}
    assert clone(clf).get_params() == clf.get_params()


def test_classifier_not_fitted_raises():
    clf = ID3Classifier()
    with pytest.raises(ValueError):
        clf.predict(["++-+"])
    with pytest.raises(ValueError):
        clf.export_rules()
    with pytest.raises(ValueError):
        clf.print_tree()


def test_classifier_rule_export_and_print(capsys):
    X, y = _tiny_dataset()
    clf = ID3Classifier(random_state=0, feature_names=["a", "b", "c", "d"]).fit(X, y)
    rules = clf.export_rules()
    assert len(rules) > 0
    assert all("=>" in r for r in rules)
    clf.print_tree()
    out = capsys.readouterr().out
    assert out.startswith("  a (6 records)")


def test_classifier_graphviz_export(tmp_path):
    pytest.importorskip("graphviz")
    X, y = _tiny_dataset()
    clf = ID3Classifier(random_state=0).fit(X, y)
    source = clf.export_graphviz()
    assert "digraph" in source
    assert "X[0]" in source
    out_path = clf.export_graphviz(str(tmp_path / "tree"), format="dot")
    assert out_path.endswith(".dot")
    assert os.path.exists(out_path)


def test_classifier_keeps_integer_labels():
    X, _ = _tiny_dataset()
    y = np.array([0, 0, 0, 0, 0, 1, 1, 1])
    clf = ID3Classifier(pruning=False, random_state=0).fit(X, y)
    assert clf.classes_.dtype.kind == "i"
    assert list(clf.classes_) == [0, 1]
    pred = clf.predict(X)
    assert pred.dtype.kind == "i"
    assert list(pred) == list(y)
    assert clf.score(X, y) == 1.0


def test_classifier_keeps_multi_character_labels():
    X, _ = _tiny_dataset()
    y = np.array(["yes"] * 5 + ["no"] * 3)
    clf = ID3Classifier(pruning=False, random_state=0).fit(X, y)
    assert list(clf.classes_) == ["no", "yes"]
    assert list(clf.predict(["++++", "----"])) == ["yes", "no"]
    assert clf.score(X, y) == 1.0
    assert sorted(clf.export_rules()) == ["X[0] = + => yes", "X[0] = - => no"]


def test_classifier_prints_original_labels(capsys):
    X, _ = _tiny_dataset()
    clf = ID3Classifier(pruning=False, random_state=0).fit(X, [10] * 5 + [20] * 3)
    clf.print_tree()
    out = capsys.readouterr().out.splitlines()
    assert out == ["  X[0] (8 records)", "  + 10 (5 records)", "  - 20 (3 records)"]
