# id3py/__init__.py
"""
id3py: ID3 decision trees with reduced-error pruning for binary labels.

Exports:
    - DatasetBuilder, Dataset, Datum
    - induce, prune, evaluate, cross_validate
    - ID3Classifier (scikit-learn style)
"""
from .data import Datum, Dataset, DatasetBuilder, DatasetError
from .tree import (
    DecisionTree,
    TreeNode,
    TreeStructureError,
    binary_entropy,
    entropy,
    evaluate,
    induce,
    information_gain,
    render_tree,
    split_records,
)
from .pruning import prune
from .validation import cross_validate, train_and_tune, train_tune_split
from .io import DatasetFormatError, read_tsv
from .classifier import ID3Classifier

__all__ = [
    "Datum",
    "Dataset",
    "DatasetBuilder",
    "DatasetError",
    "DatasetFormatError",
    "DecisionTree",
    "TreeNode",
    "TreeStructureError",
    "binary_entropy",
    "entropy",
    "information_gain",
    "split_records",
    "induce",
    "prune",
    "evaluate",
    "cross_validate",
    "train_and_tune",
    "train_tune_split",
    "render_tree",
    "read_tsv",
    "ID3Classifier",
]
__version__ = "0.1.0"
