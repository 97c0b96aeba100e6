# -*- coding: utf-8 -*-
"""
id3py.data
==========

Records and datasets consumed by the tree learner.

A :class:`Dataset` is never created directly: records are fed one at a time
through a :class:`DatasetBuilder`, which validates each datum against the
dataset invariants (fixed feature length, exactly two labels) and only then
produces an immutable dataset.  Train/tune/test splits are derived from an
existing dataset with :meth:`Dataset.subset`, so every split shares the label
pair and the feature-value alphabet of the full universe.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence


class DatasetError(ValueError):
    """Raised when a datum or a dataset violates the dataset invariants."""


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Datum:
    """A single labelled example.

    Parameters
    ----------
    identifier : str
        Unique name of the record.  Used for traceability only.
    label : str
        Single-character class label.
    features : str
        One character per categorical feature.
    """

    identifier: str
    label: str
    features: str

    @property
    def n_features(self) -> int:
        return len(self.features)

    def feature(self, i: int) -> str:
        return self.features[i]

    def equal_features(self, other: "Datum") -> bool:
        return self.features == other.features


# -----------------------------------------------------------------------------
# Dataset
# -----------------------------------------------------------------------------
class Dataset:
    """Immutable ordered collection of :class:`Datum` objects.

    Attributes
    ----------
    records : tuple[Datum, ...]
        The records, in insertion order.
    feature_values : tuple[str, ...]
        Every character seen at any feature position, sorted.  Splits create
        one branch per entry, in this order.
    labels : tuple[str, str]
        The two class labels, sorted.  ``labels[0]`` is the reference label
        for entropy computations.
    n_features : int
        Common length of every record's feature string.
    """

    __slots__ = ("_records", "_feature_values", "_labels", "_n_features")

    def __init__(self, records: Sequence[Datum], feature_values: Sequence[str],
                 labels: Sequence[str], n_features: int):
        self._records = tuple(records)
        self._feature_values = tuple(feature_values)
        self._labels = tuple(labels)
        self._n_features = int(n_features)

    @property
    def records(self) -> tuple[Datum, ...]:
        return self._records

    @property
    def feature_values(self) -> tuple[str, ...]:
        return self._feature_values

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def n_features(self) -> int:
        return self._n_features

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Datum]:
        return iter(self._records)

    def __getitem__(self, i: int) -> Datum:
        return self._records[i]

    def __repr__(self) -> str:
        return (f"Dataset(n_records={len(self)}, n_features={self.n_features}, "
                f"labels={self.labels}, feature_values={self.feature_values})")

    def subset(self, indices: Iterable[int]) -> "Dataset":
        """Return the records at ``indices`` as a new dataset.

        The subset keeps this dataset's labels, feature values and feature
        count even if the selected records do not exhibit all of them.
        """
        return Dataset([self._records[int(i)] for i in indices],
                       self._feature_values, self._labels, self._n_features)

    def label_counts(self) -> dict[str, int]:
        counts = {lab: 0 for lab in self._labels}
        for d in self._records:
            counts[d.label] += 1
        return counts


class DatasetBuilder:
    """Incrementally assemble and validate a :class:`Dataset`.

    Each call to :meth:`add_datum` is checked before the datum is stored, so
    a rejected datum leaves the builder untouched.

    Examples
    --------
    >>> b = DatasetBuilder()
    >>> b.add_datum("rep-1", "D", "++-")
    >>> b.add_datum("rep-2", "R", "--+")
    >>> b.build().labels
    ('D', 'R')
    """

    def __init__(self):
        self._records: list[Datum] = []
        self._ids: set[str] = set()
        self._feature_values: set[str] = set()
        self._labels: set[str] = set()
        self._n_features: int | None = None

    def __len__(self) -> int:
        return len(self._records)

    def add_datum(self, identifier: str, label: str, features: str) -> None:
        identifier, label, features = str(identifier), str(label), str(features)
        if len(label) != 1:
            raise DatasetError(f"Datum {identifier!r}: label must be a single character, got {label!r}")
        if not features:
            raise DatasetError(f"Datum {identifier!r}: feature string is empty")
        if identifier in self._ids:
            raise DatasetError(f"Duplicate datum identifier {identifier!r}")
        if self._n_features is not None and len(features) != self._n_features:
            raise DatasetError(
                f"Datum {identifier!r} has {len(features)} features; "
                f"all data must have {self._n_features}")
        if label not in self._labels and len(self._labels) == 2:
            raise DatasetError(
                f"Datum {identifier!r} introduces a third label {label!r}; "
                f"only binary classification is supported (labels so far: {sorted(self._labels)})")

        self._records.append(Datum(identifier, label, features))
        self._ids.add(identifier)
        self._feature_values.update(features)
        self._labels.add(label)
        if self._n_features is None:
            self._n_features = len(features)

    def build(self) -> Dataset:
        if len(self._labels) < 2:
            raise DatasetError(
                f"The data contains {len(self._labels)} distinct label(s); "
                "a decision tree needs exactly two")
        return Dataset(self._records, sorted(self._feature_values),
                       sorted(self._labels), self._n_features)
