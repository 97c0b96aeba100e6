# -*- coding: utf-8 -*-
"""
id3py.io
========

Reading datasets from tab-delimited text.  Each line holds one record::

    <identifier>\\t<label>\\t<feature string>

for example ``rep-12	D	++-.+-+-++``.
"""

from __future__ import annotations
import csv
import logging
from pathlib import Path

import pandas as pd

from .data import Dataset, DatasetBuilder, DatasetError

logger = logging.getLogger(__name__)

N_FIELDS = 3


class DatasetFormatError(DatasetError):
    """Raised when an input file does not follow the record line format."""


def read_tsv(path) -> Dataset:
    """
    Parse a tab-delimited record file into a :class:`Dataset`.

    Parameters
    ----------
    path : str or os.PathLike
        File to read.

    Returns
    -------
    Dataset

    Raises
    ------
    OSError
        If ``path`` does not exist or cannot be read as a file.
    DatasetFormatError
        If the file is empty or not UTF-8 text, or if a line does not hold
        exactly three non-empty fields.
    DatasetError
        If the records violate the dataset invariants.
    """
    path = Path(path)
    logger.info("Parsing file at %s", path)
    try:
        frame = pd.read_csv(path, sep="\t", header=None, dtype=str, na_filter=False,
                            quoting=csv.QUOTE_NONE, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        raise DatasetFormatError(f"{path} contains no records") from None
    except pd.errors.ParserError as exc:
        raise DatasetFormatError(f"Malformed line in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DatasetFormatError(f"{path} is not UTF-8 text: {exc}") from exc

    if frame.shape[1] != N_FIELDS:
        raise DatasetFormatError(
            f"{path}: expected {N_FIELDS} tab-separated fields per line, found {frame.shape[1]}")

    builder = DatasetBuilder()
    for recno, fields in enumerate(frame.itertuples(index=False, name=None), start=1):
        if any(pd.isna(v) or v == "" for v in fields):
            raise DatasetFormatError(
                f"{path}, record {recno}: expected {N_FIELDS} non-empty fields, got {list(fields)}")
        identifier, label, features = fields
        builder.add_datum(identifier, label, features)

    dataset = builder.build()
    logger.info("Read %d records with %d features, labels %s",
                len(dataset), dataset.n_features, "/".join(dataset.labels))
    return dataset
