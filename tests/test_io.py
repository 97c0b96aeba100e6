import pytest
from id3py import DatasetError, DatasetFormatError, read_tsv


def _write(tmp_path, text, name="votes.tsv"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_read_tsv(tmp_path):
    path = _write(tmp_path, "rep-1\tD\t++-.\nrep-2\tR\t--+.\nrep-3\tD\t+-+-\n")
    ds = read_tsv(path)
    assert len(ds) == 3
    assert ds.labels == ("D", "R")
    assert ds.n_features == 4
    assert ds.feature_values == ("+", "-", ".")
    assert ds[0].identifier == "rep-1"
    assert ds[2].features == "+-+-"


def test_read_tsv_keeps_values_as_text(tmp_path):
    path = _write(tmp_path, "001\t1\t0101\n002\t0\tNA01\n")
    ds = read_tsv(path)
    assert ds[0].identifier == "001"
    assert ds.labels == ("0", "1")
    assert ds[1].features == "NA01"


def test_read_tsv_missing_field(tmp_path):
    path = _write(tmp_path, "rep-1\tD\t++\nrep-2\tR\nrep-3\tD\t+-\n")
    with pytest.raises(DatasetFormatError):
        read_tsv(path)


def test_read_tsv_extra_field(tmp_path):
    path = _write(tmp_path, "rep-1\tD\t++\nrep-2\tR\t--\textra\n")
    with pytest.raises(DatasetFormatError):
        read_tsv(path)


def test_read_tsv_empty_file(tmp_path):
    with pytest.raises(DatasetFormatError):
        read_tsv(_write(tmp_path, ""))


def test_read_tsv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_tsv(tmp_path / "nope.tsv")


def test_read_tsv_single_label(tmp_path):
    path = _write(tmp_path, "rep-1\tD\t++\nrep-2\tD\t--\n")
    with pytest.raises(DatasetError):
        read_tsv(path)


def test_read_tsv_inconsistent_feature_length(tmp_path):
    path = _write(tmp_path, "rep-1\tD\t++\nrep-2\tR\t---\n")
    with pytest.raises(DatasetError):
        read_tsv(path)


def test_read_tsv_rejects_non_utf8(tmp_path):
    path = tmp_path / "latin1.tsv"
    path.write_bytes(b"rep-1\tD\t+\nrep-2\tR\t-\xff\n")
    with pytest.raises(DatasetFormatError):
        read_tsv(path)
