import io

import pytest

from csvreport.data_io import read_rows, upload_size
from csvreport.errors import SchemaError


def test_reads_path(tmp_path):
    p = tmp_path / "people.csv"
    p.write_text("name, age\nAlice, 30\nBob,\n", encoding="utf-8")
    assert read_rows(p) == [{"name": "Alice", "age": "30"}, {"name": "Bob", "age": ""}]


def test_values_stay_strings():
    rows = read_rows(b"code,flag\n007,NA\n010,null\n")
    assert rows == [{"code": "007", "flag": "NA"}, {"code": "010", "flag": "null"}]


def test_reads_file_like_without_consuming_it():
    buf = io.BytesIO(b"x\n1\n2\n")
    assert read_rows(buf) == [{"x": "1"}, {"x": "2"}]
    assert buf.tell() == 0


def test_utf8_bom_header():
    rows = read_rows("\ufeffa,b\n1,2\n".encode("utf-8"))
    assert list(rows[0]) == ["a", "b"]


def test_header_only_gives_no_rows():
    assert read_rows(b"a,b\n") == []


def test_empty_file_rejected():
    with pytest.raises(SchemaError):
        read_rows(b"   \n")


def test_malformed_csv_rejected():
    with pytest.raises(SchemaError):
        read_rows(b'a,b\n"1,2\n3,4,5,6\n')


def test_upload_size():
    assert upload_size(b"abc") == 3
    assert upload_size(io.BytesIO(b"abcd")) == 4


def test_headers_colliding_after_trim_rejected():
    with pytest.raises(SchemaError, match="duplicate"):
        read_rows(b"a ,a\n1,x\n2,y\n")


def test_repeated_header_keeps_both_columns():
    rows = read_rows(b"a,a\n1,x\n")
    assert len(rows[0]) == 2
