import pytest


@pytest.fixture
def linear_rows():
    return [{"a": "1", "b": "2"}, {"a": "2", "b": "4"}, {"a": "3", "b": "6"}]


@pytest.fixture
def mixed_rows():
    return [
        {"name": "Alice", "age": "30"},
        {"name": "Bob", "age": "25"},
        {"name": "Charlie", "age": ""},
    ]
