from io import StringIO

import pytest

from pysectree import ConfigParser, SectionTreeParser

SAMPLE = """
[system]
    threads: 4
    memory_limit: 1024
    debug_mode: true
    hex_value: 0xFF

[graphics]
    resolution: [1920, 1080]
    refresh_rate: 60
    vsync: true

[network]
    [server]
    host: localhost
    port: 8080
    max_connections: 100

[coordinates]
    point1: 100 200 300
    point2: 150 250 350

[types_test]
    string_value: "Hello World"
    int_value: 42
    float_value: 3.14159
    hex_number: 0xAB
    vector_nums: [1.0, 2.0, 3.0, 4.0]
    2d_vector: [[1, 2], [3, 4], [5, 6]]
    3d_vector: [[[3,4]],[[1,2]]]
    tuple_value: 1 3.14 "hello"

[malformed]
    empty: [[]]
    missingbr: [[1,2,3][1,3]
"""


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "test_config.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def parser(sample_file):
    ret = ConfigParser()
    assert ret.parse(str(sample_file))
    return ret


@pytest.fixture
def read_text():
    def _read(text: str):
        return SectionTreeParser.readstream(StringIO(text))
    return _read
