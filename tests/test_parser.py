import logging

import pytest

from pysectree import (
    MISSING,
    ConfigParser,
    DecodeError,
    FileOpenError,
    FrozenNodeError,
    SectionTreeParser,
    UnmatchedBracket,
)
from pysectree.tree.parser import count_indent


def test_basic_file_operations(sample_file, tmp_path) -> None:
    parser = ConfigParser()
    assert parser.parse(str(sample_file))
    assert not parser.parse(str(tmp_path / "nonexistent_file.txt"))


def test_failed_parse_clears_previous_tree(parser, tmp_path, caplog) -> None:
    assert parser["system"]
    with caplog.at_level(logging.ERROR):
        assert not parser.parse(str(tmp_path / "nonexistent_file.txt"))
    assert len(parser.tree) == 0
    assert not parser["system"]
    assert "Failed to open file" in caplog.text
    assert "nonexistent_file.txt" in caplog.text


def test_read_raises_file_open_error(tmp_path) -> None:
    with pytest.raises(FileOpenError) as e:
        SectionTreeParser(str(tmp_path / "nope.conf")).read()
    assert isinstance(e.value, OSError)
    assert "nope.conf" in str(e.value)


def test_integer_parsing(parser) -> None:
    system = parser["system"]
    assert system
    assert system.get("threads", int) == 4
    assert system.get("memory_limit", int) == 1024
    assert system.get("hex_value", int) == 255
    assert system.get("debug_mode", bool) is True


def test_vector_parsing(parser) -> None:
    graphics = parser["graphics"]
    assert graphics
    assert graphics.get("resolution", list[int]) == [1920, 1080]
    assert graphics.get("refresh_rate", int) == 60


def test_nested_section_parsing(parser) -> None:
    server = parser["network"]["server"]
    assert server
    assert server.get("host", str) == "localhost"
    assert server.get("port", int) == 8080
    assert parser.lookup("network", "server") is server
    # pairs under [server] did not leak into [network]
    assert dict(parser["network"].properties) == {}


def test_space_separated_tuple_parsing(parser) -> None:
    coords = parser["coordinates"]
    assert coords
    assert coords.get("point1", tuple[int, int, int]) == (100, 200, 300)
    all_points = coords.get_all_like(tuple[int, int, int])
    assert len(all_points) == 2
    assert all_points["point2"][0] == 150


def test_complex_data_type_parsing(parser) -> None:
    types = parser["types_test"]
    assert types
    assert types.get("string_value", str) == "Hello World"
    assert types.get("int_value", int) == 42
    assert types.get("float_value", float) == 3.14159
    assert types.get("hex_number", int) == 0xAB

    vec = types.get("vector_nums", list[float])
    assert len(vec) == 4 and vec[0] == 1.0

    vec2d = types.get("2d_vector", list[list[int]])
    assert len(vec2d) == 3
    assert vec2d[0] == [1, 2]

    vec3d = types.get("3d_vector", list[list[list[int]]])
    assert len(vec3d) == 2
    assert len(vec3d[0]) == 1 and len(vec3d[0][0]) == 2
    assert vec3d[0][0][0] == 3 and vec3d[1][0][0] == 1

    mixed = types.get("tuple_value", tuple[int, float, str])
    assert mixed == (1, 3.14, "hello")


def test_invalid_key_access(parser) -> None:
    assert not parser["nonexistent"]
    assert parser["nonexistent"] is MISSING
    assert parser["system"].get("nonexistent", int) is None
    assert parser["system"].get("threads", str) == "4"


def test_nested_key_traversal(parser) -> None:
    assert parser["network"]
    assert parser["network"]["server"]
    assert not parser["network"]["nonexistent"]
    assert not parser["network"]["server"]["nonexistent"]
    assert not parser["nonexistent"]["server"]["nonexistent"]


def test_malformed_input_handling(parser) -> None:
    malformed = parser["malformed"]
    assert malformed.get("empty", list[list[int]]) == [[]]
    with pytest.raises(DecodeError):
        malformed.get("missingbr", list[int])
    with pytest.raises(UnmatchedBracket):
        malformed.get("missingbr", list[list[int]])


def test_implicit_root(parser) -> None:
    root = parser[""]
    assert root
    assert dict(root.properties) == {}
    assert len(root) == 0


def test_parsed_tree_is_frozen(parser) -> None:
    with pytest.raises(FrozenNodeError):
        parser["system"].set_value("threads", "8")


def test_count_indent() -> None:
    assert count_indent("[a]") == 0
    assert count_indent("    [a]") == 4
    assert count_indent("\t[a]") == 4
    assert count_indent("\t  [a]") == 6
    assert count_indent("  \t") == 6


def test_nesting_by_indent(read_text) -> None:
    tree = read_text(
        "[a]\n"
        "    [b]\n"
        "        [c]\n"
        "            k: v\n"
        "    [d]\n"
        "[e]\n"
    )
    assert tree.lookup("a", "b", "c").get("k") == "v"
    assert tree["a"]["d"]
    assert "d" not in tree["a"]["b"]
    assert tree["e"]
    assert not tree["a"]["e"]


def test_dedent_closes_several_levels(read_text) -> None:
    tree = read_text(
        "[a]\n"
        "    [b]\n"
        "        [c]\n"
        "    [d]\n"
        "        [e]\n"
        "[f]\n"
        "    [g]\n"
    )
    assert list(tree["a"]) == ["b", "d"]
    assert list(tree["a"]["d"]) == ["e"]
    assert list(tree["f"]) == ["g"]


def test_tabs_count_as_four(read_text) -> None:
    tree = read_text("[a]\n\t[b]\n\t\tk: v\n")
    assert tree["a"]["b"].get("k") == "v"


def test_pairs_go_to_latest_section(read_text) -> None:
    tree = read_text(
        "[a]\n"
        "    [b]\n"
        "    x: 1\n"
        "y: 2\n"
    )
    assert dict(tree["a"]["b"].properties) == {"x": "1", "y": "2"}
    assert dict(tree["a"].properties) == {}


def test_pairs_stay_with_latest_header_after_skipped_line(read_text) -> None:
    # the skipped line dedents to [a], but [b] is still the latest header
    tree = read_text(
        "[a]\n"
        "    [b]\n"
        "    stray words\n"
        "    k: v\n"
    )
    assert dict(tree["a"]["b"].properties) == {"k": "v"}
    assert dict(tree["a"].properties) == {}


def test_later_header_after_skipped_line_nests_by_indent(read_text) -> None:
    tree = read_text(
        "[a]\n"
        "    [b]\n"
        "    stray words\n"
        "    [c]\n"
        "    k: v\n"
    )
    assert list(tree["a"]) == ["b", "c"]
    assert dict(tree["a"]["c"].properties) == {"k": "v"}
    assert dict(tree["a"]["b"].properties) == {}


def test_pair_before_any_section_is_dropped(read_text) -> None:
    tree = read_text("orphan: 1\n[a]\n    k: v\n")
    assert dict(tree[""].properties) == {}
    assert dict(tree["a"].properties) == {"k": "v"}


def test_comments_and_blank_lines(read_text) -> None:
    tree = read_text(
        "# leading comment\n"
        "\n"
        "[a]\n"
        "    # indented comment: not a pair\n"
        "    \t \n"
        "    k: v\n"
    )
    assert dict(tree["a"].properties) == {"k": "v"}


def test_unknown_lines_are_skipped(read_text) -> None:
    tree = read_text("[a]\n    just some words\n    k: v\n")
    assert dict(tree["a"].properties) == {"k": "v"}
    assert len(tree["a"]) == 0


def test_pairs_split_at_first_colon(read_text) -> None:
    tree = read_text("[a]\n  url :  http://localhost:8080  \n  empty:\n")
    a = tree["a"]
    assert a.get("url") == "http://localhost:8080"
    assert a.get("empty") == ""
    assert a.get_all_like() == {"url": "http://localhost:8080"}


def test_colon_header_inside_section_is_a_pair(read_text) -> None:
    tree = read_text("[a]\n[b:c]\n")
    assert tree["a"].get("[b") == "c]"
    assert not tree["b:c"]


def test_crlf_lines(read_text) -> None:
    tree = read_text("[a]\r\n    k: v\r\n")
    assert tree["a"].get("k") == "v"


def test_redefined_section_warns(read_text) -> None:
    with pytest.warns(UserWarning):
        tree = read_text("[a]\n    k: 1\n[a]\n    k: 2\n")
    assert tree["a"].get("k", int) == 2


def test_declared_encoding(tmp_path) -> None:
    path = tmp_path / "gbk.conf"
    path.write_bytes("[系统]\n    名称: 测试\n".encode("gbk"))
    parser = ConfigParser(encoding="gbk")
    assert parser.parse(str(path))
    assert parser["系统"].get("名称") == "测试"


def test_undeclared_encoding_falls_back(tmp_path) -> None:
    path = tmp_path / "gbk.conf"
    text = (
        "[系统设置]\n"
        "    名称: \"中文配置文件测试\"\n"
        "    说明: 这是一个使用国标编码保存的配置文件，用于检验编码回退。\n"
        "    [显示]\n"
        "        标题: 欢迎使用本程序\n"
    )
    path.write_bytes(text.encode("gbk"))
    parser = ConfigParser(encoding="utf-8")
    assert parser.parse(str(path))
    assert parser["系统设置"].get("名称", str) == "中文配置文件测试"
    assert parser["系统设置"]["显示"].get("标题") == "欢迎使用本程序"


def test_utf8_bom_is_ignored(tmp_path) -> None:
    path = tmp_path / "bom.conf"
    path.write_bytes("\ufeff[a]\n    k: v\n".encode("utf-8"))
    parser = ConfigParser(encoding="utf-8")
    assert parser.parse(str(path))
    assert parser["a"].get("k") == "v"
    assert "\ufeff[a]" not in parser.tree


def test_bom_only_stripped_from_first_line(read_text) -> None:
    tree = read_text("\ufeff[a]\n    k: \ufeffv\n")
    assert tree["a"].get("k") == "\ufeffv"


def test_handler_keeps_filename(tmp_path) -> None:
    path = str(tmp_path / "app.conf")
    handler = SectionTreeParser(path, "utf-8")
    assert handler.filename == path
    assert str(handler) == f"Section tree: {path}(utf-8)"
