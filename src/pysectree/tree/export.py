# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/14 20:37:58
# @Author : Kariko Lin

"""Plain `dict` and YAML views of a parsed tree, mostly to eyeball it.

Values stay raw strings, as they are in the file. Nothing is decoded,
so the views tell exactly what a `get()` would start from.
"""

from typing import Any, TextIO
from warnings import warn

import yaml

from .consts import IMPLICIT_ROOT
from .model import Node, SectionTree


def _node_to_dict(node: Node) -> dict[str, Any]:
    ret: dict[str, Any] = dict(node.properties)
    for name, child in node.children.items():
        if name in ret:
            warn(f'{node} has both a pair and a child named "{name}", '
                 'only the child is kept.')
        ret[name] = _node_to_dict(child)
    return ret


def to_dict(src: SectionTree | Node) -> dict[str, Any]:
    """Nest sections as dicts, pairs as `str: str`.

    The implicit root is left out unless something got into it.
    """
    if isinstance(src, Node):
        return _node_to_dict(src)
    ret: dict[str, Any] = {}
    for name, node in src.items():
        if name == IMPLICIT_ROOT and not (node.properties or node.children):
            continue
        ret[name] = _node_to_dict(node)
    return ret


def dump_yaml(
    src: SectionTree | Node,
    stream: TextIO | None = None,
    indent: int = 2
) -> str | None:
    """Dump `to_dict(src)` as YAML, into `stream` or as the returned str."""
    return yaml.safe_dump(
        to_dict(src), stream,
        indent=indent,
        sort_keys=False,  # keep file order
        allow_unicode=True,
        default_flow_style=False)
