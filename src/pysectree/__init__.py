# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:36:20
# @Author : Kariko Lin

import logging

from .tree import (
    MISSING,
    ConfigParser,
    FileOpenError,
    FrozenNodeError,
    MissingNode,
    Node,
    SectionTree,
    SectionTreeParser,
    dump_yaml,
    to_dict
)
from .values import (
    DecodeError,
    Kind,
    MalformedBracket,
    MalformedNumber,
    MalformedTuple,
    Shape,
    UnmatchedBracket,
    UnsupportedShape,
    decode,
    shape_of
)

__all__ = [
    'ConfigParser', 'SectionTreeParser', 'SectionTree',
    'Node', 'MissingNode', 'MISSING',
    'FileOpenError', 'FrozenNodeError',
    'decode', 'shape_of', 'Shape', 'Kind',
    'DecodeError', 'MalformedBracket', 'UnmatchedBracket',
    'MalformedNumber', 'MalformedTuple', 'UnsupportedShape',
    'to_dict', 'dump_yaml'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
