# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 00:11:37
# @Author : Kariko Lin

from .model import (
    MISSING,
    FrozenNodeError,
    MissingNode,
    Node,
    SectionTree
)
from .parser import ConfigParser, FileOpenError, SectionTreeParser
from .export import dump_yaml, to_dict
