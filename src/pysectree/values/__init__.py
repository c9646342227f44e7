# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 22:02:40
# @Author : Kariko Lin

from .shape import Kind, Shape, UnsupportedShape, shape_of
from .decoder import (
    DecodeError,
    MalformedBracket,
    UnmatchedBracket,
    MalformedNumber,
    MalformedTuple,
    decode
)
