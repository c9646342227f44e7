# -*- encoding: utf-8 -*-
# @File   : shape.py
# @Time   : 2024/10/12 22:03:51
# @Author : Kariko Lin

"""Requested shapes for the value decoder.

Values in a section file are stored verbatim, thus the *caller* decides what
a value looks like, by a plain type hint:

    ```python
    node.get('threads', int)
    node.get('point1', tuple[int, int, int])
    node.get('2d_vector', list[list[int]])
    ```

The hint is compiled once into a `Shape`, a small closed set of kinds the
decoder knows how to walk. Nothing is sniffed from the text itself, so
asking for `list[int]` on a nested array is an error rather than a guess.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, get_args, get_origin, get_type_hints


class UnsupportedShape(TypeError):
    """The decoder has no way to produce the requested type."""
    pass


class Kind(str, Enum):
    INT = 'int'
    FLOAT = 'float'
    STR = 'str'
    BOOL = 'bool'
    TUPLE = 'tuple'
    ARRAY = 'array'
    CUSTOM = 'custom'  # plain converter callable


# kinds allowed as array elements. array literals are numeric only.
ARRAY_ELEMENTS = (Kind.INT, Kind.FLOAT, Kind.ARRAY)


@dataclass(frozen=True)
class Shape:
    kind: Kind
    # tuple fields in order, or the single array element.
    fields: tuple['Shape', ...] = ()
    # NamedTuple class for tuples, the converter for CUSTOM.
    factory: Callable[..., Any] | None = None

    @classmethod
    def array_of(cls, element: 'Shape') -> 'Shape':
        if element.kind not in ARRAY_ELEMENTS:
            raise UnsupportedShape(
                f'array elements must be numbers or arrays, not {element}')
        return cls(Kind.ARRAY, (element,))

    @classmethod
    def tuple_of(
        cls, *fields: 'Shape',
        factory: Callable[..., Any] | None = None
    ) -> 'Shape':
        if not fields:
            raise UnsupportedShape('a tuple needs at least one field')
        return cls(Kind.TUPLE, fields, factory)

    @property
    def element(self) -> 'Shape':
        """Element shape of an array."""
        if self.kind is not Kind.ARRAY:
            raise AttributeError(f'{self} is not an array shape')
        return self.fields[0]

    @property
    def nested(self) -> bool:
        """Whether this is an array of arrays."""
        return self.kind is Kind.ARRAY and self.element.kind is Kind.ARRAY

    def __str__(self) -> str:
        match self.kind:
            case Kind.ARRAY:
                return f'list[{self.element}]'
            case Kind.TUPLE if self.factory is not None:
                return self.factory.__name__
            case Kind.TUPLE:
                return 'tuple[%s]' % ', '.join(str(i) for i in self.fields)
            case Kind.CUSTOM:
                return getattr(self.factory, '__name__', repr(self.factory))
            case _:
                return self.kind.value


INT = Shape(Kind.INT)
FLOAT = Shape(Kind.FLOAT)
STR = Shape(Kind.STR)
BOOL = Shape(Kind.BOOL)

_SCALARS: dict[Any, Shape] = {int: INT, float: FLOAT, str: STR, bool: BOOL}


def _is_namedtuple(hint: Any) -> bool:
    return (isinstance(hint, type)
            and issubclass(hint, tuple)
            and hasattr(hint, '_fields'))


@lru_cache(maxsize=None)
def _compile(hint: Any) -> Shape:
    if hint in _SCALARS:
        return _SCALARS[hint]

    origin = get_origin(hint)
    if origin is list:
        args = get_args(hint)
        if len(args) != 1:
            raise UnsupportedShape(f'{hint!r} needs exactly one element type')
        return Shape.array_of(_compile(args[0]))
    if origin is tuple:
        args = get_args(hint)
        if Ellipsis in args:
            raise UnsupportedShape(
                f'{hint!r}: only fixed-size tuples are supported')
        return Shape.tuple_of(*(_compile(i) for i in args))
    if origin is not None:
        raise UnsupportedShape(f'cannot decode values as {hint!r}')

    if _is_namedtuple(hint):
        # plain collections.namedtuple has no annotations, str then.
        types = get_type_hints(hint)
        return Shape.tuple_of(
            *(_compile(types.get(i, str)) for i in hint._fields),
            factory=hint)
    if hint in (list, tuple):
        raise UnsupportedShape(
            f'bare {hint.__name__} says nothing about its elements, '
            f'try e.g. {hint.__name__}[int]')
    if callable(hint):
        return Shape(Kind.CUSTOM, factory=hint)
    raise UnsupportedShape(f'cannot decode values as {hint!r}')


def shape_of(hint: Any) -> Shape:
    """Compile a type hint (or pass a `Shape` through) into a `Shape`.

    Raises `UnsupportedShape` for hints out of the closed set, e.g.
    `tuple[int, ...]`, `list[str]` or `dict[str, int]`.
    """
    if isinstance(hint, Shape):
        return hint
    try:
        hash(hint)
    except TypeError:
        raise UnsupportedShape(f'unhashable type hint {hint!r}') from None
    return _compile(hint)
