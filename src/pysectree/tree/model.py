# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/13 00:20:44
# @Author : Kariko Lin

"""
Section tree, nested by indentation:

    ```
    [network]
        [server]
            host: localhost
            port: 8080
    ```

Pairs are kept as raw strings and decoded on each `get()`, so the same value
may be read as `str` here and `int` there.

Looking up something absent never raises. It gives `MISSING`, which is falsy
and may be indexed further, so `tree['network']['server']['tls']` is safe
to test with a plain `if`.
"""

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any
from warnings import warn

from ..values import decode
from .consts import IMPLICIT_ROOT


class FrozenNodeError(RuntimeError):
    """To stop writes into a tree that has finished parsing."""
    pass


class MissingNode:
    """Result of a failed lookup. Falsy, and chaining on it stays missing."""
    __slots__ = ()
    __instance: 'MissingNode | None' = None

    def __new__(cls) -> 'MissingNode':
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __bool__(self) -> bool:
        return False

    def __getitem__(self, name: str) -> 'MissingNode':
        return self

    def child(self, name: str) -> 'MissingNode':
        return self

    def get(self, key: str, converter: Any = str, default: Any = None) -> Any:
        return default

    def get_all_like(self, converter: Any = str) -> dict[str, Any]:
        return {}

    @property
    def properties(self) -> Mapping[str, str]:
        return MappingProxyType({})

    @property
    def children(self) -> Mapping[str, 'Node']:
        return MappingProxyType({})

    def __contains__(self, name: object) -> bool:
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return '<missing node>'


MISSING = MissingNode()


class Node:
    """一个小节：自己的键值对（原样保存的字符串），以及下属的子小节。

    `node[name]` 取子小节，取不到时返回`MISSING`；
    `node.get(key, T)` 取键值并按`T`解析。
    """
    def __init__(self, path: Sequence[str] = ()) -> None:
        self._path = tuple(path)
        self._pairs: dict[str, str] = {}
        self._children: dict[str, Node] = {}
        self._frozen = False

    @property
    def name(self) -> str:
        return self._path[-1] if self._path else IMPLICIT_ROOT

    @property
    def path(self) -> tuple[str, ...]:
        """Section names from the root down to this node, both included."""
        return self._path

    @property
    def properties(self) -> Mapping[str, str]:
        return MappingProxyType(self._pairs)

    @property
    def children(self) -> Mapping[str, 'Node']:
        return MappingProxyType(self._children)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, key: str, converter: Any = str, default: Any = None) -> Any:
        """Decode the value of `key` as `converter`.

        `converter` is a type hint like `int`, `tuple[int, float, str]` or
        `list[list[int]]`; any other callable gets the raw string.
        Returns `default` if there is no such key. A value that cannot be
        decoded raises `DecodeError`, it is not the same thing as missing.
        """
        if key not in self._pairs:
            return default
        return decode(self._pairs[key], converter)

    def get_all_like(self, converter: Any = str) -> dict[str, Any]:
        """Decode every non-empty value of this section as `converter`."""
        return {k: decode(v, converter) for k, v in self._pairs.items() if v}

    def _check_frozen(self) -> None:
        if self._frozen:
            raise FrozenNodeError(f'{self} is read only after parsing.')

    def set_value(self, key: str, value: str) -> None:
        self._check_frozen()
        self._pairs[key] = value

    def add_child(self, name: str) -> 'Node':
        """Create a child section, replacing any previous one of that name."""
        self._check_frozen()
        if name in self._children:
            warn(f'{self} already has a child [{name}], '
                 'the old one will be replaced.')
        self._children[name] = ret = Node(self._path + (name,))
        return ret

    def freeze(self) -> None:
        for i in self.walk():
            i._frozen = True

    def child(self, name: str) -> 'Node | MissingNode':
        return self._children.get(name, MISSING)

    def __getitem__(self, name: str) -> 'Node | MissingNode':
        return self.child(name)

    def walk(self) -> Iterator['Node']:
        """Depth first, this node and then each child subtree in order."""
        stack: list[Node] = [self]
        while stack:
            i = stack.pop()
            yield i
            stack.extend(reversed(i._children.values()))

    # an empty section is still a section.
    def __bool__(self) -> bool:
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __str__(self) -> str:
        return '[%s]' % '/'.join(self._path)

    def __repr__(self) -> str:
        return '%s { .pairs = %d, .children = %d }' % (
            self, len(self._pairs), len(self._children))


class SectionTree:
    """整个配置文件：顶层小节名到其节点的映射（即根注册表）。

    另有一个名为空串的隐式根节点，表示第一个小节之前的部分。
    但游离键值对并不会记在它下面，所以它总是空的。
    """
    def __init__(self) -> None:
        self.__roots: dict[str, Node] = {}

    def __getitem__(self, name: str) -> Node | MissingNode:
        return self.__roots.get(name, MISSING)

    def lookup(self, *path: str) -> Node | MissingNode:
        """Follow `path` from a top level section, e.g.
        `tree.lookup('network', 'server')`."""
        if not path:
            return MISSING
        ret = self[path[0]]
        for i in path[1:]:
            ret = ret[i]
        return ret

    def add_root(self, name: str) -> Node:
        if name in self.__roots and name != IMPLICIT_ROOT:
            warn(f'Section [{name}] is defined again, '
                 'the old one will be replaced.')
        self.__roots[name] = ret = Node((name,) if name else ())
        return ret

    def __contains__(self, name: object) -> bool:
        return name in self.__roots

    def __iter__(self) -> Iterator[str]:
        return iter(self.__roots)

    def __len__(self) -> int:
        return len(self.__roots)

    def items(self) -> Iterator[tuple[str, Node]]:
        return iter(self.__roots.items())

    def walk(self) -> Iterator[Node]:
        """Every node of every top level section, depth first."""
        for i in self.__roots.values():
            yield from i.walk()

    def freeze(self) -> None:
        for i in self.__roots.values():
            i.freeze()

    def clear(self) -> None:
        self.__roots = {}

    def __repr__(self) -> str:
        return 'SectionTree { .sections = %d }' % len(self.__roots)
