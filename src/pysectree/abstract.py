# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:40:06
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod


class FileHandler[T](metaclass=ABCMeta):
    """A reader bound to one file.

    The section format is read-only, so there is no `write()` here.
    """
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
