# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 01:05:32
# @Author : Kariko Lin

"""Build a `SectionTree` from text, line by line.

Which section a `[header]` belongs to is decided by its indentation,
4 columns (or a tab) per level:

    ```
    [network]            ; depth 0, top level
        [server]         ; depth 1, child of [network]
        host: localhost  ; pair of [server], the latest header
    [coordinates]        ; depth 0 again, closes [network] and [server]
    ```

Pairs always go to the section of the latest header, even if a dedent has
closed it since. Their own indentation is not looked at, and a pair before
the first header is dropped. A UTF-8 BOM at the start of the text is ignored.
Lines that are none of the above are skipped quietly.
"""

import logging
from io import StringIO, TextIOBase

import chardet

from ..abstract import FileHandler
from .consts import (
    BLANKS,
    BOM,
    CODEC_CONFIDENCE,
    COMMENT_MARK,
    DEFAULT_CODEC,
    DELIMITER,
    IMPLICIT_ROOT,
    INDENT_STEP,
    LAST_RESORT_CODEC,
    SECTION_CLOSE,
    SECTION_OPEN,
    TAB_WIDTH,
)
from .model import MissingNode, Node, SectionTree

logger = logging.getLogger(__name__)


class FileOpenError(OSError):
    """The section file cannot be opened or decoded."""
    pass


def count_indent(line: str) -> int:
    """Width of the leading blanks, a tab counts `TAB_WIDTH` columns."""
    ret = 0
    for i in line:
        if i == '\t':
            ret += TAB_WIDTH
        elif i == ' ':
            ret += 1
        else:
            break
    return ret


def is_header(line: str) -> bool:
    return line.startswith(SECTION_OPEN) and line.endswith(SECTION_CLOSE)


class SectionTreeParser(FileHandler[SectionTree]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(buf: TextIOBase) -> SectionTree:
        """读取解码好的字符串流，返回（已冻结的）小节树。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        ret = SectionTree()
        ret.add_root(IMPLICIT_ROOT)
        # open sections, outermost first. len(stack) is the current depth.
        # pairs go to `current`, the latest header, even after a dedent.
        stack: list[tuple[str, Node]] = []
        current: Node | None = None
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.rstrip('\r\n')
            if lineno == 1:
                i = i.removeprefix(BOM)
            indent = count_indent(i)
            i = i.strip(BLANKS)
            if not i or i.startswith(COMMENT_MARK):
                continue

            if DELIMITER in i and stack and current is not None:
                key, val = i.split(DELIMITER, 1)
                current.set_value(key.strip(BLANKS), val.strip(BLANKS))
                continue

            while len(stack) > indent // INDENT_STEP:
                stack.pop()

            if is_header(i):
                name = i[1:-1]
                node = (stack[-1][1].add_child(name) if stack
                        else ret.add_root(name))
                stack.append((name, node))
                current = node
                continue
            logger.debug('line %d skipped: %r', lineno, i)

        ret.freeze()
        return ret

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec['encoding'] is None
                or codec['confidence'] < CODEC_CONFIDENCE):
            codec = {'encoding': DEFAULT_CODEC}
        logger.debug('%s: decoding as %s', filename, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode(LAST_RESORT_CODEC)
        return StringIO(buf)

    def read(self) -> SectionTree:
        """读取`SectionTreeParser`实例指定的文件。

        Raises:
            FileOpenError: the file is missing, unreadable or undecodable.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    return self.readstream(fp)
            except UnicodeDecodeError:
                return self.readstream(self._decode_file(self._fn))
        except (OSError, UnicodeDecodeError) as e:
            raise FileOpenError(
                f'Failed to open file: {self.filename}') from e

    def __str__(self) -> str:
        return "Section tree: " + super().__str__() + f"({self._codec})"


class ConfigParser:
    """Parse a section file, then look sections up by name.

        ```python
        cfg = ConfigParser()
        if cfg.parse('app.conf') and (server := cfg['network']['server']):
            port = server.get('port', int, 80)
        ```

    Every `parse()` starts over from an empty tree. The new tree is swapped in
    as a whole once it is complete, and it is read only from then on.
    """
    def __init__(self, encoding: str | None = None) -> None:
        self._codec = encoding
        self.tree = SectionTree()

    def parse(self, filename: str) -> bool:
        """Returns `False` (and leaves the tree empty) if the file cannot be
        read, the reason is logged."""
        self.tree = SectionTree()
        try:
            handler = SectionTreeParser(filename, self._codec)
            tree = handler.read()
        except FileOpenError as e:
            logger.error('%s (%s)', e, e.__cause__)
            return False
        self.tree = tree
        logger.debug(
            '%s: %d top level sections', handler.filename, len(tree))
        return True

    def __getitem__(self, name: str) -> Node | MissingNode:
        return self.tree[name]

    def lookup(self, *path: str) -> Node | MissingNode:
        return self.tree.lookup(*path)

    def __contains__(self, name: object) -> bool:
        return name in self.tree
