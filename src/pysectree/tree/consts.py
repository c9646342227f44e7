# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/13 00:12:09
# @Author : Kariko Lin

# columns per nesting level, i.e. `depth = indent // INDENT_STEP`.
INDENT_STEP = 4
TAB_WIDTH = 4
BLANKS = ' \t'
# utf-8 files saved by some editors start with it.
BOM = '\ufeff'

COMMENT_MARK = '#'
DELIMITER = ':'
SECTION_OPEN = '['
SECTION_CLOSE = ']'

# name of the implicit root before any section. never gets pairs.
IMPLICIT_ROOT = ''

# guessed codecs below this are not trusted.
CODEC_CONFIDENCE = 0.8
DEFAULT_CODEC = 'utf-8'
LAST_RESORT_CODEC = 'gbk'
