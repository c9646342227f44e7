# -*- encoding: utf-8 -*-
# @File   : decoder.py
# @Time   : 2024/10/12 22:41:17
# @Author : Kariko Lin

"""String to typed value conversion.

Literal grammar, as the caller requests it:

    ```
    threads: 4                   ; int, or `0xFF` for hex
    ratio: 3.14159               ; float
    host: localhost              ; str, bare
    title: "Hello World"         ; str, quoted
    point: 1 3.14 "hello"        ; tuple, space separated
    resolution: [1920, 1080]     ; list of numbers
    grid: [[1, 2], [3, 4]]       ; list of lists, any depth
    ```

Nothing here knows about sections or files.
"""

from typing import Any, Iterator

from .shape import Kind, Shape, shape_of


class DecodeError(ValueError):
    """A present value cannot be shaped into the requested type."""
    def __init__(self, message: str, text: str) -> None:
        super().__init__(f'{message}: {text!r}')
        self.text = text


class MalformedBracket(DecodeError):
    pass


class UnmatchedBracket(MalformedBracket):
    pass


class MalformedNumber(DecodeError):
    pass


class MalformedTuple(DecodeError):
    pass


def _decode_int(text: str) -> int:
    try:
        if text[1:2] in ('x', 'X'):
            return int(text, 16)
        return int(text, 10)
    except ValueError:
        raise MalformedNumber('not an integer', text) from None


def _decode_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise MalformedNumber('not a float', text) from None


def _decode_str(text: str) -> str:
    first = text.find('"')
    second = text.find('"', first + 1) if first >= 0 else -1
    if second < 0:
        return text
    return text[first + 1:second]


def _decode_bool(text: str) -> bool:
    # same rule as the classic INI `getbool`: 1, yes, true, ...
    return bool(text) and text[0].lower() in ('1', 'y', 't')


def _tokens(text: str) -> Iterator[str]:
    """Space separated tokens, a `"` opens a token running to the next `"`."""
    pos, end = 0, len(text)
    while True:
        while pos < end and text[pos] == ' ':
            pos += 1
        if pos >= end:
            return
        if text[pos] == '"':
            close = text.find('"', pos + 1)
            if close < 0:
                close = end
            yield text[pos + 1:close]
            pos = close + 1
            if pos < end and text[pos] == ' ':
                pos += 1
        else:
            close = text.find(' ', pos)
            if close < 0:
                close = end
            yield text[pos:close]
            pos = close


def _decode_tuple(text: str, shape: Shape) -> tuple[Any, ...]:
    tokens = _tokens(text)
    ret = []
    for i, field in enumerate(shape.fields):
        token = next(tokens, None)
        if token is None:
            raise MalformedTuple(
                f'{shape} wants {len(shape.fields)} fields, got {i}', text)
        ret.append(_decode(token, field))
    if shape.factory is not None:
        return shape.factory(*ret)
    return tuple(ret)


def _decode_element(text: str, shape: Shape) -> int | float:
    text = text.strip()
    if shape.kind is Kind.FLOAT:
        return _decode_float(text)
    try:
        return _decode_int(text)
    except MalformedNumber:
        # permissive: `[1.0, 2.5]` as list[int] truncates, like a C cast.
        try:
            return int(_decode_float(text))
        except (OverflowError, ValueError):  # inf, nan, junk
            raise MalformedNumber('not an integer', text) from None


def _decode_flat_array(text: str, shape: Shape) -> list[Any]:
    first, last = text.find('['), text.rfind(']')
    if first < 0 or last < 0 or last < first:
        raise MalformedBracket('array needs [ and ]', text)
    body = text[first + 1:last]
    if '[' in body or ']' in body:
        raise MalformedBracket(
            f'nested brackets, but {shape} requested', text)
    if not body.strip():
        return []
    return [_decode_element(i, shape.element) for i in body.split(',')]


def _decode_nested_array(text: str, shape: Shape) -> list[Any]:
    first = text.find('[')
    if first < 0:
        raise MalformedBracket('array needs [', text)

    ret: list[Any] = []
    level, start = 1, first
    for idx in range(first + 1, len(text)):
        match text[idx]:
            case '[':
                level += 1
                if level == 2:
                    start = idx
            case ']':
                level -= 1
                if level == 1:
                    ret.append(_decode(text[start:idx + 1], shape.element))
                elif level == 0:
                    return ret
            case ',' | ' ' | '\t':
                pass
            case _ if level == 1:
                raise MalformedBracket(
                    f'stray item in {shape}, elements must be bracketed',
                    text)
    raise UnmatchedBracket('unbalanced brackets', text)


def _decode(text: str, shape: Shape) -> Any:
    match shape.kind:
        case Kind.INT:
            return _decode_int(text)
        case Kind.FLOAT:
            return _decode_float(text)
        case Kind.STR:
            return _decode_str(text)
        case Kind.BOOL:
            return _decode_bool(text)
        case Kind.TUPLE:
            return _decode_tuple(text, shape)
        case Kind.ARRAY if shape.nested:
            return _decode_nested_array(text, shape)
        case Kind.ARRAY:
            return _decode_flat_array(text, shape)
        case Kind.CUSTOM:
            try:
                return shape.factory(text)
            except DecodeError:
                raise
            # e.g. decimal.InvalidOperation is an ArithmeticError
            except (ValueError, ArithmeticError) as e:
                raise DecodeError(f'{shape} rejected {text!r}', text) from e
    raise AssertionError(shape.kind)


def decode(text: str, hint: Any = str) -> Any:
    """Decode raw `text` as `hint`, a type hint or a `Shape`.

    Raises:
        DecodeError: `text` doesn't fit the requested shape. A plain
            converter failing with `ValueError` or `ArithmeticError` is
            reported the same way, the original error chained.
        UnsupportedShape: `hint` is nothing the decoder can produce.
    """
    return _decode(text, shape_of(hint))
