"""Line tokenizer for Valve KeyValues text (items_game.txt).

Each line of the document holds at most a key and a value, both quoted, or a
bare structural brace. ``tokenize`` extracts the quoted strings and
``classify_line`` turns the token list into one of four line kinds so the item
builder can dispatch on the kind instead of on the token count.
"""
from dataclasses import dataclass
from typing import Union

from .errors import ParseError

QUOTE = '"'
ESCAPE = '\\'


def tokenize(line: str) -> list[str]:
    """Split one line into its quoted tokens.

    A backslash followed by a quote or a backslash puts that character in the
    token buffer, also outside quotes, where it prefixes the next token. A
    quote left open at the end of the line is dropped. If the line holds no
    complete quoted token, the line itself is returned as the only token.
    """
    tokens: list[str] = []
    buf: list[str] = []
    in_token = False
    escaped = False

    for char in line:
        if escaped:
            escaped = False
            if char in (QUOTE, ESCAPE):
                buf.append(char)
                continue
        if char == ESCAPE:
            escaped = True
        elif char == QUOTE:
            if in_token:
                tokens.append("".join(buf))
                buf.clear()
            in_token = not in_token
        elif in_token:
            buf.append(char)

    if not tokens:
        return [line]
    return tokens


@dataclass(frozen=True)
class BraceOpen:
    pass


@dataclass(frozen=True)
class BraceClose:
    pass


@dataclass(frozen=True)
class KeyValue:
    key: str
    value: str


@dataclass(frozen=True)
class Scalar:
    value: str


Line = Union[BraceOpen, BraceClose, KeyValue, Scalar]


def classify_line(line: str) -> Line:
    """Tokenize a line and tag it by shape. Raises ParseError on 3+ tokens."""
    tokens = tokenize(line)
    if len(tokens) == 1:
        token = tokens[0].strip()
        if token == "{":
            return BraceOpen()
        if token == "}":
            return BraceClose()
        return Scalar(token.strip(QUOTE))
    if len(tokens) == 2:
        return KeyValue(tokens[0], tokens[1])
    raise ParseError(f"Expected 1 or 2 tokens, got {len(tokens)}", line)
