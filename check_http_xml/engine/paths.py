"""Path expressions addressing a value inside a parsed document tree.

A path is a chain of steps written like Perl hash and array dereferences::

    {shares}->{dead}
    {ping}->{"ns2:elapsedMs"}
    {servers}->{server}->[0]->{load}

``{key}`` selects a mapping key, ``[n]`` a sequence index (negative indexes
count from the end). The ``->`` between steps is optional. Keys that contain
``}``, commas or quotes can be written quoted with ``"`` or ``'``; inside a
quoted key a backslash escapes the next character.
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

from ..utils.errors import PathSyntaxError


WILDCARD = "*"

_BAREWORD_RE = re.compile(r'^[A-Za-z0-9_.\-]+$')
_INDEX_RE = re.compile(r'\s*([+-]?\d+)\s*\]')


class _NotFound:
    """Sentinel returned when a path does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


@dataclass(frozen=True)
class KeyStep:
    """Mapping key access."""

    key: str

    def render(self) -> str:
        if _BAREWORD_RE.match(self.key):
            return "{%s}" % self.key
        escaped = self.key.replace("\\", "\\\\").replace('"', '\\"')
        return '{"%s"}' % escaped

    @property
    def label(self) -> str:
        return self.key


@dataclass(frozen=True)
class IndexStep:
    """Sequence index access."""

    index: int

    def render(self) -> str:
        return "[%d]" % self.index

    @property
    def label(self) -> str:
        return str(self.index)


Step = Union[KeyStep, IndexStep]


@dataclass(frozen=True)
class PathExpression:
    """Immutable, parsed path. Equality compares steps only."""

    steps: Tuple[Step, ...]
    text: str = field(default="", compare=False)

    @classmethod
    def of(cls, *keys: Union[str, int]) -> "PathExpression":
        """Build a path from plain keys (str) and indexes (int)."""
        return cls(tuple(
            IndexStep(k) if isinstance(k, int) else KeyStep(k)
            for k in keys
        ))

    @property
    def label(self) -> str:
        """Key or index of the last step, unsanitized."""
        return self.steps[-1].label

    def canonical(self) -> str:
        return "->".join(step.render() for step in self.steps)

    def __str__(self) -> str:
        return self.text or self.canonical()


def parse_path(text: str) -> PathExpression:
    """
    Parse a path expression.

    Args:
        text: Path expression such as ``{shares}->{dead}``

    Returns:
        PathExpression: Parsed path

    Raises:
        PathSyntaxError: If the text is not a valid path
    """
    source = text.strip()
    if not source:
        raise PathSyntaxError("Empty path expression")

    steps: List[Step] = []
    pos = 0
    length = len(source)

    while pos < length:
        pos = _skip_space(source, pos)

        if steps and source.startswith("->", pos):
            pos = _skip_space(source, pos + 2)
            if pos >= length:
                raise PathSyntaxError(f"Dangling '->' in path: {text}")

        char = source[pos]
        if char == "{":
            step, pos = _parse_key(source, pos + 1, text)
        elif char == "[":
            match = _INDEX_RE.match(source, pos + 1)
            if not match:
                raise PathSyntaxError(f"Invalid index at position {pos} in path: {text}")
            step = IndexStep(int(match.group(1)))
            pos = match.end()
        else:
            raise PathSyntaxError(f"Unexpected {char!r} at position {pos} in path: {text}")

        steps.append(step)
        pos = _skip_space(source, pos)

    return PathExpression(tuple(steps), text=source)


def _skip_space(source: str, pos: int) -> int:
    while pos < len(source) and source[pos].isspace():
        pos += 1
    return pos


def _parse_key(source: str, pos: int, text: str) -> Tuple[KeyStep, int]:
    """Parse the inside of ``{...}`` starting right after the brace."""
    pos = _skip_space(source, pos)
    if pos < len(source) and source[pos] in "\"'":
        quote = source[pos]
        chars = []
        pos += 1
        while pos < len(source) and source[pos] != quote:
            if source[pos] == "\\" and pos + 1 < len(source):
                pos += 1
            chars.append(source[pos])
            pos += 1
        if pos >= len(source):
            raise PathSyntaxError(f"Unterminated quoted key in path: {text}")
        pos = _skip_space(source, pos + 1)
        if pos >= len(source) or source[pos] != "}":
            raise PathSyntaxError(f"Expected '}}' after quoted key in path: {text}")
        return KeyStep("".join(chars)), pos + 1

    end = source.find("}", pos)
    if end == -1:
        raise PathSyntaxError(f"Unterminated '{{' in path: {text}")
    key = source[pos:end].strip()
    if not key:
        raise PathSyntaxError(f"Empty key in path: {text}")
    return KeyStep(key), end + 1


def resolve(root: Any, path: PathExpression) -> Any:
    """
    Walk ``path`` through ``root``.

    Args:
        root: Parsed document (dicts, lists and scalars)
        path: Parsed path expression

    Returns:
        The addressed node, or ``NOT_FOUND``
    """
    node = root
    for step in path.steps:
        if isinstance(step, KeyStep):
            if not isinstance(node, dict) or step.key not in node:
                return NOT_FOUND
            node = node[step.key]
        else:
            if not isinstance(node, (list, tuple)):
                return NOT_FOUND
            if not -len(node) <= step.index < len(node):
                return NOT_FOUND
            node = node[step.index]
    return node


def split_path_list(text: str) -> List[str]:
    """
    Split a comma-separated list of paths.

    Commas inside braces, brackets or quoted keys do not split. A quote
    only opens a quoted key right after ``{``.
    """
    items = []
    current = []
    depth = 0
    quote = None
    escaped = False
    previous = ""

    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
                previous = char
            continue

        if char in "\"'" and previous == "{":
            quote = char
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            items.append("".join(current).strip())
            current = []
            continue
        current.append(char)
        if not char.isspace():
            previous = char

    items.append("".join(current).strip())
    return items


def parse_path_list(text: str) -> List[PathExpression]:
    """
    Parse a comma-separated list of path expressions.

    Raises:
        PathSyntaxError: If any item is empty or malformed
    """
    return [parse_path(item) for item in split_path_list(text)]


def expand_wildcard(root: Any) -> List[PathExpression]:
    """One single-step path per top-level key of ``root``, sorted by key."""
    if not isinstance(root, dict):
        return []
    return [PathExpression.of(key) for key in sorted(root)]
