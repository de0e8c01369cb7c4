"""Syntax highlighter backed by Pygments lexers.

The lexer produces a stream of typed tokens; a ``CaptureQuery`` maps token
types to capture names. A token matches a rule when its type is the rule's
type or one of its subtypes, and every matching rule emits a capture. Rules
are emitted in query order, so put general rules first and the specific
ones after them: the later capture wins on the shared cells.

Query syntax, one rule per line::

    ; comment
    Keyword           @keyword
    Name.Function     @function
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterator, Sequence

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.token import Token, _TokenType, string_to_tokentype
from pygments.util import ClassNotFound

from edit0r.highlighters.base import CaptureHighlighter, CaptureSpan, HighlighterConfigError

_RULE_RE = re.compile(r"^(?P<ttype>\S+)\s+@(?P<capture>\S+)$")
_TTYPE_RE = re.compile(r"^Token(?:\.[A-Z][A-Za-z]*)*$|^[A-Z][A-Za-z]*(?:\.[A-Z][A-Za-z]*)*$")
_CAPTURE_RE = re.compile(r"^[a-z_][a-z0-9_]*(?:\.[a-z0-9_]+)*$")

DEFAULT_QUERY = """\
; general token families first, refinements after
Keyword                 @keyword
Keyword.Type            @type.builtin
Keyword.Constant        @constant.builtin
Keyword.Namespace       @keyword.import
Name.Builtin            @function.builtin
Name.Builtin.Pseudo     @variable.builtin
Name.Function           @function
Name.Function.Magic     @function.method
Name.Class              @type
Name.Exception          @type
Name.Namespace          @namespace
Name.Decorator          @attribute
Name.Constant           @constant
Name.Property           @property
Name.Attribute          @property
Name.Label              @label
Name.Tag                @tag
Name.Entity             @constant
Literal.String          @string
Literal.String.Escape   @string.escape
Literal.String.Interpol @string.escape
Literal.String.Regex    @string.regex
Literal.String.Doc      @string.doc
Literal.Number          @number
Operator                @operator
Operator.Word           @keyword.operator
Punctuation             @punctuation
Comment                 @comment
Comment.Preproc         @keyword.directive
Comment.PreprocFile     @string
Generic.Heading         @markup.heading
Generic.Subheading      @markup.heading
Generic.Emph            @markup.italic
Generic.Strong          @markup.strong
Generic.Inserted        @diff.plus
Generic.Deleted         @diff.minus
"""


class QueryError(HighlighterConfigError):
    """A capture query could not be parsed."""


@dataclass(frozen=True)
class _Rule:
    ttype: _TokenType
    capture: str


class CaptureQuery:
    """Ordered token-type -> capture-name rules."""

    def __init__(self, source: str) -> None:
        self._rules = self._parse(source)
        self._matches: dict[_TokenType, tuple[str, ...]] = {}

    @staticmethod
    def _parse(source: str) -> list[_Rule]:
        rules: list[_Rule] = []
        for lineno, raw in enumerate(source.splitlines(), start=1):
            line = raw.split(";", 1)[0].strip()
            if not line:
                continue
            match = _RULE_RE.match(line)
            if not match:
                raise QueryError(f"line {lineno}: expected 'TokenType @capture', got {raw.strip()!r}")
            ttype_name = match.group("ttype")
            capture = match.group("capture")
            if not _TTYPE_RE.match(ttype_name):
                raise QueryError(f"line {lineno}: invalid token type {ttype_name!r}")
            if not _CAPTURE_RE.match(capture):
                raise QueryError(f"line {lineno}: invalid capture name {capture!r}")
            if ttype_name == "Token":
                ttype = Token
            else:
                ttype = string_to_tokentype(ttype_name.removeprefix("Token."))
            rules.append(_Rule(ttype, capture))
        return rules

    @property
    def rules(self) -> list[tuple[str, str]]:
        return [(str(rule.ttype), rule.capture) for rule in self._rules]

    def captures_for(self, ttype: _TokenType) -> tuple[str, ...]:
        """Capture names for a token of type *ttype*, in rule order."""
        names = self._matches.get(ttype)
        if names is None:
            names = tuple(rule.capture for rule in self._rules if ttype in rule.ttype)
            self._matches[ttype] = names
        return names


class SyntaxHighlighter(CaptureHighlighter):
    """Highlights source code with a Pygments lexer and a capture query."""

    def __init__(
        self,
        language: str | None = None,
        *,
        filename: str | None = None,
        lexer: Lexer | None = None,
        query: str | CaptureQuery = DEFAULT_QUERY,
    ) -> None:
        self._lexer = lexer or self._make_lexer(language, filename)
        # Offsets must line up with buffer rows.
        self._lexer.stripnl = False
        self._lexer.stripall = False
        self._query = query if isinstance(query, CaptureQuery) else CaptureQuery(query)
        self.name = f"syntax:{self._lexer.name}"

    @staticmethod
    def _make_lexer(language: str | None, filename: str | None) -> Lexer:
        try:
            if language:
                return get_lexer_by_name(language, stripnl=False)
            if filename:
                return get_lexer_for_filename(filename, stripnl=False)
        except ClassNotFound as e:
            raise HighlighterConfigError(f"No grammar for {language or filename!r}: {e}") from e
        raise HighlighterConfigError("SyntaxHighlighter needs a language, filename or lexer")

    @property
    def lexer(self) -> Lexer:
        return self._lexer

    @property
    def query(self) -> CaptureQuery:
        return self._query

    def captures(self, lines: Sequence[str]) -> Iterator[CaptureSpan]:
        if not lines:
            return
        # Unprocessed tokens index the text as given; get_tokens() would drop
        # a byte-order mark and rewrite lone carriage returns first.
        starts = list(accumulate((len(line) + 1 for line in lines[:-1]), initial=0))
        text = "\n".join(lines) + "\n"
        for offset, ttype, value in self._lexer.get_tokens_unprocessed(text):
            # Error tokens are source the grammar could not make sense of.
            names = () if ttype in Token.Error else self._query.captures_for(ttype)
            if not names:
                continue
            for piece in value.split("\n"):
                if piece:
                    row = bisect_right(starts, offset) - 1
                    col = offset - starts[row]
                    for name in names:
                        yield CaptureSpan(row, col, col + len(piece), name)
                offset += len(piece) + 1
