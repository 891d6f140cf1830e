"""Strict parser for almanac puzzle text.

Grammar (PEG-flavoured)::

    almanac     := seeds_line BREAK stage (BREAK stage)* NEWLINE* EOF
    seeds_line  := 'seeds' ':' SPACE NUMBER (SPACE NUMBER)*
    stage       := header NEWLINE map_line (NEWLINE map_line)*
    header      := WORD '-' 'to' '-' WORD ' ' 'map' ':'
    map_line    := NUMBER SPACE NUMBER SPACE NUMBER     # dest source length
    BREAK       := NEWLINE+
    NUMBER      := [0-9]+                               # must fit in u64
    WORD        := [A-Za-z]+

Trailing spaces at the end of a line are ignored. Anything else that does
not fit the grammar raises :class:`AlmanacParseError`; there is no partial
parse.

Public API:

* ``parse_almanac(text)`` — full input into an :class:`Almanac`.
* ``parse_seeds(text)`` — a lone ``seeds:`` line.
* ``parse_interval_map(text)`` — a lone ``dest source length`` line.
* ``parse_stage(text)`` — a lone header plus its map lines.
"""
from __future__ import annotations

import bisect
import re
from dataclasses import dataclass

from almanac.types import U64_MAX, IntervalMap, Pipeline, Stage


class AlmanacParseError(ValueError):
    """Raised when input text does not match the almanac grammar."""

    def __init__(self, message: str, *, line: int = 0, column: int = 0) -> None:
        self.message = message
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line else ""
        super().__init__(f"{message}{where}")


@dataclass(frozen=True, slots=True)
class Almanac:
    """Parsed puzzle input: the raw seed list plus the stage pipeline."""

    seeds: tuple[int, ...]
    pipeline: Pipeline


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # see _TOKEN_PATTERNS keys + "ERROR" / "EOF"
    value: str
    pos: int


# Order matters (first match wins)
_TOKEN_PATTERNS: list[tuple[str, str]] = [
    ("NEWLINE", r"\n"),
    ("SPACE", r"[ \t]+"),
    ("NUMBER", r"[0-9]+"),
    ("WORD", r"[A-Za-z]+"),
    ("DASH", r"-"),
    ("COLON", r":"),
]

_COMPILED_PATTERNS = [(name, re.compile(pat)) for name, pat in _TOKEN_PATTERNS]
_TRAILING_SPACE_RE = re.compile(r"[ \t]+(?=\n|$)")


def _tokenize(text: str) -> list[_Token]:
    """Tokenize almanac text. Unknown characters become ERROR tokens."""
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        for name, pattern in _COMPILED_PATTERNS:
            m = pattern.match(text, pos)
            if m:
                tokens.append(_Token(kind=name, value=m.group(), pos=pos))
                pos = m.end()
                break
        else:
            tokens.append(_Token(kind="ERROR", value=text[pos], pos=pos))
            pos += 1
    tokens.append(_Token(kind="EOF", value="", pos=pos))
    return tokens


def _normalize(text: str) -> str:
    text = text.replace("\r\n", "\n")
    return _TRAILING_SPACE_RE.sub("", text)


# ---------------------------------------------------------------------------
# Recursive descent parser
# ---------------------------------------------------------------------------

class _Parser:
    """Recursive descent parser over the token stream. Fails fast."""

    def __init__(self, text: str) -> None:
        self._tokens = _tokenize(text)
        self._pos = 0
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _fail(self, message: str, tok: _Token | None = None) -> AlmanacParseError:
        tok = tok if tok is not None else self._peek()
        idx = bisect.bisect_right(self._line_starts, tok.pos) - 1
        return AlmanacParseError(
            message,
            line=idx + 1,
            column=tok.pos - self._line_starts[idx] + 1,
        )

    @staticmethod
    def _describe(tok: _Token) -> str:
        if tok.kind == "EOF":
            return "end of input"
        if tok.kind == "NEWLINE":
            return "end of line"
        return f"{tok.kind} ({tok.value!r})"

    def _expect(self, kind: str, what: str | None = None) -> _Token:
        tok = self._peek()
        if tok.kind != kind:
            raise self._fail(f"Expected {what or kind}, got {self._describe(tok)}")
        return self._advance()

    def _expect_word(self, word: str) -> _Token:
        tok = self._peek()
        if tok.kind != "WORD" or tok.value != word:
            raise self._fail(f"Expected {word!r}, got {self._describe(tok)}")
        return self._advance()

    def _number(self) -> int:
        tok = self._expect("NUMBER", "unsigned integer")
        value = int(tok.value)
        if value > U64_MAX:
            raise self._fail(f"Integer {tok.value} does not fit in 64 bits", tok)
        return value

    def _skip_newlines(self) -> int:
        count = 0
        while self._peek().kind == "NEWLINE":
            self._advance()
            count += 1
        return count

    def finish(self) -> None:
        self._skip_newlines()
        tok = self._peek()
        if tok.kind != "EOF":
            raise self._fail(f"Unexpected trailing input: {self._describe(tok)}")

    # ─── Productions ───────────────────────────────────────────────

    def seeds_line(self) -> tuple[int, ...]:
        self._expect_word("seeds")
        self._expect("COLON", "':' after 'seeds'")
        self._expect("SPACE", "space after 'seeds:'")
        seeds = [self._number()]
        while self._peek().kind == "SPACE":
            self._advance()
            seeds.append(self._number())
        return tuple(seeds)

    def map_line(self) -> IntervalMap:
        start_tok = self._peek()
        dest_start = self._number()
        self._expect("SPACE", "space between map values")
        source_start = self._number()
        self._expect("SPACE", "space between map values")
        length = self._number()
        try:
            return IntervalMap(
                source_start=source_start,
                dest_start=dest_start,
                length=length,
            )
        except ValueError as exc:
            raise self._fail(f"Invalid interval map: {exc}", start_tok) from exc

    def header(self) -> tuple[str, str]:
        source = self._expect("WORD", "source category").value
        self._expect("DASH", "'-to-' in map header")
        self._expect_word("to")
        self._expect("DASH", "'-to-' in map header")
        dest = self._expect("WORD", "destination category").value
        gap = self._expect("SPACE", "space before 'map:'")
        if gap.value != " ":
            raise self._fail("Expected a single space before 'map:'", gap)
        self._expect_word("map")
        self._expect("COLON", "':' after 'map'")
        return source, dest

    def stage(self) -> Stage:
        source, dest = self.header()
        self._expect("NEWLINE", "line break after map header")
        maps = [self.map_line()]
        # A newline followed by a number continues this stage; anything else
        # ends it and is left for the caller.
        while (
            self._peek().kind == "NEWLINE"
            and self._tokens[self._pos + 1].kind == "NUMBER"
        ):
            self._advance()
            maps.append(self.map_line())
        return Stage(source_label=source, dest_label=dest, maps=tuple(maps))

    def almanac(self) -> Almanac:
        seeds = self.seeds_line()
        if self._skip_newlines() == 0:
            raise self._fail(f"Expected line break after seeds, got {self._describe(self._peek())}")
        stages = [self.stage()]
        while self._skip_newlines():
            if self._peek().kind == "EOF":
                break
            stages.append(self.stage())
        self.finish()
        return Almanac(seeds=seeds, pipeline=Pipeline(stages=tuple(stages)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_almanac(text: str) -> Almanac:
    """Parse full puzzle text. Raises AlmanacParseError on any mismatch."""
    parser = _Parser(_normalize(text))
    return parser.almanac()


def parse_seeds(text: str) -> tuple[int, ...]:
    """Parse a single ``seeds: ...`` line."""
    parser = _Parser(_normalize(text))
    seeds = parser.seeds_line()
    parser.finish()
    return seeds


def parse_interval_map(text: str) -> IntervalMap:
    """Parse a single ``dest_start source_start length`` line."""
    parser = _Parser(_normalize(text))
    interval_map = parser.map_line()
    parser.finish()
    return interval_map


def parse_stage(text: str) -> Stage:
    """Parse one ``<source>-to-<dest> map:`` block."""
    parser = _Parser(_normalize(text))
    stage = parser.stage()
    parser.finish()
    return stage
