"""Top-level layout of a C source file.

The parser drops comments and formatting, so the rewriter works on this map
instead: the raw text cut into fragments whose concatenation is the original
text, byte for byte. Function definitions become "function" fragments that
carry their leading comment block and any comment trailing the closing brace.
"""
import bisect
import logging
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .reorder_error import ParseError

logger = logging.getLogger(__name__)

# Token kinds
COMMENT = "comment"
DIRECTIVE = "directive"
STRING = "string"
WORD = "word"
PUNCT = "punct"

# Fragment kinds, DIRECTIVE is shared with tokens
GAP = "gap"
DECLARATION = "declaration"
FUNCTION = "function"

_WORD = re.compile(r"[A-Za-z0-9_$]+")
_NUMBER = re.compile(r"\.?[0-9](?:[eEpP][+-]|[A-Za-z0-9_.'])*")
_NOT_NEWLINE = re.compile(r"[^\n]")
_DIRECTIVE_NAME = re.compile(r"#\s*([A-Za-z_]*)")

_OPENING = ("if", "ifdef", "ifndef")
_BRANCHING = ("elif", "elifdef", "elifndef", "else")


class Token(NamedTuple):
    kind: str
    text: str
    start: int
    end: int


@dataclass
class Fragment:
    kind: str
    start: int
    end: int
    text: str
    # lines of the declaration itself, comments excluded
    first_line: int = 0
    last_line: int = 0
    # leading comment block, a prefix of text
    comment: str = ""
    # conditional blocks (#if ... #endif branches) enclosing the fragment
    region: Tuple[int, ...] = ()


def _is_continuation(text: str, i: int) -> bool:
    return text[i] == "\\" and text.startswith(("\n", "\r\n"), i + 1)


def _skip_line(text: str, i: int) -> int:
    n = len(text)
    while i < n:
        if text[i] == "\n":
            return i
        if _is_continuation(text, i):
            i = text.index("\n", i) + 1
            continue
        i += 1
    return n


def _skip_quoted(text: str, i: int) -> int:
    quote = text[i]
    n = len(text)
    i += 1
    while i < n:
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        # unterminated literal, let the parser complain
        if c == "\n":
            return i
        i += 1
    return n


def _skip_block_comment(text: str, i: int, filename: str) -> int:
    end = text.find("*/", i + 2)
    if end < 0:
        line = text.count("\n", 0, i) + 1
        raise ParseError(reason="unterminated comment", coord=f"{filename}:{line}")
    return end + 2


def _skip_directive(text: str, i: int, filename: str) -> int:
    n = len(text)
    while i < n:
        c = text[i]
        if c == "\n":
            return i
        if text.startswith("/*", i):
            i = _skip_block_comment(text, i, filename)
            continue
        if text.startswith("//", i):
            return _skip_line(text, i)
        if c in "\"'":
            i = _skip_quoted(text, i)
            continue
        if _is_continuation(text, i):
            i = text.index("\n", i) + 1
            continue
        i += 1
    return n


def _is_member_access(preceding: List[Token]) -> bool:
    """Whether the tokens right before a word end in `.` or `->`."""
    if not preceding or preceding[-1].kind != PUNCT:
        return False
    last = preceding[-1]
    if last.text == ".":
        return True
    # "->" is lexed as two characters
    return last.text == ">" and len(preceding) > 1 \
        and preceding[-2].text == "-" and preceding[-2].end == last.start


def tokenize(text: str, filename: str = "<source>") -> List[Token]:
    """Split C text into comments, directives, literals, words and punctuation.
Whitespace is not kept. Multi-character operators come out as single
characters, which is all the layout needs.
    """
    tokens: List[Token] = []
    n = len(text)
    i = 0
    line_start = True
    while i < n:
        c = text[i]
        if c == "\n":
            line_start = True
            i += 1
            continue
        if c in " \t\r\f\v":
            i += 1
            continue
        if _is_continuation(text, i):
            i = text.index("\n", i) + 1
            continue
        if text.startswith("/*", i):
            end = _skip_block_comment(text, i, filename)
            tokens.append(Token(COMMENT, text[i:end], i, end))
            i = end
            continue
        if text.startswith("//", i):
            end = _skip_line(text, i)
            tokens.append(Token(COMMENT, text[i:end], i, end))
            i = end
            continue
        if c == "#" and line_start:
            end = _skip_directive(text, i, filename)
            tokens.append(Token(DIRECTIVE, text[i:end], i, end))
            i = end
            continue

        line_start = False
        if c in "\"'":
            kind, end = STRING, _skip_quoted(text, i)
        else:
            match = _NUMBER.match(text, i) or _WORD.match(text, i)
            if match:
                kind, end = WORD, match.end()
            else:
                kind, end = PUNCT, i + 1
        tokens.append(Token(kind, text[i:end], i, end))
        i = end
    return tokens


class SourceMap:
    def __init__(self, text: str, filename: str = "<source>"):
        self.text = text
        self.filename = filename
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]
        self.tokens = tokenize(text, filename)
        self.fragments = self._segment()
        logger.debug("%s: %d tokens, %d fragments",
                     filename, len(self.tokens), len(self.fragments))

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._line_starts, offset)

    def column_of(self, offset: int) -> int:
        return offset - self._line_starts[self.line_of(offset) - 1] + 1

    def functions(self) -> List[Tuple[int, Fragment]]:
        return [(i, f) for (i, f) in enumerate(self.fragments) if f.kind == FUNCTION]

    def blanked(self) -> str:
        """The text with comments and directives turned into spaces.
Newlines are kept, so parser coordinates still point into the original text.
Carriage returns become spaces too, the parser does not accept them.
        """
        pieces = []
        cursor = 0
        for token in self.tokens:
            if token.kind not in (COMMENT, DIRECTIVE):
                continue
            pieces.append(self.text[cursor:token.start])
            pieces.append(_NOT_NEWLINE.sub(" ", token.text))
            cursor = token.end
        pieces.append(self.text[cursor:])
        return "".join(pieces).replace("\r", " ")

    def call_like_words(self, name: str) -> List[Token]:
        """Words equal to name that are directly followed by an opening parenthesis.

Member calls (`s.name(`, `p->name(`) are a different function and are skipped.
        """
        result = []
        significant = [t for t in self.tokens if t.kind != COMMENT]
        for (idx, token) in enumerate(significant[:-1]):
            following = significant[idx + 1]
            if token.kind != WORD or token.text != name \
                    or following.kind != PUNCT or following.text != "(":
                continue
            if _is_member_access(significant[max(idx - 2, 0):idx]):
                continue
            result.append(token)
        return result

    def _find_items(self) -> List[Tuple[str, int, int]]:
        """(kind, first token, last token) of every top-level item.

An item ends at a `;` outside braces and parentheses, or at the `}` closing a
function body. A body is a `{` opened at the top right after a `)`, when no
`=` was seen before it (that would be an initializer).
        """
        items = []
        begin = None
        last_significant = -1
        braces = parens = 0
        assigned = body_opened = False
        previous = None

        for (idx, token) in enumerate(self.tokens):
            if begin is None:
                if token.kind == COMMENT:
                    continue
                if token.kind == DIRECTIVE:
                    items.append((DIRECTIVE, idx, idx))
                    continue
                begin = idx
                braces = parens = 0
                assigned = body_opened = False
                previous = None
            if token.kind in (COMMENT, DIRECTIVE):
                continue
            last_significant = idx

            if token.kind == PUNCT:
                c = token.text
                if c == "(":
                    parens += 1
                elif c == ")":
                    parens = max(parens - 1, 0)
                elif c == "=" and braces == 0 and parens == 0:
                    assigned = True
                elif c == "{":
                    if braces == 0 and parens == 0 and not assigned \
                            and previous is not None and previous.text == ")":
                        body_opened = True
                    braces += 1
                elif c == "}":
                    braces = max(braces - 1, 0)
                    if braces == 0 and body_opened:
                        items.append((FUNCTION, begin, idx))
                        begin = None
                        continue
                elif c == ";" and braces == 0 and parens == 0:
                    items.append((DECLARATION, begin, idx))
                    begin = None
                    continue
            previous = token

        if begin is not None:
            items.append((DECLARATION, begin, last_significant))
        return items

    def _regions(self) -> List[Tuple[int, ...]]:
        """Enclosing conditional branches of every token.

A branch is named by the index of the directive opening it, so the `#if` and
`#else` parts of one block are different regions.
        """
        regions = []
        stack: List[int] = []
        for (idx, token) in enumerate(self.tokens):
            regions.append(tuple(stack))
            if token.kind != DIRECTIVE:
                continue
            directive = _DIRECTIVE_NAME.match(token.text).group(1)
            if directive in _OPENING:
                stack.append(idx)
            elif directive in _BRANCHING and stack:
                stack[-1] = idx
            elif directive == "endif" and stack:
                stack.pop()
        return regions

    def _own_line(self, offset: int) -> bool:
        line_start = self._line_starts[self.line_of(offset) - 1]
        return self.text[line_start:offset].strip() == ""

    def _leading_comment_start(self, first: int, floor: int) -> int:
        start = self.tokens[first].start
        idx = first - 1
        while idx >= 0:
            token = self.tokens[idx]
            if token.kind != COMMENT or token.start < floor:
                break
            # a blank line separates it from what follows
            if self.text.count("\n", token.end, start) > 1:
                break
            if not self._own_line(token.start):
                break
            start = token.start
            idx -= 1
        return start

    def _trailing_comment_end(self, last: int) -> int:
        end = self.tokens[last].end
        idx = last + 1
        while idx < len(self.tokens):
            token = self.tokens[idx]
            if token.kind != COMMENT or "\n" in self.text[end:token.start]:
                break
            end = token.end
            idx += 1
        return end

    def _segment(self) -> List[Fragment]:
        text = self.text
        fragments: List[Fragment] = []
        cursor = 0
        regions = self._regions()
        for (kind, first, last) in self._find_items():
            start = self.tokens[first].start
            end = self.tokens[last].end
            block_start = start
            if kind == FUNCTION:
                block_start = self._leading_comment_start(first, cursor)
                end = self._trailing_comment_end(last)
            if block_start > cursor:
                fragments.append(Fragment(GAP, cursor, block_start, text[cursor:block_start]))
            fragments.append(Fragment(
                kind, block_start, end, text[block_start:end],
                first_line=self.line_of(start),
                last_line=self.line_of(self.tokens[last].end - 1),
                comment=text[block_start:start],
                region=regions[first],
            ))
            cursor = end
        if cursor < len(text):
            fragments.append(Fragment(GAP, cursor, len(text), text[cursor:]))
        return fragments


def render(fragments: List[Fragment]) -> str:
    return "".join(fragment.text for fragment in fragments)
