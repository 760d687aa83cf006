"""Restricted reader for JavaScript modules that only declare data.

The registry ships its catalog as an ES module. Nothing in it is ever executed:
top-level ``const``/``let``/``var`` declarations are read as data literals
(objects, arrays, strings, numbers, booleans, null), references to earlier
declarations are resolved by name, and everything else (imports, calls,
functions, operators, regular expressions) is stepped over and stands in as
``UNRESOLVED``.
"""

import re
from dataclasses import dataclass
from typing import Any

from src.rpc_sync.domain.errors import ParseError


class _Unresolved:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = _Unresolved()

_TOKEN_PATTERNS = (
    ("ws", r"[ \t\r\f\v\ufeff\u00a0]+"),
    ("nl", r"[\n\u2028\u2029]"),
    ("line_comment", r"//[^\n]*"),
    ("block_comment", r"/\*.*?\*/"),
    ("string", r"\"(?:[^\"\\\n]|\\(?:\r\n|.))*\"|'(?:[^'\\\n]|\\(?:\r\n|.))*'"),
    ("template", r"`(?:[^`\\]|\\.)*`"),
    (
        "number",
        r"(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+"
        r"|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?)n?",
    ),
    ("ident", r"[A-Za-z_$\u00c0-\uffff][\w$\u00c0-\uffff]*"),
    ("punct", r"\.\.\.|=>|\?\.|\?\?|[{}\[\]().,;:=?!<>+\-*/%&|^~@#]"),
)
_TOKEN_RE = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS),
    re.DOTALL,
)
_REGEX_RE = re.compile(r"/(?![/*])(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[A-Za-z]*")
# a slash after these starts a regex literal, not a division
_REGEX_AFTER_PUNCT = set("(,=:[!&|?{};+-*%<>~^") | {"=>", "??"}
_REGEX_AFTER_KEYWORDS = {
    "return", "typeof", "case", "do", "else", "in", "of", "new", "delete", "void", "throw", "yield", "await",
}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)
_INTERPOLATION_RE = re.compile(r"(?<!\\)\$\{")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = {"\n", "\r\n", "\r", "\u2028", "\u2029"}

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {"}", "]", ")"}
_TERMINATORS = {",", ";", "}", "]", ")"}
_STATEMENT_KEYWORDS = {"const", "let", "var", "export", "import", "function", "class", "async"}
_DECLARATION_KEYWORDS = {"const", "let", "var"}
_OPAQUE_KEYWORDS = {"new", "function", "class", "async", "await", "typeof", "void", "delete", "yield"}
_LITERAL_KEYWORDS = {"true": True, "false": False, "null": None, "undefined": None}


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any
    raw: str
    line: int
    newline_before: bool = False


def _decode_escapes(body: str) -> str:
    def _replace(match: re.Match) -> str:
        seq = match.group(1)
        if seq in _LINE_CONTINUATIONS:
            return ""
        if seq.startswith("u{"):
            code_point = int(seq[2:-1], 16)
            return chr(code_point) if code_point <= 0x10FFFF else "�"
        if seq.startswith("u") and len(seq) == 5:
            return chr(int(seq[1:], 16))
        if seq.startswith("x") and len(seq) == 3:
            return chr(int(seq[1:], 16))
        return _SIMPLE_ESCAPES.get(seq, seq)

    text = _ESCAPE_RE.sub(_replace, body)
    if _SURROGATE_RE.search(text):
        # \uD83D\uDE00 pairs arrive as two code units
        text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return text


def _parse_number(raw: str) -> int | float:
    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    prefix = text[:2].lower()
    if prefix == "0x":
        return int(text[2:], 16)
    if prefix == "0o":
        return int(text[2:], 8)
    if prefix == "0b":
        return int(text[2:], 2)
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


def property_key(value: Any) -> str | None:
    """Convert a literal to the string key JavaScript would use for it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return None


def _regex_allowed(tokens: list[Token]) -> bool:
    if not tokens:
        return True
    previous = tokens[-1]
    if previous.kind == "punct":
        return previous.value in _REGEX_AFTER_PUNCT
    return previous.kind == "ident" and previous.value in _REGEX_AFTER_KEYWORDS


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    line = 1
    newline_before = True
    length = len(source)
    while pos < length:
        if source.startswith("/*", pos) and source.find("*/", pos + 2) == -1:
            raise ParseError(f"Unterminated comment at line {line}")
        if source.startswith("/", pos) and _regex_allowed(tokens):
            regex = _REGEX_RE.match(source, pos)
            if regex is not None:
                tokens.append(Token("regex", None, regex.group(), line, newline_before))
                newline_before = False
                pos = regex.end()
                continue
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            char = source[pos]
            if char in "\"'":
                raise ParseError(f"Unterminated string literal at line {line}")
            if char == "`":
                raise ParseError(f"Unterminated template literal at line {line}")
            raise ParseError(f"Unexpected character {char!r} at line {line}")

        kind = match.lastgroup
        raw = match.group()
        pos = match.end()
        if kind == "nl":
            line += 1
            newline_before = True
            continue
        if kind in ("ws", "line_comment", "block_comment"):
            if kind == "block_comment" and "\n" in raw:
                line += raw.count("\n")
                newline_before = True
            continue

        if kind == "string":
            value: Any = _decode_escapes(raw[1:-1])
        elif kind == "template":
            body = raw[1:-1]
            value = None if _INTERPOLATION_RE.search(body) else _decode_escapes(body)
        elif kind == "number":
            value = _parse_number(raw)
        else:
            value = raw
        tokens.append(Token(kind, value, raw, line, newline_before))
        newline_before = False
        if kind in ("string", "template"):
            line += raw.count("\n")

    tokens.append(Token("eof", None, "", line, True))
    return tokens


class JsLiteralParser:
    def __init__(self, source: str) -> None:
        self.tokens = tokenize(source)
        self.pos = 0
        self.bindings: dict[str, Any] = {}

    # token helpers

    def _peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "eof":
            self.pos += 1
        return token

    def _is_punct(self, token: Token, *values: str) -> bool:
        return token.kind == "punct" and token.value in values

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self._peek()
        return ParseError(f"{message} at line {token.line}")

    def _expect_punct(self, value: str) -> Token:
        token = self._peek()
        if not self._is_punct(token, value):
            found = token.raw or "end of input"
            raise self._error(f"Expected {value!r} but found {found!r}", token)
        return self._advance()

    def _starts_statement(self, token: Token) -> bool:
        return token.newline_before and token.kind == "ident" and token.value in _STATEMENT_KEYWORDS

    def _skip_balanced(self) -> None:
        opener = self._advance()
        stack = [_OPENERS[opener.value]]
        while stack:
            token = self._advance()
            if token.kind == "eof":
                raise self._error(f"Unbalanced {opener.value!r} opened at line {opener.line}", token)
            if token.kind != "punct":
                continue
            if token.value in _OPENERS:
                stack.append(_OPENERS[token.value])
            elif token.value in _CLOSERS:
                expected = stack.pop()
                if token.value != expected:
                    raise self._error(f"Mismatched {token.value!r}, expected {expected!r}", token)

    def _skip_expression(self) -> Any:
        while True:
            token = self._peek()
            if token.kind == "eof" or self._is_punct(token, *_TERMINATORS):
                return UNRESOLVED
            if self._starts_statement(token):
                return UNRESOLVED
            if self._is_punct(token, *_OPENERS):
                self._skip_balanced()
            else:
                self._advance()

    def _skip_statement(self) -> None:
        first = True
        while True:
            token = self._peek()
            if token.kind == "eof":
                return
            if not first and self._starts_statement(token):
                return
            first = False
            if self._is_punct(token, ";"):
                self._advance()
                return
            if self._is_punct(token, *_OPENERS):
                self._skip_balanced()
            elif self._is_punct(token, *_CLOSERS):
                raise self._error(f"Unexpected {token.value!r}", token)
            else:
                self._advance()

    # module level

    def parse_module(self) -> dict[str, Any]:
        while self._peek().kind != "eof":
            token = self._peek()
            if token.kind == "ident" and token.value == "export":
                self._advance()
                following = self._peek()
                if following.kind == "ident" and following.value in _DECLARATION_KEYWORDS:
                    continue
                self._skip_statement()
            elif token.kind == "ident" and token.value in _DECLARATION_KEYWORDS:
                self._advance()
                self._parse_declarators()
            else:
                self._skip_statement()
        return self.bindings

    def _parse_declarators(self) -> None:
        while True:
            name = self._peek()
            if name.kind != "ident":
                # destructuring and other patterns are not data
                self._skip_statement()
                return
            self._advance()
            if self._is_punct(self._peek(), "="):
                self._advance()
                self.bindings[name.value] = self.parse_expression()
            else:
                self.bindings[name.value] = None
            if self._is_punct(self._peek(), ","):
                self._advance()
                continue
            if self._is_punct(self._peek(), ";"):
                self._advance()
            return

    # expressions

    def parse_expression(self) -> Any:
        value = self._parse_primary()
        while True:
            token = self._peek()
            if self._starts_statement(token):
                return value
            if self._is_punct(token, "."):
                self._advance()
                member = self._advance()
                if member.kind != "ident":
                    raise self._error("Expected property name after '.'", member)
                value = self._member(value, member.value)
            elif self._is_punct(token, "["):
                self._advance()
                key = self.parse_expression()
                self._expect_punct("]")
                value = self._member(value, key)
            elif self._is_punct(token, "("):
                # calls are never evaluated
                self._skip_balanced()
                value = UNRESOLVED
            elif token.kind == "eof" or self._is_punct(token, *_TERMINATORS):
                return value
            elif token.kind == "punct":
                # operators make the whole expression opaque
                return self._skip_expression()
            else:
                return value

    def _member(self, target: Any, key: Any) -> Any:
        if isinstance(target, dict):
            name = property_key(key)
            if name is None:
                return UNRESOLVED
            return target.get(name, UNRESOLVED)
        if isinstance(target, list) and isinstance(key, (int, float)) and not isinstance(key, bool):
            if float(key).is_integer() and 0 <= int(key) < len(target):
                return target[int(key)]
        return UNRESOLVED

    def _parse_primary(self) -> Any:
        token = self._peek()
        if token.kind == "eof":
            raise self._error("Unexpected end of input", token)
        if token.kind in ("string", "number"):
            self._advance()
            return token.value
        if token.kind == "template":
            self._advance()
            return UNRESOLVED if token.value is None else token.value
        if token.kind == "regex":
            self._advance()
            return UNRESOLVED
        if token.kind == "ident":
            if token.value in _LITERAL_KEYWORDS:
                self._advance()
                return _LITERAL_KEYWORDS[token.value]
            if token.value in _OPAQUE_KEYWORDS:
                return self._skip_expression()
            self._advance()
            return self.bindings.get(token.value, UNRESOLVED)
        if self._is_punct(token, "{"):
            return self._parse_object()
        if self._is_punct(token, "["):
            return self._parse_array()
        if self._is_punct(token, "("):
            self._skip_balanced()
            return UNRESOLVED
        if self._is_punct(token, "-", "+") and self._peek(1).kind == "number":
            self._advance()
            number = self._advance().value
            return -number if token.value == "-" else number
        if self._is_punct(token, *_CLOSERS):
            raise self._error(f"Unexpected {token.value!r}", token)
        if self._is_punct(token, ",", ";"):
            raise self._error(f"Expected a value but found {token.value!r}", token)
        return self._skip_expression()

    def _parse_object(self) -> Any:
        self._expect_punct("{")
        result: dict[str, Any] = {}
        while True:
            token = self._peek()
            if self._is_punct(token, "}"):
                self._advance()
                return result
            if self._is_punct(token, "..."):
                self._advance()
                spread = self.parse_expression()
                if isinstance(spread, dict):
                    result.update(spread)
            else:
                key, value = self._parse_property()
                if key is not None:
                    result[key] = value
            token = self._peek()
            if self._is_punct(token, ","):
                self._advance()
            elif not self._is_punct(token, "}"):
                found = token.raw or "end of input"
                raise self._error(f"Expected ',' or '}}' in object literal but found {found!r}", token)

    def _parse_property(self) -> tuple[str | None, Any]:
        token = self._peek()
        if self._is_punct(token, "["):
            self._skip_balanced()
            key = None
        elif token.kind in ("string", "number", "ident"):
            self._advance()
            key = property_key(token.value)
        else:
            raise self._error(f"Unexpected {token.raw or 'end of input'!r} in object literal", token)

        following = self._peek()
        if self._is_punct(following, ":"):
            self._advance()
            return key, self.parse_expression()
        if self._is_punct(following, "("):
            # method shorthand
            self._skip_balanced()
            if self._is_punct(self._peek(), "{"):
                self._skip_balanced()
            return key, UNRESOLVED
        if token.kind == "ident" and following.kind in ("ident", "string", "number"):
            # get/set/async accessors
            self._advance()
            if self._is_punct(self._peek(), "("):
                self._skip_balanced()
            if self._is_punct(self._peek(), "{"):
                self._skip_balanced()
            return None, UNRESOLVED
        if token.kind == "ident" and self._is_punct(following, ",", "}"):
            return key, self.bindings.get(token.value, UNRESOLVED)
        raise self._error(f"Unexpected {following.raw or 'end of input'!r} after property name", following)

    def _parse_array(self) -> list[Any]:
        self._expect_punct("[")
        result: list[Any] = []
        while True:
            token = self._peek()
            if self._is_punct(token, "]"):
                self._advance()
                return result
            if self._is_punct(token, ","):
                self._advance()
                continue
            if self._is_punct(token, "..."):
                self._advance()
                spread = self.parse_expression()
                if isinstance(spread, list):
                    result.extend(spread)
            else:
                result.append(self.parse_expression())
            token = self._peek()
            if self._is_punct(token, ","):
                self._advance()
            elif not self._is_punct(token, "]"):
                found = token.raw or "end of input"
                raise self._error(f"Expected ',' or ']' in array literal but found {found!r}", token)


def parse_module(source: str) -> dict[str, Any]:
    """Return the data bound by each top-level declaration of ``source``."""
    return JsLiteralParser(source).parse_module()
