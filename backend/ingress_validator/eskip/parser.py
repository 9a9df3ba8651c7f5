"""Eskip parser — turns annotation text into filters, predicates and routes.

Supported syntax:
- calls:       Name(arg, ...) with "string", `raw string`, 42, -1.5 and /regexp/ args
- predicates:  * | Pred() && Pred() ...
- filters:     filter() -> filter() ...
- backends:    "https://example.org" | <shunt> | <loopback> | <dynamic>
               | <roundRobin, "http://a", "http://b">
- routes:      r1: Path("/") -> setPath("/x") -> "https://example.org";
- comments:    // until end of line

Usage:
    routes = parse('r: Path("/") -> <shunt>')
    filters = parse_filters('setPath("/a") -> status(204)')
"""

import re
from dataclasses import dataclass
from typing import Optional

from ingress_validator.eskip.models import Arg, BackendType, Filter, Predicate, Regexp, Route

SPECIAL_BACKENDS = {
    "shunt": BackendType.SHUNT,
    "loopback": BackendType.LOOPBACK,
    "dynamic": BackendType.DYNAMIC,
}

_TOKEN_PATTERNS = [
    ("WS", r"\s+"),
    ("COMMENT", r"//[^\n]*"),
    ("ARROW", r"->"),
    ("AND", r"&&"),
    ("NUMBER", r"[-+]?(?:\d+\.\d*|\.\d+|\d+)"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("STRING", r'"(?:[^"\\]|\\.)*"'),
    ("RAW_STRING", r"`[^`]*`"),
    ("REGEXP", r"/(?:[^/\\\n]|\\.)*/"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("COMMA", r","),
    ("COLON", r":"),
    ("SEMI", r";"),
    ("STAR", r"\*"),
    ("LT", r"<"),
    ("GT", r">"),
]

_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS))

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "r": "\r"}


class EskipSyntaxError(ValueError):
    """Raised when text does not match the eskip grammar."""

    def __init__(self, message: str, position: int):
        self.reason = message
        self.position = position
        super().__init__(f"parse failed at position {position}: {message}")


@dataclass
class Token:
    kind: str
    text: str
    position: int

    def describe(self) -> str:
        return "end of input" if self.kind == "EOF" else repr(self.text)


def tokenize(text: str) -> list[Token]:
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            if text[position] == '"':
                raise EskipSyntaxError("unterminated string", position)
            if text[position] == "/":
                raise EskipSyntaxError("unterminated regexp", position)
            raise EskipSyntaxError(f"unexpected character {text[position]!r}", position)
        kind = match.lastgroup
        if kind not in ("WS", "COMMENT"):
            tokens.append(Token(kind, match.group(), position))
        position = match.end()
    tokens.append(Token("EOF", "", len(text)))
    return tokens


def _unescape(body: str) -> str:
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class _Parser:
    """Recursive descent over the token list."""

    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.index = 0

    # ── Token helpers ──

    def _peek(self, offset: int = 0) -> Token:
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def _next(self) -> Token:
        token = self._peek()
        self.index += 1
        return token

    def _accept(self, kind: str) -> Optional[Token]:
        if self._peek().kind == kind:
            return self._next()
        return None

    def _expect(self, kind: str, what: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise EskipSyntaxError(f"expected {what}, got {token.describe()}", token.position)
        return self._next()

    def at_end(self) -> bool:
        return self._peek().kind == "EOF"

    def expect_end(self) -> None:
        token = self._peek()
        if token.kind != "EOF":
            raise EskipSyntaxError(f"unexpected {token.describe()}", token.position)

    # ── Grammar ──

    def _string(self) -> str:
        token = self._peek()
        if token.kind == "STRING":
            self._next()
            return _unescape(token.text[1:-1])
        if token.kind == "RAW_STRING":
            self._next()
            return token.text[1:-1]
        raise EskipSyntaxError(f"expected string, got {token.describe()}", token.position)

    def _arg(self) -> Arg:
        token = self._peek()
        if token.kind in ("STRING", "RAW_STRING"):
            return self._string()
        if token.kind == "NUMBER":
            self._next()
            if "." in token.text:
                return float(token.text)
            return int(token.text)
        if token.kind == "REGEXP":
            self._next()
            return Regexp(pattern=token.text[1:-1].replace("\\/", "/"))
        raise EskipSyntaxError(f"expected argument, got {token.describe()}", token.position)

    def _call(self) -> tuple[str, list[Arg]]:
        name = self._expect("IDENT", "name").text
        self._expect("LPAREN", "'('")
        args: list[Arg] = []
        if not self._accept("RPAREN"):
            args.append(self._arg())
            while self._accept("COMMA"):
                args.append(self._arg())
            self._expect("RPAREN", "')'")
        return name, args

    def predicates(self) -> list[Predicate]:
        if self._accept("STAR"):
            return []
        name, args = self._call()
        result = [Predicate(name=name, args=args)]
        while self._accept("AND"):
            name, args = self._call()
            result.append(Predicate(name=name, args=args))
        return result

    def filters(self) -> list[Filter]:
        name, args = self._call()
        result = [Filter(name=name, args=args)]
        while self._accept("ARROW"):
            name, args = self._call()
            result.append(Filter(name=name, args=args))
        return result

    def _backend(self, route: Route) -> None:
        token = self._peek()
        if token.kind in ("STRING", "RAW_STRING"):
            route.backend_type = BackendType.NETWORK
            route.backend = self._string()
            return
        if token.kind != "LT":
            raise EskipSyntaxError(f"expected backend, got {token.describe()}", token.position)
        self._next()

        head = self._peek()
        if head.kind == "IDENT" and self._peek(1).kind == "GT":
            if head.text not in SPECIAL_BACKENDS:
                raise EskipSyntaxError(f"unknown special backend {head.text!r}", head.position)
            self._next()
            self._next()
            route.backend_type = SPECIAL_BACKENDS[head.text]
            return

        route.backend_type = BackendType.LB
        if head.kind == "IDENT":
            self._next()
            route.lb_algorithm = head.text
            self._expect("COMMA", "','")
        route.lb_endpoints.append(self._string())
        while self._accept("COMMA"):
            route.lb_endpoints.append(self._string())
        self._expect("GT", "'>'")

    def route(self, route_id: str = "") -> Route:
        route = Route(id=route_id, predicates=self.predicates())
        self._expect("ARROW", "'->'")
        while self._peek().kind == "IDENT" and self._peek(1).kind == "LPAREN":
            name, args = self._call()
            route.filters.append(Filter(name=name, args=args))
            self._expect("ARROW", "'->'")
        self._backend(route)
        return route

    def document(self) -> list[Route]:
        if self.at_end():
            return []

        # A single anonymous route is allowed.
        if not (self._peek().kind == "IDENT" and self._peek(1).kind == "COLON"):
            route = self.route()
            self._accept("SEMI")
            self.expect_end()
            return [route]

        routes = []
        while not self.at_end():
            route_id = self._expect("IDENT", "route id").text
            self._expect("COLON", "':'")
            routes.append(self.route(route_id))
            if not self._accept("SEMI"):
                break
        self.expect_end()
        return routes


def parse(text: str) -> list[Route]:
    """Parse a route document."""
    return _Parser(text).document()


def parse_filters(text: str) -> list[Filter]:
    """Parse a filter chain. Blank text yields no filters."""
    parser = _Parser(text)
    if parser.at_end():
        return []
    filters = parser.filters()
    parser.expect_end()
    return filters


def parse_predicates(text: str) -> list[Predicate]:
    """Parse a predicate chain. Blank text and '*' yield no predicates."""
    parser = _Parser(text)
    if parser.at_end():
        return []
    predicates = parser.predicates()
    parser.expect_end()
    return predicates
