"""Tests for the eskip parser."""

import pytest

from ingress_validator.eskip import (
    BackendType,
    EskipSyntaxError,
    Regexp,
    parse,
    parse_filters,
    parse_predicates,
)


class TestParseFilters:
    def test_chain(self):
        filters = parse_filters('setPath("/foo") -> status(204)')
        assert [f.name for f in filters] == ["setPath", "status"]
        assert filters[0].args == ["/foo"]
        assert filters[1].args == [204]

    def test_blank_text_yields_no_filters(self):
        assert parse_filters("") == []
        assert parse_filters("   // only a comment\n") == []

    def test_no_args(self):
        filters = parse_filters("preserveHost() -> compress()")
        assert filters[0].args == []
        assert filters[1].name == "compress"

    def test_string_escapes(self):
        filters = parse_filters(r'setRequestHeader("X-Quote", "a\"b\\c")')
        assert filters[0].args == ["X-Quote", 'a"b\\c']

    def test_raw_string(self):
        filters = parse_filters('inlineContent(`{"a": "b"}`)')
        assert filters[0].args == ['{"a": "b"}']

    def test_numbers(self):
        filters = parse_filters("foo(1, -2, 0.5)")
        assert filters[0].args == [1, -2, 0.5]
        assert isinstance(filters[0].args[0], int)
        assert isinstance(filters[0].args[2], float)

    def test_regexp_arg(self):
        filters = parse_filters(r'modPath(/^\/api/, "/")')
        assert filters[0].args[0] == Regexp(pattern="^/api")

    @pytest.mark.parametrize("text", [
        "foo(",
        "foo",
        'foo("a"',
        'foo("unterminated)',
        'setPath("/a") setPath("/b")',
        'setPath("/a") ->',
        "foo(,)",
        "foo() # bar()",
    ])
    def test_malformed(self, text):
        with pytest.raises(EskipSyntaxError):
            parse_filters(text)

    def test_error_carries_position(self):
        with pytest.raises(EskipSyntaxError) as exc_info:
            parse_filters("foo(")
        assert exc_info.value.position == 4
        assert "position 4" in str(exc_info.value)


class TestParsePredicates:
    def test_catch_all(self):
        assert parse_predicates("*") == []

    def test_blank(self):
        assert parse_predicates("") == []

    def test_conjunction(self):
        predicates = parse_predicates('Path("/a") && Method("GET") && Weight(10)')
        assert [p.name for p in predicates] == ["Path", "Method", "Weight"]
        assert predicates[2].args == [10]

    @pytest.mark.parametrize("text", [
        'Path("/a") &&',
        'Path("/a") & Method("GET")',
        'Path("/a") -> setPath("/b")',
        "* && Path()",
    ])
    def test_malformed(self, text):
        with pytest.raises(EskipSyntaxError):
            parse_predicates(text)


class TestParseRoutes:
    def test_document(self):
        routes = parse('''
            // the api
            api: Path("/api") -> setPath("/") -> "https://api.example.org";
            other: * -> <shunt>;
        ''')
        assert [r.id for r in routes] == ["api", "other"]
        assert routes[0].backend_type == BackendType.NETWORK
        assert routes[0].backend == "https://api.example.org"
        assert [f.name for f in routes[0].filters] == ["setPath"]
        assert routes[1].predicates == []
        assert routes[1].backend_type == BackendType.SHUNT

    def test_anonymous_route(self):
        routes = parse('Path("/") -> status(200) -> <loopback>')
        assert len(routes) == 1
        assert routes[0].id == ""
        assert routes[0].backend_type == BackendType.LOOPBACK

    def test_empty_document(self):
        assert parse("") == []

    def test_lb_backend(self):
        routes = parse('lb: * -> <consistentHash, "http://a:80", "http://b:80">')
        route = routes[0]
        assert route.backend_type == BackendType.LB
        assert route.lb_algorithm == "consistentHash"
        assert route.lb_endpoints == ["http://a:80", "http://b:80"]

    def test_lb_backend_without_algorithm(self):
        routes = parse('lb: * -> <"http://a:80">')
        assert routes[0].lb_algorithm is None
        assert routes[0].lb_endpoints == ["http://a:80"]

    def test_dynamic_backend(self):
        assert parse("d: * -> <dynamic>")[0].backend_type == BackendType.DYNAMIC

    def test_route_string_form(self):
        route = parse('r: Path("/a") && Method("GET") -> setPath("/b") -> <shunt>')[0]
        assert str(route) == 'r: Path("/a") && Method("GET") -> setPath("/b") -> <shunt>'

    @pytest.mark.parametrize("text", [
        'r1: Path("/") -> "http://a"; r2:',
        'Path("/") -> <shunt>; Path("/b") -> <shunt>',
        "r: * -> <nope>",
        'r: * -> setPath("/")',
        "r: *",
        'r: * -> <roundRobin "http://a">',
        'r: Path("/") "http://a"',
    ])
    def test_malformed(self, text):
        with pytest.raises(EskipSyntaxError):
            parse(text)
