"""Tests for complete-route checks."""

import pytest

from ingress_validator.errors import ErrorCode, InvalidRouteError
from ingress_validator.eskip import parse
from ingress_validator.routing import check_route


def route(text):
    return parse(text)[0]


class TestCheckRoute:
    @pytest.mark.parametrize("text", [
        'r: Path("/") -> "https://example.org"',
        'r: PathSubtree("/api") && Method("GET") -> setPath("/") -> <shunt>',
        'r: * -> status(204) -> inlineContent("ok") -> <shunt>',
        'r: Host(/^example[.]org$/) -> <roundRobin, "http://10.0.0.1:8080", "http://10.0.0.2:8080">',
        'r: * -> <"http://10.0.0.1:8080">',
        'r: * -> <loopback>',
        'r: * -> <dynamic>',
    ])
    def test_valid(self, route_options, text):
        check_route(route_options, route(text))

    def test_unknown_predicate(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route('r1: Foo("x") -> <shunt>'))
        assert exc_info.value.code == ErrorCode.PREDICATE_UNKNOWN
        assert exc_info.value.route_id == "r1"
        assert str(exc_info.value) == 'route "r1": predicate "Foo" not found'

    def test_invalid_predicate_args(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route('r: Path("no-slash") -> <shunt>'))
        assert exc_info.value.code == ErrorCode.PREDICATE_INVALID_ARGS

    def test_duplicate_path_tree_predicate(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route('r: Path("/a") && PathSubtree("/b") -> <shunt>'))
        assert exc_info.value.code == ErrorCode.ROUTE_DUPLICATE_PREDICATE

    def test_unknown_filter(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route("r: * -> foo() -> <shunt>"))
        assert exc_info.value.code == ErrorCode.FILTER_UNKNOWN
        assert '"foo"' in str(exc_info.value)

    def test_invalid_filter_args(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route("r: * -> status(999) -> <shunt>"))
        assert exc_info.value.code == ErrorCode.FILTER_INVALID_ARGS

    @pytest.mark.parametrize("text", [
        'r: * -> "example.org"',
        'r: * -> "ftp://example.org"',
        'r: * -> <fastest, "http://a:80">',
        'r: * -> <roundRobin, "http://a:80", "not-a-url">',
    ])
    def test_invalid_backend(self, route_options, text):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route(text))
        assert exc_info.value.code == ErrorCode.ROUTE_INVALID_BACKEND

    def test_first_problem_wins(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route('r: Foo() -> bar() -> "nope"'))
        assert exc_info.value.code == ErrorCode.PREDICATE_UNKNOWN

    def test_anonymous_route_message_has_no_id(self, route_options):
        with pytest.raises(InvalidRouteError) as exc_info:
            check_route(route_options, route("* -> foo() -> <shunt>"))
        assert str(exc_info.value) == 'filter "foo" not found'
