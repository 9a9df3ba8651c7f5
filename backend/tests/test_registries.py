"""Tests for the built-in filter and predicate specs."""

import pytest

from ingress_validator.eskip import Regexp
from ingress_validator.filters import ArgsFilterSpec, InvalidFilterParameters, Registry, default_registry
from ingress_validator.routing import InvalidPredicateParameters, default_predicates


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def predicates():
    return {spec.name: spec for spec in default_predicates()}


class TestFilterRegistry:
    def test_builtins_registered(self, registry):
        for name in ["setPath", "modPath", "setRequestHeader", "status", "redirectTo", "ratelimit"]:
            assert name in registry

    def test_unknown_filter(self, registry):
        assert registry.get("foo") is None
        assert "foo" not in registry

    def test_register_custom_spec(self):
        registry = Registry()
        registry.register(ArgsFilterSpec("myFilter"))
        assert len(registry) == 1
        assert list(registry) == ["myFilter"]

    @pytest.mark.parametrize("name,args", [
        ("setPath", ["/foo"]),
        ("modPath", [Regexp(pattern="^/api"), "/"]),
        ("modPath", ["^/api", "/"]),
        ("status", [204]),
        ("redirectTo", [308, "https://example.org"]),
        ("inlineContent", ["hello"]),
        ("inlineContent", ["{}", "application/json"]),
        ("preserveHost", ["true"]),
        ("compress", []),
        ("compress", ["text/html", 9]),
        ("tee", ["https://shadow.example.org"]),
        ("ratelimit", [20, "1m"]),
    ])
    def test_accepted_args(self, registry, name, args):
        registry.get(name).check_args(args)

    @pytest.mark.parametrize("name,args", [
        ("setPath", []),
        ("setPath", ["/a", "/b"]),
        ("setPath", [42]),
        ("modPath", ["(", "/"]),
        ("status", ["200"]),
        ("status", [700]),
        ("redirectTo", [200, "https://example.org"]),
        ("preserveHost", ["maybe"]),
        ("ratelimit", [0, "1m"]),
        ("setRequestHeader", ["X-Only-Name"]),
    ])
    def test_rejected_args(self, registry, name, args):
        with pytest.raises(InvalidFilterParameters):
            registry.get(name).check_args(args)


class TestPredicateSpecs:
    @pytest.mark.parametrize("name,args", [
        ("Path", ["/foo"]),
        ("PathSubtree", ["/"]),
        ("PathRegexp", [Regexp(pattern="^/api/v[0-9]+")]),
        ("Host", ["^example[.]org$"]),
        ("HostAny", ["a.example.org", "b.example.org"]),
        ("Method", ["get"]),
        ("Methods", ["GET", "POST"]),
        ("Header", ["X-Env", "test"]),
        ("QueryParam", ["debug"]),
        ("Weight", [10]),
        ("True", []),
        ("Traffic", [0.25]),
        ("Traffic", [0.25, "canary", "yes"]),
    ])
    def test_accepted_args(self, predicates, name, args):
        predicates[name].check_args(args)

    @pytest.mark.parametrize("name,args", [
        ("Path", ["foo"]),
        ("Path", []),
        ("PathRegexp", [Regexp(pattern="[")]),
        ("HostAny", []),
        ("Method", ["FETCH"]),
        ("Methods", []),
        ("Weight", [1.5]),
        ("True", [1]),
        ("Traffic", [1.5]),
        ("Traffic", [0.5, "canary"]),
    ])
    def test_rejected_args(self, predicates, name, args):
        with pytest.raises(InvalidPredicateParameters):
            predicates[name].check_args(args)
