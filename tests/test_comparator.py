"""Tests for RequestComparator: normalization, compare(), per-field checks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import permutations

import pytest

from httpcmp import (
    ComparatorConfig,
    ComparisonError,
    HttpRequest,
    InvalidRequestFormat,
    RequestComparator,
    UnsupportedInputType,
    compare,
)

METHODS = ("CONNECT", "DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT", "TRACE")

BASE = HttpRequest(
    method="GET",
    scheme="http",
    host="www.example.com",
    path="/",
    protocol_version="1.1",
    headers={"User-Agent": "HttpComparator"},
)

# One single-field change per comparable scalar field.
FIELD_CHANGES = {
    "host": {"host": "example.org"},
    "port": {"port": 81},
    "username": {"username": "dummy"},
    "password": {"password": "dummy"},
    "path": {"path": "/dummy"},
    "scheme": {"scheme": "HTTPS"},
    "protocol_version": {"protocol_version": "1.0"},
    "method": {"method": "POST"},
}


class TestNormalize:
    def test_http_request_passes_through(self, comparator: RequestComparator) -> None:
        assert comparator.normalize(BASE) is BASE

    def test_text_is_parsed(self, comparator: RequestComparator) -> None:
        r = comparator.normalize("GET http://www.example.com/ HTTP/1.1\r\n\r\n")
        assert r.host == "www.example.com"
        assert r.method == "GET"

    def test_invalid_text_raises(self, comparator: RequestComparator) -> None:
        with pytest.raises(InvalidRequestFormat) as exc_info:
            comparator.normalize("not a valid http request")
        assert exc_info.value.text == "not a valid http request"

    def test_empty_text_raises(self, comparator: RequestComparator) -> None:
        with pytest.raises(InvalidRequestFormat):
            comparator.normalize("")

    @pytest.mark.parametrize("value", [42, 1.234, None, b"GET / HTTP/1.1\r\n\r\n", object()])
    def test_unsupported_type_raises(self, comparator: RequestComparator, value: object) -> None:
        with pytest.raises(UnsupportedInputType) as exc_info:
            comparator.normalize(value)
        assert exc_info.value.input_type is type(value)
        assert type(value).__qualname__ in str(exc_info.value)

    def test_errors_share_base_and_builtin_types(self) -> None:
        assert issubclass(UnsupportedInputType, ComparisonError)
        assert issubclass(UnsupportedInputType, TypeError)
        assert issubclass(InvalidRequestFormat, ComparisonError)
        assert issubclass(InvalidRequestFormat, ValueError)

    def test_injected_parser_is_used(self) -> None:
        @dataclass(frozen=True)
        class FixedParser:
            request: HttpRequest

            def parse(self, text: str, /) -> HttpRequest | None:
                return self.request

        comparator = RequestComparator(parser=FixedParser(BASE))
        assert comparator.normalize("anything at all") is BASE

    def test_parser_failure_result_raises(self) -> None:
        class RejectingParser:
            def parse(self, text: str, /) -> HttpRequest | None:
                return None

        comparator = RequestComparator(parser=RejectingParser())
        with pytest.raises(InvalidRequestFormat):
            comparator.normalize("GET http://www.example.com/ HTTP/1.1\r\n\r\n")


class TestCompare:
    @pytest.mark.parametrize("method", METHODS)
    def test_identical_requests_match(self, comparator: RequestComparator, method: str) -> None:
        r = replace(BASE, method=method)
        assert comparator.compare(r, r) is True

    def test_equal_but_distinct_objects_match(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE)) is True

    @pytest.mark.parametrize("field_name", sorted(FIELD_CHANGES))
    def test_single_field_change_does_not_match(
        self, comparator: RequestComparator, field_name: str
    ) -> None:
        changed = replace(BASE, **FIELD_CHANGES[field_name])
        assert comparator.compare(BASE, changed) is False
        assert comparator.compare(changed, BASE) is False

    @pytest.mark.parametrize(
        ("method1", "method2"),
        [(m1, m2) for m1 in METHODS for m2 in METHODS if m1 != m2],
    )
    def test_different_methods_do_not_match(
        self, comparator: RequestComparator, method1: str, method2: str
    ) -> None:
        assert comparator.compare(replace(BASE, method=method1), replace(BASE, method=method2)) is False

    def test_method_is_case_sensitive(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, method="get")) is False

    def test_scheme_is_case_sensitive(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, scheme="HTTP")) is False

    def test_explicit_default_port_differs_from_absent(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, port=80)) is False

    def test_empty_username_differs_from_absent(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, username="")) is False

    def test_empty_password_differs_from_absent(self, comparator: RequestComparator) -> None:
        r = replace(BASE, username="user")
        assert comparator.compare(r, replace(r, password="")) is False

    def test_trailing_slash_is_significant(self, comparator: RequestComparator) -> None:
        r = replace(BASE, path="/docs/")
        assert comparator.compare(r, replace(r, path="/docs")) is False

    def test_query_string_is_part_of_path(self, comparator: RequestComparator) -> None:
        r = replace(BASE, path="/search?q=1")
        assert comparator.compare(r, replace(r, path="/search?q=2")) is False
        assert comparator.compare(r, replace(r, path="/search?q=1")) is True

    def test_header_value_change_does_not_match(self, comparator: RequestComparator) -> None:
        changed = replace(BASE, headers={"User-Agent": "Dummy"})
        assert comparator.compare(BASE, changed) is False

    def test_added_header_does_not_match(self, comparator: RequestComparator) -> None:
        changed = replace(BASE, headers={"User-Agent": "HttpComparator", "Accept": "*/*"})
        assert comparator.compare(BASE, changed) is False
        assert comparator.compare(changed, BASE) is False

    def test_removed_header_does_not_match(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, headers={})) is False

    def test_header_names_are_case_sensitive(self, comparator: RequestComparator) -> None:
        changed = replace(BASE, headers={"user-agent": "HttpComparator"})
        assert comparator.compare(BASE, changed) is False

    def test_header_order_is_ignored(self, comparator: RequestComparator) -> None:
        items = [("Host", "www.example.com"), ("User-Agent", "HttpComparator"), ("Accept", "*/*")]
        base = replace(BASE, headers=dict(items))
        for order in permutations(items):
            assert comparator.compare(base, replace(BASE, headers=dict(order))) is True

    def test_single_value_equals_one_element_sequence(self, comparator: RequestComparator) -> None:
        assert comparator.compare(BASE, replace(BASE, headers={"User-Agent": ["HttpComparator"]})) is True

    def test_repeated_header_value_order_is_significant(self, comparator: RequestComparator) -> None:
        r1 = replace(BASE, headers={"Accept": ["text/html", "*/*"]})
        r2 = replace(BASE, headers={"Accept": ["*/*", "text/html"]})
        assert comparator.compare(r1, r2) is False

    def test_symmetry(self, comparator: RequestComparator) -> None:
        variants = [BASE] + [replace(BASE, **change) for change in FIELD_CHANGES.values()]
        for a in variants:
            for b in variants:
                assert comparator.compare(a, b) == comparator.compare(b, a)

    def test_text_reflexivity(self, comparator: RequestComparator, request_text) -> None:
        text = request_text("example.com")
        assert comparator.compare(text, text) is True

    def test_normalization_error_propagates(self, comparator: RequestComparator) -> None:
        with pytest.raises(InvalidRequestFormat):
            comparator.compare("not a valid http request", BASE)
        with pytest.raises(UnsupportedInputType):
            comparator.compare(BASE, 42)

    def test_both_sides_normalized_before_comparing(self, comparator: RequestComparator) -> None:
        # A host mismatch must not hide the invalid second input.
        with pytest.raises(UnsupportedInputType):
            comparator.compare(replace(BASE, host="a"), 42)

    def test_module_level_compare(self) -> None:
        assert compare(BASE, replace(BASE)) is True
        assert compare(BASE, replace(BASE, method="POST")) is False


class TestConcreteScenario:
    def test_get_versus_post(self, comparator: RequestComparator) -> None:
        a = "GET http://www.example.com/ HTTP/1.1\r\nUser-Agent: HttpComparator\r\n\r\n"
        b = "POST http://www.example.com/ HTTP/1.1\r\nUser-Agent: HttpComparator\r\n\r\n"
        assert comparator.compare(a, b) is False

    def test_reversed_header_order(self, comparator: RequestComparator, request_text) -> None:
        a = request_text("example.com")
        c = request_text("example.com-reordered")
        assert comparator.compare(a, c) is True

    def test_text_equals_structured(self, comparator: RequestComparator) -> None:
        a = "GET http://www.example.com/ HTTP/1.1\r\nUser-Agent: HttpComparator\r\n\r\n"
        assert comparator.compare(a, BASE) is True


class TestMismatchedFields:
    def test_equal_requests_have_no_mismatches(self, comparator: RequestComparator) -> None:
        assert comparator.mismatched_fields(BASE, replace(BASE)) == []

    def test_reports_every_mismatch_in_canonical_order(self, comparator: RequestComparator) -> None:
        other = replace(BASE, method="POST", host="example.org", headers={})
        assert comparator.mismatched_fields(BASE, other) == ["host", "method", "headers"]

    def test_agrees_with_compare(self, comparator: RequestComparator) -> None:
        for change in FIELD_CHANGES.values():
            other = replace(BASE, **change)
            assert (comparator.mismatched_fields(BASE, other) == []) == comparator.compare(BASE, other)


class TestConfiguredFields:
    def test_unselected_fields_are_ignored(self) -> None:
        comparator = RequestComparator(config=ComparatorConfig(fields=("host", "path", "method")))
        other = replace(BASE, port=8080, headers={}, protocol_version="1.0")
        assert comparator.compare(BASE, other) is True

    def test_selected_fields_are_checked(self) -> None:
        comparator = RequestComparator(config=ComparatorConfig(fields=("headers",)))
        assert comparator.compare(BASE, replace(BASE, headers={})) is False
        assert comparator.mismatched_fields(BASE, replace(BASE, headers={}, host="x")) == ["headers"]


class TestPerFieldComparisons:
    def test_compare_host(self, comparator: RequestComparator) -> None:
        assert comparator.compare_host("example.com", "example.com") is True
        assert comparator.compare_host("example.com", "Example.com") is False

    def test_compare_port(self, comparator: RequestComparator) -> None:
        assert comparator.compare_port(None, None) is True
        assert comparator.compare_port(80, 80) is True
        assert comparator.compare_port(80, None) is False

    def test_compare_username(self, comparator: RequestComparator) -> None:
        assert comparator.compare_username(None, None) is True
        assert comparator.compare_username("", None) is False

    def test_compare_password(self, comparator: RequestComparator) -> None:
        assert comparator.compare_password("secret", "secret") is True
        assert comparator.compare_password(None, "") is False

    def test_compare_path(self, comparator: RequestComparator) -> None:
        assert comparator.compare_path("/", "/") is True
        assert comparator.compare_path("/a/", "/a") is False

    def test_compare_scheme(self, comparator: RequestComparator) -> None:
        assert comparator.compare_scheme("https", "https") is True
        assert comparator.compare_scheme("https", "HTTPS") is False

    def test_compare_protocol_version(self, comparator: RequestComparator) -> None:
        assert comparator.compare_protocol_version("1.1", "1.1") is True
        assert comparator.compare_protocol_version("1.1", "1.0") is False

    def test_compare_method(self, comparator: RequestComparator) -> None:
        assert comparator.compare_method("GET", "GET") is True
        assert comparator.compare_method("GET", "get") is False

    def test_compare_headers(self, comparator: RequestComparator) -> None:
        assert comparator.compare_headers({"A": "1", "B": "2"}, {"B": "2", "A": "1"}) is True
        assert comparator.compare_headers({"A": "1"}, {"A": "2"}) is False
        assert comparator.compare_headers({"A": "1"}, {"a": "1"}) is False
        assert comparator.compare_headers({}, {}) is True

    def test_normalize_headers_sorts_by_name(self) -> None:
        assert RequestComparator.normalize_headers({"b": "2", "a": ["1", "3"]}) == [
            ("a", ("1", "3")),
            ("b", ("2",)),
        ]
