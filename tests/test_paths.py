"""Tests for URL pattern matching."""

import pytest

from dstest.matching.paths import compile_pattern, extract_params, url_matches


class TestUrlMatches:
    def test_exact_match(self):
        assert url_matches("/ch/payments/v1/charges", "/ch/payments/v1/charges")
    
    def test_literal_mismatch(self):
        assert not url_matches("/ch/payments/v1/refunds", "/ch/payments/v1/charges")
    
    def test_template_binds_one_segment(self):
        assert url_matches("/users/42/orders", "/users/:id/orders")
    
    def test_template_rejects_extra_segments(self):
        assert not url_matches("/users/42/orders/extra", "/users/:id/orders")
    
    @pytest.mark.parametrize("url", ["/users//orders", "/users/orders", "/users/4/2/orders"])
    def test_binding_needs_exactly_one_segment(self, url):
        assert not url_matches(url, "/users/:id/orders")
    
    def test_literal_characters_are_not_regex(self):
        assert not url_matches("/v1/fileXjson", "/v1/file.json")
        assert url_matches("/v1/file.json", "/v1/file.json")
    
    def test_trailing_wildcard(self):
        assert url_matches("/static/css/site.css", "/static/*")
        assert not url_matches("/public/site.css", "/static/*")
    
    def test_repeated_binding_names(self):
        assert url_matches("/a/1/b/2", "/a/:id/b/:id")


class TestExtractParams:
    def test_returns_bound_segments(self):
        assert extract_params("/users/42/orders/7", "/users/:user_id/orders/:order_id") == {
            "user_id": "42",
            "order_id": "7",
        }
    
    def test_no_match(self):
        assert extract_params("/users/42", "/users/:id/orders") is None
    
    def test_compiled_patterns_are_cached(self):
        assert compile_pattern("/users/:id") is compile_pattern("/users/:id")
