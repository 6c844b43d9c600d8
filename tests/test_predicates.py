"""Tests for predicate evaluation."""

import json

import pytest

from dstest.core.models import TestCasePredicate
from dstest.matching.predicates import match_predicate, resolve_raw_value, validate_predicates

from .helpers import make_transaction


class TestMatchPredicate:
    def test_string_value_matches_without_quotes(self):
        body = '{"amount":{"total":"300"}}'
        assert match_predicate(body, "amount.total", "300")
    
    def test_lookalike_value_does_not_match(self):
        body = '{"amount":{"total":"300"}}'
        assert not match_predicate(body, "amount.total", "TOTAL-LOOKALIKE")
    
    def test_number_matches_its_text(self):
        assert match_predicate('{"amount":{"total":300}}', "amount.total", "300")
    
    def test_comparison_ignores_case(self):
        body = '{"source":{"sourceType":"PaymentTrack"}}'
        assert match_predicate(body, "source.sourceType", "paymenttrack")
        assert match_predicate(body, "source.sourceType", "PAYMENTTRACK")
    
    def test_boolean_matches_capitalized_text(self):
        body = '{"transactionDetails":{"captureFlag":true}}'
        assert match_predicate(body, "transactionDetails.captureFlag", "True")
        assert not match_predicate(body, "transactionDetails.captureFlag", "False")
    
    def test_float_keeps_source_text(self):
        body = '{"amount":{"total":300.50}}'
        assert match_predicate(body, "amount.total", "300.50")
        # Not a numeric comparison
        assert not match_predicate(body, "amount.total", "300.5")
    
    def test_null_value(self):
        assert match_predicate('{"customer":null}', "customer", "null")
    
    def test_array_index(self):
        body = json.dumps({"items": [{"sku": "A-1"}, {"sku": "B-2"}]})
        assert match_predicate(body, "items.1.sku", "b-2")
        assert not match_predicate(body, "items.2.sku", "B-2")
        assert not match_predicate(body, "items.first.sku", "A-1")
    
    @pytest.mark.parametrize("body", [
        '{"amount":{}}',
        '{"amount":{"total":300',
        "not json",
        "",
        '["amount"]',
    ])
    def test_unresolvable_target_is_a_mismatch(self, body):
        assert not match_predicate(body, "amount.total", "300")
    
    def test_empty_attribute_is_a_mismatch(self):
        assert not match_predicate('{"a":1}', "", "1")
    
    def test_empty_string_value(self):
        assert match_predicate('{"note":""}', "note", "")
    
    def test_escapes_compare_as_written(self):
        body = '{"path":"C:\\\\temp"}'
        assert match_predicate(body, "path", "C:\\\\temp")
        assert not match_predicate(body, "path", "C:\\temp")
    
    def test_deeply_nested_body_is_a_mismatch(self):
        body = '{"a":' + "[" * 100000 + "]" * 100000 + "}"
        assert not match_predicate(body, "a", "x")
    
    def test_oversized_integer_inside_object(self):
        body = '{"amount":{"total":1' + "0" * 5000 + "}}"
        assert not match_predicate(body, "amount", "x")
        assert match_predicate(body, "amount.total", "1" + "0" * 5000)


class TestResolveRawValue:
    def test_object_is_compact_json(self):
        body = '{"amount": {"total": 300, "currency": "USD"}}'
        assert resolve_raw_value(body, "amount") == '{"total":300,"currency":"USD"}'
    
    def test_non_ascii_text_is_kept(self):
        body = '{"customer": {"name": "Ren\u00e9e", "city": "Montr\u00e9al"}}'
        assert resolve_raw_value(body, "customer") == '{"name":"Ren\u00e9e","city":"Montr\u00e9al"}'
    
    def test_missing_path(self):
        assert resolve_raw_value('{"a":{"b":1}}', "a.c") is None
    
    def test_scalar_under_path_is_not_descended(self):
        assert resolve_raw_value('{"a":"text"}', "a.length") is None


class TestValidatePredicates:
    def test_all_predicates_must_match(self, charge_case, charge_body):
        assert validate_predicates(charge_case.predicates, make_transaction(charge_body))
        
        charge_body["source"]["sourceType"] = "Other"
        assert not validate_predicates(charge_case.predicates, make_transaction(charge_body))
    
    def test_no_predicates_matches_anything(self):
        assert validate_predicates([], make_transaction("not json"))
    
    def test_stops_at_first_failing_predicate(self):
        predicates = [
            TestCasePredicate(attribute="missing", expected_value="x"),
            TestCasePredicate(attribute="a", expected_value="1"),
        ]
        assert not validate_predicates(predicates, make_transaction({"a": 1}))
