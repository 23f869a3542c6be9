"""Tests for request parsing at the boundary."""

import pytest

from storefront.application.dto import CreateOrderRequest, OrderLineSpec, OrderUpdate
from storefront.domain.exceptions import ValidationError


class TestCreateOrderRequest:

    def test_parses_payload(self):
        req = CreateOrderRequest.from_payload({
            "userId": "u1",
            "status": True,
            "details": [{"productId": "A", "amount": 3}],
        })
        assert req == CreateOrderRequest("u1", True, [OrderLineSpec("A", 3)])

    def test_lines_alias(self):
        req = CreateOrderRequest.from_payload({
            "userId": "u1", "status": False, "lines": [{"productId": 7, "amount": 1}],
        })
        assert req.lines == [OrderLineSpec("7", 1)]

    @pytest.mark.parametrize(
        "payload, message",
        [
            ([], "must be an object"),
            ({"userId": "u1", "status": True, "details": []}, "at least one line"),
            ({"status": True, "details": [{"productId": "A", "amount": 1}]}, "'userId' is required"),
            ({"userId": "u1", "details": [{"productId": "A", "amount": 1}]}, "'status' must be a boolean"),
            ({"userId": "u1", "status": "yes", "details": [{"productId": "A", "amount": 1}]}, "'status' must be a boolean"),
            ({"userId": "u1", "status": True, "details": [{"productId": "A", "amount": "3"}]}, "'amount' must be an integer"),
            ({"userId": "u1", "status": True, "details": [{"productId": "A", "amount": -1}]}, "'amount' must be positive"),
            ({"userId": "u1", "status": True, "details": [{"amount": 1}]}, "'productId' is required"),
        ],
    )
    def test_rejects_malformed_payloads(self, payload, message):
        with pytest.raises(ValidationError, match=message):
            CreateOrderRequest.from_payload(payload)


class TestOrderUpdate:

    def test_partial_update(self):
        assert OrderUpdate.from_payload({"status": False}) == OrderUpdate(status=False)

    def test_total_cannot_be_set(self):
        with pytest.raises(ValidationError, match="cannot be set"):
            OrderUpdate.from_payload({"total": 10})
