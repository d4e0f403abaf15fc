"""Tests for human and JSON rendering of ServiceResult."""

from __future__ import annotations

import json

from checkoutxml.output.formatters import format_result, format_warnings
from checkoutxml.services.result import ServiceError, ServiceResult


class TestFormatResult:
    def test_json_output(self) -> None:
        result = ServiceResult(ok=True, op="decode", data={"document": "RequestReceivedResponse"})
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"] == {"document": "RequestReceivedResponse"}

    def test_human_ok(self) -> None:
        result = ServiceResult(
            ok=True,
            op="decode",
            data={"document": "ChargebackAmountNotification", "amount": {"amount": 1}},
        )
        output = format_result(result)
        assert output.splitlines()[0] == "OK decode"
        assert "ChargebackAmountNotification" in output
        assert '{"amount":1}' in output

    def test_xml_printed_verbatim(self) -> None:
        xml = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<send-buyer-message google-order-number="841171949013218" '
            'xmlns="http://checkout.google.com/schema/2"><message>Your order has shipped</message>'
            "</send-buyer-message>"
        )
        result = ServiceResult(
            ok=True, op="render", data={"kind": "send-buyer-message", "xml": xml}
        )
        output = format_result(result)
        assert output.endswith(xml)

    def test_items_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="decode",
            data={
                "document": "NewOrderNotification",
                "items": [{"name": "Widget", "quantity": 2, "unit_price": "9.99 USD"}],
            },
        )
        output = format_result(result)
        assert "Widget" in output
        assert "9.99 USD" in output

    def test_human_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="decode",
            error=ServiceError(code="API_ERROR", message="Bad [request]", detail={"serial_number": "s"}),
        )
        output = format_result(result)
        assert output.splitlines()[0] == "ERROR decode"
        assert "Bad [request]" in output
        assert "code: API_ERROR" in output
        assert "serial_number: s" in output


class TestFormatWarnings:
    def test_one_line_per_warning(self) -> None:
        output = format_warnings(["Tax table 'Missing Table' not found", "Second"])
        assert output.splitlines() == [
            "WARNING Tax table 'Missing Table' not found",
            "WARNING Second",
        ]

    def test_empty(self) -> None:
        assert format_warnings([]) == ""
