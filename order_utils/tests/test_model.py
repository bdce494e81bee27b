"""Tests for order_utils.model — order records and their JSON shape."""

import pytest

from order_utils.errors import ValidationError
from order_utils.model import Order, OrderData, Side, SignatureType, SignedOrder

_MAKER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
_ZERO = "0x0000000000000000000000000000000000000000"


def _order() -> Order:
    return Order(
        salt="1", maker=_MAKER, signer=_MAKER, taker=_ZERO, token_id="1234",
        maker_amount="100", taker_amount="50", expiration="0", nonce="0",
        fee_rate_bps="0", side=Side.SELL, signature_type=SignatureType.POLY_PROXY,
    )


class TestSide:
    def test_values(self):
        assert Side.BUY == 0
        assert Side.SELL == 1

    @pytest.mark.parametrize("value, expected", [
        ("BUY", Side.BUY), ("sell", Side.SELL), (0, Side.BUY), (1, Side.SELL), (Side.SELL, Side.SELL),
    ])
    def test_parse(self, value, expected):
        assert Side.parse(value) is expected

    @pytest.mark.parametrize("value", ["hold", 3, None, 1.0, True])
    def test_parse_invalid(self, value):
        with pytest.raises(ValidationError):
            Side.parse(value)


class TestOrderDataFromDict:
    def test_camel_case_keys(self):
        data = OrderData.from_dict({
            "maker": _MAKER, "taker": _ZERO, "tokenId": "1", "makerAmount": "2",
            "takerAmount": "3", "side": 0, "feeRateBps": "4", "nonce": "5",
            "signatureType": 2, "expiration": "6",
        })
        assert data.token_id == "1"
        assert data.maker_amount == "2"
        assert data.taker_amount == "3"
        assert data.fee_rate_bps == "4"
        assert data.signature_type == 2
        assert data.expiration == "6"
        assert data.signer is None

    def test_snake_case_keys(self):
        data = OrderData.from_dict({
            "maker": _MAKER, "taker": _ZERO, "token_id": "1", "maker_amount": "2",
            "taker_amount": "3", "side": 0, "fee_rate_bps": "4", "nonce": "5",
        })
        assert data.token_id == "1"
        assert data.signature_type is None

    def test_missing_lists_json_keys(self):
        with pytest.raises(ValidationError) as excinfo:
            OrderData.from_dict({"maker": _MAKER})
        message = str(excinfo.value)
        for key in ("taker", "tokenId", "makerAmount", "takerAmount", "side", "feeRateBps", "nonce"):
            assert key in message
        assert "signer" not in message


class TestOrderJson:
    def test_to_dict(self):
        out = _order().to_dict()
        assert list(out) == [
            "salt", "maker", "signer", "taker", "tokenId", "makerAmount", "takerAmount",
            "expiration", "nonce", "feeRateBps", "side", "signatureType",
        ]
        assert type(out["side"]) is int
        assert type(out["signatureType"]) is int
        assert out["side"] == 1
        assert out["signatureType"] == 1

    def test_signed_order_round_trip(self):
        order = _order()
        signed = SignedOrder(**{k: getattr(order, k) for k in order.__dataclass_fields__}, signature="0xab")
        assert signed.to_dict() == {**order.to_dict(), "signature": "0xab"}
        assert signed.unsigned() == order
        assert type(signed.unsigned()) is Order
