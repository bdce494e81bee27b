"""Order records for the three lifecycle stages: intent, canonical order, signed order."""

from collections.abc import Mapping
from dataclasses import MISSING, dataclass, fields
from enum import IntEnum
from typing import Any

from .errors import ValidationError

# Typed-data envelope in eth-account's ``full_message`` shape:
# {"primaryType": ..., "types": {...}, "domain": {...}, "message": {...}}
TypedData = dict[str, Any]


class Side(IntEnum):
    BUY = 0
    SELL = 1

    @classmethod
    def parse(cls, value) -> "Side":
        """Accept a Side, 0/1, or "BUY"/"SELL" (any case)."""
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValidationError(f"Invalid side: {value!r}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Invalid side: {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Invalid side: {value!r}") from None


class SignatureType(IntEnum):
    EOA = 0               # ECDSA signature from the maker's own key
    POLY_PROXY = 1        # Polymarket proxy wallet, signed by its owner
    POLY_GNOSIS_SAFE = 2  # Gnosis Safe, signed by an owner


# snake_case attribute -> camelCase JSON key
_JSON_KEYS = {
    "token_id": "tokenId",
    "maker_amount": "makerAmount",
    "taker_amount": "takerAmount",
    "fee_rate_bps": "feeRateBps",
    "signature_type": "signatureType",
}


def _json_key(name: str) -> str:
    return _JSON_KEYS.get(name, name)


@dataclass(frozen=True)
class OrderData:
    """Caller-supplied order intent.

    Amounts and ids are decimal-integer strings mirroring on-chain uint256.
    ``signer``, ``expiration`` and ``signature_type`` are filled in by the
    builder when left as None.
    """

    maker: str
    taker: str
    token_id: str
    maker_amount: str
    taker_amount: str
    side: Side
    fee_rate_bps: str
    nonce: str
    signer: str | None = None
    expiration: str | None = None
    signature_type: SignatureType | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "OrderData":
        """Build from the JSON shape (camelCase keys); snake_case keys also work."""
        kwargs = {}
        missing = []
        for f in fields(cls):
            key = _json_key(f.name)
            if key in data:
                kwargs[f.name] = data[key]
            elif f.name in data:
                kwargs[f.name] = data[f.name]
            elif f.default is MISSING:
                missing.append(key)
        if missing:
            raise ValidationError(f"Missing required order fields: {', '.join(missing)}")
        return cls(**kwargs)


@dataclass(frozen=True)
class Order:
    """Canonical order, field order matching the contract's Order struct."""

    salt: str
    maker: str
    signer: str
    taker: str
    token_id: str
    maker_amount: str
    taker_amount: str
    expiration: str
    nonce: str
    fee_rate_bps: str
    side: int
    signature_type: int

    def to_dict(self) -> dict:
        """JSON shape: camelCase keys, amounts as strings, side/signatureType as ints."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("side", "signature_type"):
                value = int(value)
            out[_json_key(f.name)] = value
        return out


@dataclass(frozen=True)
class SignedOrder(Order):
    """Order plus the 0x-prefixed 65-byte ECDSA signature (r || s || v)."""

    signature: str

    def unsigned(self) -> Order:
        return Order(**{f.name: getattr(self, f.name) for f in fields(Order)})
