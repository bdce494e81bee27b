"""Exchange order builder — defaults, salt, typed data, hash and signature."""

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import fields

from eth_utils import is_address, is_checksum_address, is_checksum_formatted_address

from .config import Config
from .constants import MAX_UINT256
from .eip712 import build_domain, build_order_typed_data, hash_typed_data
from .errors import ValidationError
from .model import Order, OrderData, Side, SignatureType, SignedOrder, TypedData
from .salt import generate_order_salt
from .signer import LocalAccountSigner, OrderSigner

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = (
    "maker", "taker", "token_id", "maker_amount", "taker_amount", "side", "fee_rate_bps", "nonce",
)
_DECIMAL_RE = re.compile(r"[0-9]+")
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))


def _uint_string(name: str, value) -> str:
    """Validate a uint256 given as a decimal string or int; floats are rejected."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a decimal integer, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValidationError(f"{name} must be a non-negative decimal integer")
        if value > MAX_UINT256:
            raise ValidationError(f"{name} exceeds uint256")
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        raise ValidationError(f"{name} must be a decimal integer string, got {type(value).__name__}")
    if not _DECIMAL_RE.fullmatch(text):
        raise ValidationError(f"{name} must be a non-negative decimal integer, got {value!r}")
    if len(text) > _MAX_UINT256_DIGITS or int(text) > MAX_UINT256:
        raise ValidationError(f"{name} exceeds uint256")
    return text


def _address(name: str, value) -> str:
    if not isinstance(value, str) or not is_address(value):
        raise ValidationError(f"{name} is not a valid address: {value!r}")
    if is_checksum_formatted_address(value) and not is_checksum_address(value):
        raise ValidationError(f"{name} has an invalid checksum: {value!r}")
    return value


def _signature_type(value) -> int:
    if value is None:
        return int(SignatureType.EOA)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid signature type: {value!r}")
    try:
        return int(SignatureType(value))
    except ValueError:
        raise ValidationError(f"Invalid signature type: {value!r}") from None


class ExchangeOrderBuilder:
    """Builds and signs orders for one exchange deployment.

    Args:
        exchange_address: Exchange contract address (the EIP-712 verifyingContract).
        chain_id: Chain the exchange is deployed on.
        signer: Signing capability (address lookup + typed-data signing).
        generate_salt: Zero-argument salt strategy returning a decimal string.
    """

    def __init__(
        self,
        exchange_address: str,
        chain_id: int,
        signer: OrderSigner,
        generate_salt: Callable[[], str] = generate_order_salt,
    ):
        self.exchange_address = _address("exchange_address", exchange_address)
        self.chain_id = chain_id
        self._signer = signer
        self._generate_salt = generate_salt
        self._domain = build_domain(chain_id, exchange_address)

    @classmethod
    def from_config(
        cls,
        config: Config,
        signer: OrderSigner | None = None,
        generate_salt: Callable[[], str] = generate_order_salt,
    ) -> "ExchangeOrderBuilder":
        """Builder for the configured deployment, signing with the configured key by default."""
        if signer is None:
            if not config.private_key:
                raise ValidationError("No signer given and no private_key configured")
            signer = LocalAccountSigner(config.private_key)
        return cls(config.resolve_exchange_address(), config.chain_id, signer, generate_salt)

    def __repr__(self) -> str:
        return f"ExchangeOrderBuilder(exchange={self.exchange_address}, chain_id={self.chain_id})"

    @property
    def domain(self) -> dict:
        return dict(self._domain)

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build_order(self, data: OrderData | Mapping) -> Order:
        """Validate an order intent, fill defaults and attach a fresh salt."""
        if isinstance(data, Mapping):
            data = OrderData.from_dict(data)

        missing = [name for name in _REQUIRED_FIELDS if getattr(data, name) is None]
        if missing:
            raise ValidationError(f"Missing required order fields: {', '.join(missing)}")

        maker = _address("maker", data.maker)
        signer = _address("signer", data.signer) if data.signer else maker
        expiration = "0" if data.expiration is None else _uint_string("expiration", data.expiration)

        order = Order(
            salt=_uint_string("salt", self._generate_salt()),
            maker=maker,
            signer=signer,
            taker=_address("taker", data.taker),
            token_id=_uint_string("token_id", data.token_id),
            maker_amount=_uint_string("maker_amount", data.maker_amount),
            taker_amount=_uint_string("taker_amount", data.taker_amount),
            expiration=expiration,
            nonce=_uint_string("nonce", data.nonce),
            fee_rate_bps=_uint_string("fee_rate_bps", data.fee_rate_bps),
            side=int(Side.parse(data.side)),
            signature_type=_signature_type(data.signature_type),
        )
        logger.debug(
            "Built order salt=%s side=%s token=%s maker_amount=%s taker_amount=%s",
            order.salt, Side(order.side).name, order.token_id[:16],
            order.maker_amount, order.taker_amount,
        )
        return order

    def build_order_typed_data(self, order: Order) -> TypedData:
        return build_order_typed_data(order, self._domain)

    def build_order_hash(self, typed_data: TypedData) -> str:
        """0x-prefixed EIP-712 digest the exchange contract derives for this order."""
        return "0x" + hash_typed_data(typed_data).hex()

    # ------------------------------------------------------------------
    # Sign
    # ------------------------------------------------------------------

    async def build_order_signature(self, typed_data: TypedData) -> str:
        """Ask the signer for a signature over the envelope; returned unmodified."""
        return await self._signer.sign_typed_data(
            typed_data["domain"], typed_data["types"], typed_data["message"]
        )

    async def build_signed_order(self, data: OrderData | Mapping) -> SignedOrder:
        """Build, type and sign an order in one step."""
        order = self.build_order(data)

        signer_address = await self._signer.get_address()
        if signer_address.lower() != order.signer.lower():
            raise ValidationError(
                f"Signer does not match: order signer {order.signer}, signing address {signer_address}"
            )

        typed_data = self.build_order_typed_data(order)
        signature = await self.build_order_signature(typed_data)
        return SignedOrder(
            **{f.name: getattr(order, f.name) for f in fields(order)},
            signature=signature,
        )
