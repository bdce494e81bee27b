"""Build, hash and sign CTF Exchange orders (EIP-712)."""

from .builder import ExchangeOrderBuilder
from .config import Config
from .errors import ConfigError, OrderUtilsError, SigningError, ValidationError
from .model import Order, OrderData, Side, SignatureType, SignedOrder
from .salt import generate_order_salt
from .signer import LocalAccountSigner, OrderSigner, recover_signer

__all__ = [
    "ExchangeOrderBuilder",
    "Config",
    "ConfigError",
    "OrderUtilsError",
    "SigningError",
    "ValidationError",
    "Order",
    "OrderData",
    "Side",
    "SignatureType",
    "SignedOrder",
    "generate_order_salt",
    "LocalAccountSigner",
    "OrderSigner",
    "recover_signer",
]
