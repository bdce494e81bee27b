"""CTF Exchange constants — deployments, EIP-712 domain and Order schema."""

from .errors import ConfigError

POLYGON = 137
AMOY = 80002

# Exchange contract addresses per chain: (CTF Exchange, Neg Risk CTF Exchange)
_EXCHANGES = {
    POLYGON: (
        "0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E",
        "0xC5d563A36AE78145C45a50134d48A1215220f80a",
    ),
    AMOY: (
        "0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40",
        "0xC5d563A36AE78145C45a50134d48A1215220f80a",
    ),
}

# EIP-712 domain
PROTOCOL_NAME = "Polymarket CTF Exchange"
PROTOCOL_VERSION = "1"

EIP712_DOMAIN = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

# EIP-712 Order type (12 fields, order is part of the type hash)
ORDER_STRUCTURE = [
    {"name": "salt", "type": "uint256"},
    {"name": "maker", "type": "address"},
    {"name": "signer", "type": "address"},
    {"name": "taker", "type": "address"},
    {"name": "tokenId", "type": "uint256"},
    {"name": "makerAmount", "type": "uint256"},
    {"name": "takerAmount", "type": "uint256"},
    {"name": "expiration", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "feeRateBps", "type": "uint256"},
    {"name": "side", "type": "uint8"},
    {"name": "signatureType", "type": "uint8"},
]

MAX_UINT256 = 2**256 - 1


def get_exchange_address(chain_id: int, neg_risk: bool = False) -> str:
    """Return the known exchange deployment for a chain."""
    try:
        ctf, neg_risk_ctf = _EXCHANGES[chain_id]
    except KeyError:
        raise ConfigError(f"No known exchange deployment for chain {chain_id}") from None
    return neg_risk_ctf if neg_risk else ctf
