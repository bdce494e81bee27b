"""EIP-712 typed-data construction and hashing for CTF Exchange orders.

The hashing walks each struct schema in declared order, exactly as the
exchange contract does:

    hashStruct(s) = keccak256(typeHash || encodeData(s))
    digest        = keccak256(0x19 || 0x01 || domainSeparator || hashStruct(message))

Dynamic values (string, bytes) are keccak-hashed before packing, atomic values
are ABI-encoded into a 32-byte word, nested structs contribute their own
struct hash, and arrays contribute the keccak of their packed elements.
"""

import re

from eth_abi import encode
from eth_utils import keccak, to_bytes, to_canonical_address

from .constants import EIP712_DOMAIN, ORDER_STRUCTURE, PROTOCOL_NAME, PROTOCOL_VERSION
from .model import Order, TypedData

_ARRAY_RE = re.compile(r"^(.*)\[(\d*)\]$")


def build_domain(chain_id: int, verifying_contract: str) -> dict:
    """EIP-712 domain binding signatures to one exchange deployment."""
    return {
        "name": PROTOCOL_NAME,
        "version": PROTOCOL_VERSION,
        "chainId": chain_id,
        "verifyingContract": verifying_contract,
    }


def build_order_typed_data(order: Order, domain: dict) -> TypedData:
    """Wrap an order in its typed-data envelope. The message restates the order verbatim."""
    return {
        "primaryType": "Order",
        "types": {
            "EIP712Domain": [dict(f) for f in EIP712_DOMAIN],
            "Order": [dict(f) for f in ORDER_STRUCTURE],
        },
        "domain": dict(domain),
        "message": order.to_dict(),
    }


# ----------------------------------------------------------------------
# Type encoding
# ----------------------------------------------------------------------

def _base_type(type_: str) -> str:
    match = _ARRAY_RE.match(type_)
    return _base_type(match.group(1)) if match else type_


def _find_dependencies(primary_type: str, types: dict, found: set) -> set:
    if primary_type in found or primary_type not in types:
        return found
    found.add(primary_type)
    for field in types[primary_type]:
        _find_dependencies(_base_type(field["type"]), types, found)
    return found


def encode_type(primary_type: str, types: dict) -> str:
    """Canonical type string, referenced struct types appended alphabetically."""
    deps = _find_dependencies(primary_type, types, set())
    deps.discard(primary_type)
    out = ""
    for name in [primary_type] + sorted(deps):
        params = ",".join(f"{f['type']} {f['name']}" for f in types[name])
        out += f"{name}({params})"
    return out


def hash_type(primary_type: str, types: dict) -> bytes:
    return keccak(text=encode_type(primary_type, types))


# ----------------------------------------------------------------------
# Data encoding
# ----------------------------------------------------------------------

def _to_int(value) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith(("0x", "0X")) else int(value, 10)
    return int(value)


def _to_bytes(value) -> bytes:
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    return bytes(value)


def _encode_field(type_: str, value, types: dict) -> tuple[str, object]:
    """Return the (abi_type, abi_value) pair occupying one 32-byte word."""
    if type_ in types:
        return "bytes32", hash_struct(type_, value, types)

    match = _ARRAY_RE.match(type_)
    if match:
        item_type = match.group(1)
        encoded = [_encode_field(item_type, item, types) for item in value]
        return "bytes32", keccak(encode([t for t, _ in encoded], [v for _, v in encoded]))

    if type_ == "string":
        return "bytes32", keccak(text=value)
    if type_ == "bytes":
        return "bytes32", keccak(_to_bytes(value))
    if type_ == "address":
        return "address", to_canonical_address(value)
    if type_ == "bool":
        return "bool", bool(value)
    if type_.startswith(("uint", "int")):
        return type_, _to_int(value)
    if type_.startswith("bytes"):
        return type_, _to_bytes(value)
    raise TypeError(f"Unsupported EIP-712 type: {type_}")


def encode_data(primary_type: str, data: dict, types: dict) -> bytes:
    """typeHash followed by one 32-byte word per field, in schema order."""
    abi_types = ["bytes32"]
    abi_values = [hash_type(primary_type, types)]
    for field in types[primary_type]:
        abi_type, abi_value = _encode_field(field["type"], data[field["name"]], types)
        abi_types.append(abi_type)
        abi_values.append(abi_value)
    return encode(abi_types, abi_values)


def hash_struct(primary_type: str, data: dict, types: dict) -> bytes:
    return keccak(encode_data(primary_type, data, types))


def hash_domain(domain: dict, types: dict | None = None) -> bytes:
    """Domain separator. Uses the envelope's EIP712Domain schema when given."""
    domain_types = {"EIP712Domain": (types or {}).get("EIP712Domain", EIP712_DOMAIN)}
    return hash_struct("EIP712Domain", domain, domain_types)


def typed_data_hashes(typed_data: TypedData) -> tuple[bytes, bytes]:
    """(domain separator, struct hash) of a full typed-data envelope."""
    types = typed_data["types"]
    domain_separator = hash_domain(typed_data["domain"], types)
    message_types = {k: v for k, v in types.items() if k != "EIP712Domain"}
    struct_hash = hash_struct(typed_data["primaryType"], typed_data["message"], message_types)
    return domain_separator, struct_hash


def hash_typed_data(typed_data: TypedData) -> bytes:
    """32-byte EIP-712 digest of a full typed-data envelope."""
    domain_separator, struct_hash = typed_data_hashes(typed_data)
    return keccak(b"\x19\x01" + domain_separator + struct_hash)
