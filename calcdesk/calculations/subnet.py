"""
IP Subnet Calculations

IPv4 and IPv6 network arithmetic over plain integers: masking, broadcast,
usable ranges and address counts. Parsing and text formatting go through the
standard ``ipaddress`` module.
"""

import ipaddress
from typing import Tuple, Union
from dataclasses import dataclass

from calcdesk.calculations.errors import InvalidInputError

IPV4_BITS = 32
IPV6_BITS = 128
IPV4_ALL_ONES = 0xFFFFFFFF
IPV6_ALL_ONES = (1 << IPV6_BITS) - 1

PRIVATE_IPV4_NETWORKS = [
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
]


@dataclass(frozen=True)
class SubnetV4Result:
    address: str
    prefix_length: int
    network: str
    broadcast: str
    usable_range: Tuple[str, str]
    usable_host_count: int
    subnet_mask: str
    wildcard_mask: str
    address_class: str
    is_private: bool
    binary_address: str
    binary_mask: str


@dataclass(frozen=True)
class SubnetV6Result:
    address: str
    prefix_length: int
    network: str
    usable_range: Tuple[str, str]
    address_count: str
    subnet_id: str
    interface_id: str
    expanded_address: str


def _parse_v4(address: str) -> int:
    try:
        return int(ipaddress.IPv4Address(address.strip()))
    except ValueError as e:
        raise InvalidInputError(f"Invalid IPv4 address: {address!r}") from e


def _parse_v6(address: str) -> int:
    try:
        return int(ipaddress.IPv6Address(address.strip()))
    except ValueError as e:
        raise InvalidInputError(f"Invalid IPv6 address: {address!r}") from e


def _format_v4(value: int) -> str:
    return str(ipaddress.IPv4Address(value))


def _format_v6(value: int) -> str:
    return str(ipaddress.IPv6Address(value))


def _to_binary_v4(value: int) -> str:
    bits = format(value, "032b")
    return ".".join(bits[i:i + 8] for i in range(0, IPV4_BITS, 8))


def ipv4_mask(prefix_length: int) -> int:
    """Return the 32-bit network mask for a prefix length."""
    if prefix_length == 0:
        return 0
    return (IPV4_ALL_ONES << (IPV4_BITS - prefix_length)) & IPV4_ALL_ONES


def ipv6_mask(prefix_length: int) -> int:
    """Return the 128-bit network mask for a prefix length."""
    if prefix_length == 0:
        return 0
    return (IPV6_ALL_ONES << (IPV6_BITS - prefix_length)) & IPV6_ALL_ONES


def parse_prefix(subnet: Union[str, int]) -> int:
    """
    Parse an IPv4 prefix given as CIDR length ("24", "/24") or dotted mask
    ("255.255.255.0"). Non-contiguous masks are rejected.
    """
    if isinstance(subnet, int):
        prefix_length = subnet
    else:
        text = subnet.strip().lstrip("/")
        if "." in text:
            mask = _parse_v4(text)
            prefix_length = bin(mask).count("1")
            if ipv4_mask(prefix_length) != mask:
                raise InvalidInputError(f"Subnet mask is not contiguous: {subnet!r}")
        else:
            try:
                prefix_length = int(text)
            except ValueError as e:
                raise InvalidInputError(f"Invalid prefix length: {subnet!r}") from e

    if not 0 <= prefix_length <= IPV4_BITS:
        raise InvalidInputError("IPv4 prefix length must be between 0 and 32")
    return prefix_length


def classify_ipv4(address: int) -> str:
    """Classful network class (A-E) from the first octet."""
    first_octet = address >> 24
    if first_octet < 128:
        return "A"
    if first_octet < 192:
        return "B"
    if first_octet < 224:
        return "C"
    if first_octet < 240:
        return "D"
    return "E"


def subnet_v4(address: str, prefix_length: Union[str, int]) -> SubnetV4Result:
    """
    Calculate IPv4 subnet details.

    Args:
        address: Dotted-quad address, e.g. "192.168.1.1"
        prefix_length: CIDR length (0-32) or dotted subnet mask

    Returns:
        Network, broadcast, usable host range and masks. /31 and /32 have
        no usable hosts and their range is the whole block.

    Raises:
        InvalidInputError: Malformed address or prefix out of range
    """
    value = _parse_v4(address)
    prefix = parse_prefix(prefix_length)

    mask = ipv4_mask(prefix)
    wildcard = ~mask & IPV4_ALL_ONES
    network = value & mask
    broadcast = network | wildcard

    block_size = 1 << (IPV4_BITS - prefix)
    usable_host_count = max(0, block_size - 2)

    if usable_host_count > 0:
        usable_range = (_format_v4(network + 1), _format_v4(broadcast - 1))
    else:
        usable_range = (_format_v4(network), _format_v4(broadcast))

    ip = ipaddress.IPv4Address(value)

    return SubnetV4Result(
        address=_format_v4(value),
        prefix_length=prefix,
        network=_format_v4(network),
        broadcast=_format_v4(broadcast),
        usable_range=usable_range,
        usable_host_count=usable_host_count,
        subnet_mask=_format_v4(mask),
        wildcard_mask=_format_v4(wildcard),
        address_class=classify_ipv4(value),
        is_private=any(ip in net for net in PRIVATE_IPV4_NETWORKS),
        binary_address=_to_binary_v4(value),
        binary_mask=_to_binary_v4(mask),
    )


def subnet_v6(address: str, prefix_length: int) -> SubnetV6Result:
    """
    Calculate IPv6 subnet details.

    The subnet ID is the 16 bits following a /48 site prefix and the
    interface ID is the low 64 bits, both rendered as hex groups.

    Raises:
        InvalidInputError: Malformed address or prefix outside 0-128
    """
    value = _parse_v6(address)
    if not 0 <= prefix_length <= IPV6_BITS:
        raise InvalidInputError("IPv6 prefix length must be between 0 and 128")

    mask = ipv6_mask(prefix_length)
    network = value & mask
    last = network | (~mask & IPV6_ALL_ONES)

    subnet_id = (value >> 64) & 0xFFFF
    interface_id = value & ((1 << 64) - 1)
    interface_hex = format(interface_id, "016x")

    return SubnetV6Result(
        address=_format_v6(value),
        prefix_length=prefix_length,
        network=_format_v6(network),
        usable_range=(_format_v6(network), _format_v6(last)),
        address_count=str(1 << (IPV6_BITS - prefix_length)),
        subnet_id=format(subnet_id, "04x"),
        interface_id=":".join(
            interface_hex[i:i + 4] for i in range(0, 16, 4)
        ),
        expanded_address=ipaddress.IPv6Address(value).exploded,
    )
