"""
IP subnet API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Tuple, Union

from calcdesk.api.common import to_http_error
from calcdesk.calculations import subnet
from calcdesk.calculations.errors import CalculationError

router = APIRouter()


class IPv4Input(BaseModel):
    """IPv4 address with CIDR length or dotted subnet mask."""

    ip_address: str
    subnet: Union[int, str] = 24


class IPv4Response(BaseModel):
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


@router.post("/ipv4", response_model=IPv4Response)
async def calculate_ipv4(inputs: IPv4Input):
    """Calculate IPv4 subnet details."""
    try:
        result = subnet.subnet_v4(inputs.ip_address, inputs.subnet)
    except CalculationError as e:
        raise to_http_error(e)
    return IPv4Response(**vars(result))


class IPv6Input(BaseModel):
    ip_address: str
    prefix: int = 64


class IPv6Response(BaseModel):
    address: str
    prefix_length: int
    network: str
    usable_range: Tuple[str, str]
    address_count: str
    subnet_id: str
    interface_id: str
    expanded_address: str


@router.post("/ipv6", response_model=IPv6Response)
async def calculate_ipv6(inputs: IPv6Input):
    """Calculate IPv6 subnet details."""
    try:
        result = subnet.subnet_v6(inputs.ip_address, inputs.prefix)
    except CalculationError as e:
        raise to_http_error(e)
    return IPv6Response(**vars(result))
