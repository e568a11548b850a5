"""
SS58 address validation and normalization.

Encoding and checksum validation are delegated to the SS58 implementation
of ``scalecodec``; this module only decides which form of the input to
validate and packages the outcome.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from scalecodec.utils.ss58 import ss58_decode, ss58_encode

AddressEncoder = Callable[[str, int], str]
AddressChecker = Callable[[str, int], tuple[bool, Optional[str]]]


@dataclass(frozen=True)
class AddressValidation:
    """Result of validating an address under a network prefix."""
    valid: bool
    reason: Optional[str] = None        # Failure reason, None when valid
    normalized: Optional[str] = None    # Address re-encoded under the prefix

    @property
    def field_message(self) -> str:
        """Message for marking an input field; empty when valid."""
        if self.valid:
            return ""
        return f"Invalid: {self.reason or 'unknown'}"


def encode_address(address: str, prefix: int) -> str:
    """
    Encode a public key or SS58 address under a network prefix.

    Args:
        address: 0x-prefixed hex public key or SS58 address of any network
        prefix: Target SS58 prefix

    Returns:
        SS58 address for the prefix

    Raises:
        ValueError: If the input cannot be interpreted as an address
    """
    address = address.strip()
    try:
        if address.startswith("0x"):
            return ss58_encode(address, ss58_format=prefix)
        return ss58_encode(ss58_decode(address), ss58_format=prefix)
    except IndexError as e:
        # Too few decoded bytes to hold a prefix
        raise ValueError("Invalid address length") from e


def check_address(address: str, prefix: int) -> tuple[bool, Optional[str]]:
    """
    Validate format, prefix and checksum of an SS58 address.

    Args:
        address: SS58 address
        prefix: Expected SS58 prefix

    Returns:
        Tuple of (is_valid, reason); reason is None for valid addresses
    """
    address = address.strip()
    if not address:
        return False, "Empty address"
    if address.startswith("0x"):
        return False, "Not an SS58 address"

    try:
        ss58_decode(address, valid_ss58_format=prefix)
    except ValueError as e:
        return False, str(e) or None
    except IndexError:
        return False, "Invalid address length"

    return True, None


def validate_address(
    address: str,
    prefix: int,
    encoder: AddressEncoder = encode_address,
    checker: AddressChecker = check_address
) -> AddressValidation:
    """
    Validate an address under a network prefix without raising.

    The input is normalized first; when it cannot be encoded the raw input
    is validated instead, so every failure comes back as a reason.

    Args:
        address: Raw address or public key as typed by the operator
        prefix: Active network SS58 prefix
        encoder: Address encoding collaborator
        checker: Address checksum validation collaborator

    Returns:
        AddressValidation with validity, reason and normalized form
    """
    normalized: Optional[str] = None
    try:
        normalized = encoder(address, prefix)
    except (ValueError, TypeError, IndexError):
        normalized = None

    valid, reason = checker(normalized if normalized is not None else address, prefix)

    return AddressValidation(
        valid=valid,
        reason=None if valid else reason,
        normalized=normalized,
    )
