"""
Cross-shop Gates - Input contract rules.

G1: AddressFormat - Customer address is 0x + 40 hex chars
G2: ShopIdentity - Redemption shop id is present
G3: RequestAmount - Requested amount is a whole number in (0, MAX_REQUEST_AMOUNT]
G4: RedemptionInput - Verification id present, redemption amount a positive whole number

Gate failures are caller errors: nothing is written to the ledger.
"""

import re
from dataclasses import dataclass

ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


class GateError(Exception):
    """Gate validation error."""

    def __init__(self, gate_name: str, message: str, details: dict | None = None):
        self.gate_name = gate_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{gate_name}] {message}")


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


def _is_whole_number(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Cross-shop validation gates."""

    # =========================================================================
    # G1: Address Format
    # =========================================================================

    @classmethod
    def address_format(cls, address) -> GateResult:
        """
        G1: Address must match ^0x[a-fA-F0-9]{40}$.

        Raises:
            GateError: If the address is missing or malformed
        """
        if not isinstance(address, str) or not ADDRESS_RE.fullmatch(address):
            raise GateError(
                "G1_AddressFormat",
                "Invalid customer address format",
                {"address": address},
            )

        return GateResult(True, "G1_AddressFormat")

    @classmethod
    def check_address_format(cls, address) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.address_format(address)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Shop Identity
    # =========================================================================

    @classmethod
    def shop_identity(cls, shop_id) -> GateResult:
        """
        G2: Shop id must be a non-blank string.

        Raises:
            GateError: If the shop id is missing or blank
        """
        if not isinstance(shop_id, str) or not shop_id.strip():
            raise GateError(
                "G2_ShopIdentity",
                "Redemption shop ID is required",
            )

        return GateResult(True, "G2_ShopIdentity")

    # =========================================================================
    # G3: Request Amount
    # =========================================================================

    @classmethod
    def request_amount(cls, amount, maximum: int | None = None) -> GateResult:
        """
        G3: Requested amount must be a whole number, > 0 and <= maximum.

        Args:
            amount: Requested RCN
            maximum: Per-request ceiling (defaults to MAX_REQUEST_AMOUNT)

        Raises:
            GateError: If the amount breaks the contract
        """
        if maximum is None:
            from crossshop.conf import crossshop_settings

            maximum = crossshop_settings.MAX_REQUEST_AMOUNT

        if not _is_whole_number(amount):
            raise GateError(
                "G3_RequestAmount",
                "Requested amount must be a whole number",
                {"amount": amount},
            )
        if amount <= 0:
            raise GateError(
                "G3_RequestAmount",
                "Requested amount must be greater than 0",
                {"amount": amount},
            )
        if amount > maximum:
            raise GateError(
                "G3_RequestAmount",
                f"Requested amount exceeds maximum allowed per transaction ({maximum} RCN)",
                {"amount": amount, "maximum": maximum},
            )

        return GateResult(True, "G3_RequestAmount")

    @classmethod
    def check_request_amount(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.request_amount(*args, **kwargs)
            return True
        except GateError:
            return False

    @classmethod
    def redemption_request(cls, request) -> GateResult:
        """
        G1 + G2 + G3 over a RedemptionRequest, in that order.

        Raises:
            GateError: On the first violated gate
        """
        cls.address_format(request.customer_address)
        cls.shop_identity(request.redemption_shop_id)
        cls.request_amount(request.requested_amount)
        return GateResult(True, "RedemptionRequest")

    # =========================================================================
    # G4: Redemption Input
    # =========================================================================

    @classmethod
    def redemption_input(cls, verification_id, amount) -> GateResult:
        """
        G4: Processing needs a verification id and a positive whole amount.

        Raises:
            GateError: If either input is malformed
        """
        if not isinstance(verification_id, str) or not verification_id.strip():
            raise GateError(
                "G4_RedemptionInput",
                "Verification ID is required",
            )
        if not _is_whole_number(amount):
            raise GateError(
                "G4_RedemptionInput",
                "Redemption amount must be a whole number",
                {"amount": amount},
            )
        if amount <= 0:
            raise GateError(
                "G4_RedemptionInput",
                "Redemption amount must be greater than 0",
                {"amount": amount},
            )

        return GateResult(True, "G4_RedemptionInput")
