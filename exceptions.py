"""Cross-shop exceptions."""


class CrossShopError(Exception):
    """
    Structured exception for cross-shop operations.

    Carries a stable ``code``, a human message (defaulted per code) and
    free-form context data.

    Usage:
        try:
            LedgerEntry.objects.filter(pk=1).delete()
        except CrossShopError as e:
            if e.code == "LEDGER_IMMUTABLE":
                handle_immutable()
    """

    _default_messages = {
        "LEDGER_IMMUTABLE": "Ledger entries are append-only",
        "VERIFICATION_NOT_FOUND": "Verification not found",
        "VERIFICATION_NOT_APPROVED": "Verification was not approved",
        "VERIFICATION_ALREADY_CONSUMED": "Verification has already been consumed",
        "VERIFICATION_EXPIRED": "Verification has expired",
        "AMOUNT_EXCEEDS_VERIFIED": "Redemption amount exceeds verified amount",
        "BACKEND_NOT_CONFIGURED": "Store backend not configured",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}
