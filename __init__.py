"""
Django Cross-shop - RCN cross-shop redemption verification and accounting.

Usage:
    from crossshop import CrossShopService, RedemptionRequest
    from crossshop.gates import Gates, GateError, GateResult

    service = CrossShopService.from_settings()
    result = service.verify(RedemptionRequest("0xabc...", "shop-7", 80))
    if result.approved:
        service.process(result.verification_id, 80)

    service.balance("0xabc...")
    service.history("0xabc...", limit=10)
    service.shop_stats("shop-7")
    service.network_stats()
"""


def __getattr__(name):
    if name == "CrossShopService":
        from crossshop.service import CrossShopService

        return CrossShopService
    if name == "RedemptionRequest":
        from crossshop.services.verification import RedemptionRequest

        return RedemptionRequest
    if name == "Gates":
        from crossshop.gates import Gates

        return Gates
    if name == "GateError":
        from crossshop.gates import GateError

        return GateError
    if name == "GateResult":
        from crossshop.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["CrossShopService", "RedemptionRequest", "Gates", "GateError", "GateResult"]
__version__ = "0.1.0"
