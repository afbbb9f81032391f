"""
Cross-shop signals - public event API.

Emitted signals:
- verification_decided: Emitted by VerificationDecisionEngine.verify()
- redemption_processed: Emitted by RedemptionProcessor.process() on success
"""

from django.dispatch import Signal

verification_decided = Signal()  # sender=CrossShopVerification, verification=..., result=...
redemption_processed = Signal()  # sender=CrossShopVerification, verification=..., entry=...
