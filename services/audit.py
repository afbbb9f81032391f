"""Audit recorder - one ledger row per verification decision."""

import logging

from crossshop.protocols.ledger import Ledger, VerificationEvent

logger = logging.getLogger(__name__)


class AuditRecorder:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def append(self, decision: VerificationEvent):
        """
        Append the decision to the ledger.

        Approved decisions are written as ``completed`` rows carrying the
        requested amount; denials as ``failed`` rows with amount 0.

        Returns:
            The ledger row
        """
        entry = self.ledger.append(decision)
        logger.info(
            "Cross-shop verification recorded: %s %s (%s RCN at %s)%s",
            decision.verification_id,
            "approved" if decision.approved else "denied",
            decision.requested_amount,
            decision.shop_id,
            f" - {decision.denial_reason}" if decision.denial_reason else "",
        )
        return entry
