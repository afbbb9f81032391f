"""Cross-shop services.

- balance: BalanceResolver (lifetime earnings, cap)
- eligibility: ShopEligibilityChecker
- audit: AuditRecorder
- ledger: DjangoLedger (Ledger protocol over LedgerEntry)
- verification: VerificationDecisionEngine
- redemption: RedemptionProcessor
- statistics: StatisticsAggregator
"""
