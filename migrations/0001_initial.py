# Generated migration for the cross-shop ledger, verification state and allowance lock

import django.core.serializers.json
from django.db import migrations, models

import crossshop.models.verification


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "entry_type",
                    models.CharField(
                        choices=[
                            ("cross_shop_verification", "Cross-shop verification"),
                            ("redeem", "Redemption"),
                        ],
                        db_index=True,
                        max_length=30,
                        verbose_name="type",
                    ),
                ),
                (
                    "customer_address",
                    models.CharField(
                        db_index=True,
                        help_text="Lower-cased 0x address",
                        max_length=42,
                        verbose_name="customer address",
                    ),
                ),
                ("shop_id", models.CharField(db_index=True, max_length=100, verbose_name="shop")),
                (
                    "amount",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Whole RCN; 0 for denied verifications",
                        verbose_name="amount",
                    ),
                ),
                ("reason", models.CharField(blank=True, max_length=255, verbose_name="reason")),
                ("transaction_hash", models.CharField(max_length=100, unique=True, verbose_name="transaction hash")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                            ("confirmed", "Confirmed"),
                        ],
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "redemption_type",
                    models.CharField(
                        blank=True,
                        choices=[("cross_shop", "Cross-shop")],
                        max_length=20,
                        verbose_name="redemption type",
                    ),
                ),
                (
                    "verification_id",
                    models.CharField(blank=True, db_index=True, max_length=64, verbose_name="verification"),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                        verbose_name="metadata",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "ledger entry",
                "verbose_name_plural": "ledger entries",
                "db_table": "crossshop_ledger_entry",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer_address", "-created_at"], name="crossshop_ledger_cust_idx"),
                    models.Index(fields=["shop_id", "entry_type"], name="crossshop_ledger_shop_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CrossShopVerification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "verification_id",
                    models.CharField(
                        default=crossshop.models.verification.new_verification_id,
                        max_length=64,
                        unique=True,
                        verbose_name="verification id",
                    ),
                ),
                ("customer_address", models.CharField(db_index=True, max_length=42, verbose_name="customer address")),
                ("shop_id", models.CharField(db_index=True, max_length=100, verbose_name="redemption shop")),
                ("requested_amount", models.PositiveIntegerField(verbose_name="requested amount")),
                ("purpose", models.CharField(blank=True, max_length=200, verbose_name="purpose")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("denied", "Denied"),
                            ("consumed", "Consumed"),
                            ("expired", "Expired"),
                        ],
                        db_index=True,
                        default="pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "denial_code",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("insufficient_balance", "Insufficient redeemable balance"),
                            ("exceeds_cross_shop_limit", "Exceeds cross-shop limit"),
                            ("shop_not_found", "Shop not found"),
                            ("shop_not_active", "Shop not active"),
                            ("shop_cross_shop_disabled", "Shop does not accept cross-shop redemptions"),
                        ],
                        max_length=40,
                        verbose_name="denial code",
                    ),
                ),
                ("denial_reason", models.CharField(blank=True, max_length=255, verbose_name="denial reason")),
                ("available_balance", models.PositiveIntegerField(default=0, verbose_name="available balance")),
                (
                    "max_cross_shop_amount",
                    models.DecimalField(
                        decimal_places=4,
                        default=0,
                        max_digits=24,
                        verbose_name="max cross-shop amount",
                    ),
                ),
                ("consumed_amount", models.PositiveIntegerField(blank=True, null=True, verbose_name="consumed amount")),
                ("consumed_at", models.DateTimeField(blank=True, null=True, verbose_name="consumed at")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="expires at")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "cross-shop verification",
                "verbose_name_plural": "cross-shop verifications",
                "db_table": "crossshop_verification",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer_address", "status"], name="crossshop_verif_cust_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CrossShopAllowance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_address", models.CharField(max_length=42, unique=True, verbose_name="customer address")),
                (
                    "decisions",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Verification decisions taken under this lock",
                        verbose_name="decisions",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "cross-shop allowance",
                "verbose_name_plural": "cross-shop allowances",
                "db_table": "crossshop_allowance",
            },
        ),
    ]
