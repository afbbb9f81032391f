"""Cross-shop admin. Everything is read-only: the ledger is append-only and
verification state only moves through the services."""

from django.contrib import admin
from django.utils.html import format_html

from crossshop.models import CrossShopAllowance, CrossShopVerification, LedgerEntry


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdmin):
    list_display = [
        "created_at",
        "entry_type",
        "customer_address",
        "shop_id",
        "amount_display",
        "status",
        "transaction_hash",
    ]
    list_filter = ["entry_type", "status", "redemption_type"]
    search_fields = ["customer_address", "shop_id", "transaction_hash", "verification_id"]
    date_hierarchy = "created_at"

    def amount_display(self, obj):
        if obj.status == "failed":
            return format_html('<span style="color:#999">{}</span>', obj.amount)
        return format_html('<span style="color:green">{}</span>', obj.amount)

    amount_display.short_description = "RCN"


@admin.register(CrossShopVerification)
class CrossShopVerificationAdmin(ReadOnlyAdmin):
    list_display = [
        "verification_id",
        "customer_address",
        "shop_id",
        "requested_amount",
        "status_badge",
        "denial_code",
        "consumed_amount",
        "created_at",
    ]
    list_filter = ["status", "denial_code"]
    search_fields = ["verification_id", "customer_address", "shop_id"]

    def status_badge(self, obj):
        colors = {
            "approved": "#28a745",
            "consumed": "#17a2b8",
            "denied": "#dc3545",
            "expired": "#6c757d",
        }
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:3px; font-size:11px;">{}</span>',
            colors.get(obj.status, "#ffc107"),
            obj.get_status_display(),
        )

    status_badge.short_description = "Status"


@admin.register(CrossShopAllowance)
class CrossShopAllowanceAdmin(ReadOnlyAdmin):
    list_display = ["customer_address", "decisions", "updated_at"]
    search_fields = ["customer_address"]
