from django.apps import AppConfig


class CrossShopConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "crossshop"
    verbose_name = "Cross-shop redemption"
