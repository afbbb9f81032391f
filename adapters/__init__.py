"""CustomerStore / ShopStore adapters."""
