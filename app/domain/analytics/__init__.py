"""Analytics domain - Pro-only business insights over a tenant's quotes"""
