"""Storefront multi-currency display conversion and currency service."""
