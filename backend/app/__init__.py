"""Storefront backend application package."""
