"""Storefront API package: subscription-pack shop backend."""
