"""
Version 1 of the storefront API.

Breaking changes should go into a new version subpackage (e.g. ``v2``)
so existing storefront pages keep working.
"""
