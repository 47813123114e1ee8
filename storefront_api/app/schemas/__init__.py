"""
Pydantic schema definitions for API payloads.

Request bodies use the camelCase field names the storefront pages
send (``telegramId``, ``serviceId``...); responses mirror the stored
column names.  Schemas are kept apart from the SQL in the services.
"""
