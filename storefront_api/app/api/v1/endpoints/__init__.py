"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one area (health, auth, catalog,
orders, admin, chat).  The routers are aggregated in ``router.py``.
"""
