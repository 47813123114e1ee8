"""
Service layer.

Each service encapsulates the business rules of one domain (accounts,
catalog, orders, back office, chat) and talks to SQLite through
``core.db``.  Services raise the exceptions from ``core.exceptions``;
the API layer never inspects SQL errors itself.
"""
