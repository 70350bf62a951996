"""
Service layer abstraction.

Each service encapsulates the business rules of one resource and talks
to the stores obtained from :func:`lab_dashboard_api.app.core.db.get_db`.
Services raise the exceptions from :mod:`lab_dashboard_api.app.core.errors`
and never build HTTP responses themselves, so the storage backend can
be swapped without touching the API handlers.
"""
