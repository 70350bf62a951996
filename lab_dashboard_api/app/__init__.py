"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each resource (laboratories, clients, inventory, chat,
etc.) has a schema module, a service module and a router defined in
``api/v1/endpoints``.  Routers are grouped under ``api/<version>/``.
"""

from .main import app  # noqa: F401
