"""
Pydantic schema definitions for API payloads.

Each resource defines ``*Create`` and ``*Update`` models.  Create
models enforce every required field; update models accept any subset
of fields but still validate each supplied value.  Wire names are
camelCase (``testName``, ``minStock``) while attributes are
snake_case; see :class:`.common.CamelModel`.
"""
