"""
Core app - Shared abstractions and utilities.

This app provides:
- Schema control (SchemaService): table existence check, provisioning
  and teardown of the board tables outside of migrations
"""
