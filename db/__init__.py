"""
db/ - Database Layer
====================
Handles database connections, the statement-level handle, result-row
mapping helpers and schema initialization.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
