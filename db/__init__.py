"""
db/ - Database Layer
====================
Bootstraps the PostgreSQL/PostGIS connection pool and the schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
