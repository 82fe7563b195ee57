"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for its tables.
Repositories receive a connection pool, send parameterized SQL
to PostGIS and return domain model objects.
"""
