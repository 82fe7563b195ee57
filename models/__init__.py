"""
models/ - Domain Layer
======================
Plain dataclasses for messages and comments. No database access here.
"""
