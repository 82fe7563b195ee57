"""
services/ - Business Logic Layer
================================
Validates caller input and delegates persistence to the repositories.
"""
