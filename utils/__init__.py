"""
utils/ - Shared Helpers
=======================
Cross-cutting helpers such as logging setup.
"""
