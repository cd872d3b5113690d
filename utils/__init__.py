"""
Shared helpers: handler decorators, exceptions and response serialization.
"""
