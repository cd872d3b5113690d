"""
Service layer for AWS calls.

This module separates credential resolution and operation invocation
from the block catalogue and the host handlers.
"""
