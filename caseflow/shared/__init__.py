"""
Shared Kernel Module
====================

Generic building blocks used by every bounded context (case SLA tracking
and project workflows): the injectable clock and structured logging.

DO NOT add case or workflow business rules to the shared kernel.
"""

__version__ = "1.0.0"
