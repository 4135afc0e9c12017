"""
Case SLA Module
===============

Bounded Context for case service-level tracking.

Responsibilities:
- Derive days in process, SLA tier and query pending days per case
- Freeze the case clock once the case reaches a terminal status
- Bucket active cases by external deadline
- Provide a deterministic ordering for tables, reports and exports
- Summarise a snapshot into dashboard counters
"""

__version__ = "1.0.0"
