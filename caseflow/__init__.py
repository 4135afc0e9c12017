"""
Caseflow
========

Pure SLA engine for government case tracking and project workflow
checklists.

Bounded contexts:
- sla: per-case derived fields, deadline buckets, ordering, dashboards
- workflow: checklist step freeze/unfreeze and project rollup
"""

__version__ = "1.0.0"
