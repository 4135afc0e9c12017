"""
Project Workflow Module
=======================

Bounded Context for project workflow checklists.

Responsibilities:
- Instantiate a project's steps from a workflow template
- Track elapsed days per step, freezing the counter on completion
- Flag overdue steps against their SLA target
- Roll step states up into a project status
"""

__version__ = "1.0.0"
