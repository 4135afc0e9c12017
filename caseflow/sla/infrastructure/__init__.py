"""
SLA Infrastructure Layer
=========================

Infrastructure implementations for case SLA tracking:
- External: YAML threshold file loading and hot reload (watchdog)
- Repositories: Config provider backing the application services
"""

from caseflow.sla.infrastructure.external import SLAConfigManager, ConfigFileHandler
from caseflow.sla.infrastructure.repositories import YAMLConfigProvider

__all__ = [
    "SLAConfigManager",
    "ConfigFileHandler",
    "YAMLConfigProvider",
]
