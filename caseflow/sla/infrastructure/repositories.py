"""
SLA Infrastructure Providers
=============================

Concrete implementations of the application layer's provider interfaces.
"""

from pathlib import Path
from typing import Optional, Union

from caseflow.config import Settings, get_settings
from caseflow.sla.application import ISLAConfigProvider
from caseflow.sla.domain.value_objects import SLAConfig
from caseflow.sla.infrastructure.external import SLAConfigManager


class YAMLConfigProvider(ISLAConfigProvider):
    """
    SLA configuration provider backed by a YAML file.

    Optionally watches the file and reloads automatically.
    """

    def __init__(self, config_path: Union[str, Path], watch: bool = False):
        self._manager = SLAConfigManager()
        self._manager.load(Path(config_path))
        if watch:
            self._manager.start_watching()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "YAMLConfigProvider":
        settings = settings or get_settings()
        return cls(settings.sla_config_path, watch=settings.sla_config_watch)

    def get_config(self) -> SLAConfig:
        """Get current SLA configuration."""
        return self._manager.config

    def reload(self) -> bool:
        """Reload configuration from file."""
        return self._manager.reload()

    def close(self) -> None:
        self._manager.stop_watching()
