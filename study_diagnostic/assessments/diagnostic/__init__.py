from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from study_diagnostic.assessments.diagnostic.types import DiagnosticParameters
from study_diagnostic.core.config import get_settings
from study_diagnostic.core.errors import ConfigurationError
from study_diagnostic.i18n.messages import ConfigErrorMessages

CONFIG_PATH = Path(__file__).with_name("config.yaml")


def load_config(path: str | Path | None = None) -> DiagnosticParameters:
    """Load diagnostic parameters from YAML.

    Resolution order: explicit ``path``, then ``DIAGNOSTIC_CONFIG_PATH`` from
    settings, then the packaged ``config.yaml``.
    """
    target = Path(path) if path is not None else (get_settings().diagnostic_config_path or CONFIG_PATH)
    if not target.is_file():
        raise ConfigurationError(ConfigErrorMessages.FILE_NOT_FOUND.format(path=target))
    with target.open("r", encoding="utf-8") as fh:
        raw: Any = yaml.safe_load(fh)
    return DiagnosticParameters.from_raw(raw)


@lru_cache(maxsize=1)
def default_parameters() -> DiagnosticParameters:
    """Process-wide parameters, loaded once and shared read-only."""

    return load_config()


def resolve_parameters(params: DiagnosticParameters | None) -> DiagnosticParameters:
    return params if params is not None else default_parameters()


__all__ = ["CONFIG_PATH", "load_config", "default_parameters", "resolve_parameters"]
