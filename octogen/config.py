"""Generator settings: where to read, where to write, which packages to use."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .loader import SPEC_PATH

OUTPUT_DIR = Path(__file__).parent.parent / "generated"
BASE_PACKAGE = "io.bokun.octo"
REQUEST_NAMESPACE = "requests"

# environment variable -> settings field
_ENV_VARS: dict[str, str] = {
    "OCTOGEN_SPEC": "spec_path",
    "OCTOGEN_OUTPUT": "output_dir",
    "OCTOGEN_PACKAGE": "base_package",
    "OCTOGEN_REQUEST_NAMESPACE": "request_namespace",
}

_PATH_FIELDS = {"spec_path", "output_dir"}


@dataclass(frozen=True)
class GeneratorSettings:
    spec_path: Path = SPEC_PATH
    output_dir: Path = OUTPUT_DIR
    base_package: str = BASE_PACKAGE
    request_namespace: str = REQUEST_NAMESPACE

    def package_for(self, namespace: str) -> str:
        """Target package of a namespace hint ('' is the base package)."""
        return f"{self.base_package}.{namespace}" if namespace else self.base_package

    def override(self, **values: str | Path | None) -> GeneratorSettings:
        """Copy with every non-None value applied."""
        changes = {
            key: Path(value) if key in _PATH_FIELDS else value
            for key, value in values.items()
            if value is not None
        }
        return replace(self, **changes)


def settings_from_env(environ: Mapping[str, str] | None = None) -> GeneratorSettings:
    """Defaults, overridden by OCTOGEN_* environment variables."""
    env = os.environ if environ is None else environ
    values = {field: env.get(var) or None for var, field in _ENV_VARS.items()}
    return GeneratorSettings().override(**values)
