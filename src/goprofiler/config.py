"""Per-project CLI defaults from ``.goprofiler.yml``.

Example::

    exclude:
      - "generated/*"
      - "*_mock.go"
    fail_on: high
    verbose: true
    output: console

Only the CLI reads this file; the detection engine has no configuration.
Command-line flags override values from the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from goprofiler.analyzer.issues import IMPACTS
from goprofiler.exit_codes import ConfigError

log = logging.getLogger(__name__)

CONFIG_NAMES = (".goprofiler.yml", ".goprofiler.yaml")
OUTPUT_FORMATS = ("console", "json")

DEFAULTS: dict = {
    "exclude": [],
    "fail_on": None,
    "verbose": False,
    "output": "console",
}


def _defaults() -> dict:
    return {**DEFAULTS, "exclude": []}


def find_config(start) -> Path | None:
    """Return the first config file in ``start`` (or its directory), then cwd."""
    start = Path(start)
    base = start if start.is_dir() else start.parent
    candidates = [base, Path.cwd()]
    for directory in candidates:
        for name in CONFIG_NAMES:
            path = directory / name
            if path.is_file():
                return path
    return None


def _validate(data: dict, path: Path) -> dict:
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"{path}: unknown keys: {', '.join(unknown)}")

    exclude = data.get("exclude", [])
    if isinstance(exclude, str):
        exclude = [exclude]
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise ConfigError(f"{path}: 'exclude' must be a list of glob strings")

    fail_on = data.get("fail_on")
    if fail_on is not None and fail_on not in IMPACTS:
        raise ConfigError(f"{path}: 'fail_on' must be one of: high, medium, low")

    verbose = data.get("verbose", False)
    if not isinstance(verbose, bool):
        raise ConfigError(f"{path}: 'verbose' must be true or false")

    output = data.get("output", "console")
    if output not in OUTPUT_FORMATS:
        raise ConfigError(f"{path}: 'output' must be one of: {', '.join(OUTPUT_FORMATS)}")

    return {"exclude": exclude, "fail_on": fail_on, "verbose": verbose, "output": output}


def load_config(path) -> dict:
    """Load and validate a config file.

    Raises:
        ConfigError: the file is not valid YAML, is not a mapping, or
            holds unknown keys or bad values.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: {exc.strerror or exc}") from exc

    if data is None:
        return _defaults()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    log.debug("Loaded config from %s", path)
    return _validate(data, path)


def resolve_config(target) -> dict:
    """Config for analyzing ``target``: the discovered file, or defaults."""
    path = find_config(target)
    if path is None:
        return _defaults()
    return load_config(path)
