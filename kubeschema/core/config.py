"""Settings for ``kubeschema check``.

Values come from, in increasing precedence: built-in defaults, the
``check`` section of kubeschema.json, and KUBESCHEMA_* environment variables.
Command-line flags are applied on top by the CLI.

Example kubeschema.json::

    {"check": {"pattern": "*.yml", "fail_fast": true, "kubernetes_version": "1.29"}}
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from kubeschema.k8s.schema import DEFAULT_KUBERNETES_VERSION

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "kubeschema.json"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass
class CheckSettings:
    """Settings used by the check command."""

    pattern: str = "*.yaml"
    fail_fast: bool = False
    kubernetes_version: str = DEFAULT_KUBERNETES_VERSION


def _read_section(path: Path) -> dict:
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}

    section = loaded.get("check") if isinstance(loaded, dict) else None
    return section if isinstance(section, dict) else {}


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> CheckSettings:
    """Load check settings.

    A missing or unreadable config file leaves the defaults in place.

    Args:
        config_path: Path to the JSON config file (default: "kubeschema.json")

    Returns:
        CheckSettings with file and environment values applied
    """
    section = _read_section(Path(config_path))
    settings = CheckSettings()

    if section.get("pattern") is not None:
        settings.pattern = str(section["pattern"])
    if section.get("fail_fast") is not None:
        settings.fail_fast = bool(section["fail_fast"])
    if section.get("kubernetes_version") is not None:
        settings.kubernetes_version = str(section["kubernetes_version"])

    env = os.environ
    if env.get("KUBESCHEMA_PATTERN"):
        settings.pattern = env["KUBESCHEMA_PATTERN"]
    if env.get("KUBESCHEMA_FAIL_FAST"):
        settings.fail_fast = env["KUBESCHEMA_FAIL_FAST"].strip().lower() in _TRUE_STRINGS
    if env.get("KUBESCHEMA_KUBERNETES_VERSION"):
        settings.kubernetes_version = env["KUBESCHEMA_KUBERNETES_VERSION"]

    return settings
