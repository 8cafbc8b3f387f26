"""YAML config loading with env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import FileTrackConfig

logger = logging.getLogger(__name__)

# Config file to use when no --config is given
CONFIG_ENV_VAR = "FILETRACK_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_path(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    candidates = []
    if cli_path:
        candidates.append(Path(cli_path))
    if os.environ.get(CONFIG_ENV_VAR):
        candidates.append(Path(os.environ[CONFIG_ENV_VAR]))
    candidates.append(Path("filetrack.yaml"))
    candidates.append(Path.home() / ".filetrack" / "config.yaml")
    return candidates


def load_config(cli_path: str | None = None) -> FileTrackConfig:
    """Load config from the first existing file on the search path.

    Order: ``--config``, ``$FILETRACK_CONFIG``, ``./filetrack.yaml``,
    ``~/.filetrack/config.yaml``, then built-in defaults. An explicitly
    requested file that does not exist is an error rather than skipped.
    """
    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_path(cli_path):
        if not path.exists():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            logger.debug("Skipping empty config %s", path)
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping at top level")
        try:
            config = FileTrackConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return FileTrackConfig()


def _expand_env_vars(obj: object) -> object:
    """Expand ${VAR} and ${VAR:-fallback} in every string of a parsed YAML tree."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `filetrack config init`
DEFAULT_CONFIG_TEMPLATE = """\
# filetrack.yaml

# File tracking
tracker:
  use_content_hash: false      # true: compare content digests, false: mtime + size
  hash_algorithm: "sha256"     # any hashlib algorithm, used when use_content_hash is on
  max_tracked_files: 1000      # oldest-first-read entries are evicted past this bound
  track_all_files: false       # let auto_track() register every observed file
  generate_diffs: true         # allow FileStatusAPI.diff() to produce unified diffs

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
