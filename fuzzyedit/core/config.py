"""
Settings for the edit engine and tools.

Settings are read from a YAML file (``fuzzyedit.yaml`` by default, or the
file named by ``$FUZZYEDIT_CONFIG``). A few values can be overridden from the
environment, which takes precedence over the file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from fuzzyedit.core.errors import EditSettingsError
from fuzzyedit.core.replacers import (
    MULTIPLE_CANDIDATES_SIMILARITY_THRESHOLD,
    SINGLE_CANDIDATE_SIMILARITY_THRESHOLD,
)
from fuzzyedit.models.edit import EditMode
from fuzzyedit.utils.paths import get_default_config_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FUZZYEDIT_CONFIG"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "FUZZYEDIT_MODE": "mode",
    "FUZZYEDIT_PENDING_DIR": "pending_dir",
}


class EditSettings(BaseModel):
    """Tunable settings for matching and for the edit tools."""

    single_candidate_threshold: float = Field(
        default=SINGLE_CANDIDATE_SIMILARITY_THRESHOLD,
        ge=0,
        le=1,
        description="Minimum interior similarity when exactly one anchored block is found",
    )
    multiple_candidates_threshold: float = Field(
        default=MULTIPLE_CANDIDATES_SIMILARITY_THRESHOLD,
        ge=0,
        le=1,
        description="Minimum interior similarity of the best block when several are found",
    )
    mode: EditMode = Field(
        default="auto",
        description="Default matching mode: auto (fuzzy pipeline) or exact",
    )
    max_document_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Largest document the edit tools will load",
    )
    pending_dir: str = Field(
        default=".fuzzyedit/pending",
        description="Directory where pending edits are stored",
    )


def _friendly_validation_errors(source: str, exc: ValidationError) -> EditSettingsError:
    """Convert Pydantic ValidationError to a user-friendly EditSettingsError."""
    issues: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        msg = error["msg"]
        err_type = error["type"]

        if err_type == "literal_error":
            allowed = error.get("ctx", {}).get("expected", "")
            issues.append(f"{loc}: must be one of {allowed}")
        elif err_type in ("float_parsing", "int_parsing"):
            issues.append(f"{loc}: must be a number")
        else:
            issues.append(f"{loc}: {msg}")

    return EditSettingsError(source, issues)


def _resolve_config_path(path: Path | str | None) -> Path | None:
    """Pick the settings file: explicit path, then $FUZZYEDIT_CONFIG, then ./fuzzyedit.yaml."""
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    default = get_default_config_path()
    if default.exists():
        return default
    return None


def load_settings(path: Path | str | None = None) -> EditSettings:
    """
    Load and validate settings.

    Args:
        path: Settings file to read. Defaults to ``$FUZZYEDIT_CONFIG``, then
              ``./fuzzyedit.yaml`` when present.

    Returns:
        Validated EditSettings (defaults when no file is found)

    Raises:
        EditSettingsError: If the file is missing, malformed, or fails validation
    """
    config_path = _resolve_config_path(path)
    data: dict = {}

    if config_path is not None:
        source = str(config_path)
        if not config_path.exists():
            raise EditSettingsError(source, ["file not found"])

        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise EditSettingsError(source, [f"invalid YAML: {e}"]) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise EditSettingsError(source, ["top level must be a mapping of settings"])

        unknown = sorted(set(loaded) - set(EditSettings.model_fields))
        if unknown:
            raise EditSettingsError(source, [f"{key}: unknown setting" for key in unknown])

        data.update(loaded)
        logger.debug("Loaded settings from %s", source)
    else:
        source = "defaults"

    for env_name, field_name in ENV_OVERRIDES.items():
        if env_name in os.environ:
            data[field_name] = os.environ[env_name]
            source = f"{source} + ${env_name}"

    try:
        return EditSettings(**data)
    except ValidationError as e:
        raise _friendly_validation_errors(source, e) from e
