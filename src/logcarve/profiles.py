"""Named profiles: reusable parse options saved as TOML."""

from __future__ import annotations

import logging
import re
import tomllib
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import ValidationError

from logcarve.config import get_profiles_dir
from logcarve.errors import ConfigurationError, ProfileNotFoundError
from logcarve.models import Profile

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def _profile_path(name: str) -> Path:
    if not _NAME_RE.match(name):
        msg = f"invalid profile name {name!r}: use letters, digits, '.', '_' or '-'"
        raise ConfigurationError(msg)
    return get_profiles_dir() / f"{name}.toml"


def create_profile(name: str, **options: Any) -> Profile:
    """Create a new Profile with current timestamp."""
    now = datetime.now(tz=UTC)
    return Profile(name=name, created_at=now, updated_at=now, **options)


def save_profile(profile: Profile) -> Path:
    """Save a profile to a TOML file, replacing any profile of the same name. Returns the file path."""
    path = _profile_path(profile.name)
    if path.exists():
        # keep the original creation time on overwrite
        try:
            created_at = load_profile(profile.name).created_at
        except ConfigurationError:
            created_at = profile.created_at
        profile = profile.model_copy(update={"created_at": created_at, "updated_at": datetime.now(tz=UTC)})
    # TOML has no null; unset toggles are simply left out
    data = profile.model_dump(mode="json", exclude_none=True)
    path.write_bytes(tomli_w.dumps(data).encode())
    logger.debug("saved profile %s to %s", profile.name, path)
    return path


def load_profile(name: str) -> Profile:
    """Load a profile from a TOML file."""
    path = _profile_path(name)
    if not path.exists():
        raise ProfileNotFoundError(name)
    try:
        data = tomllib.loads(path.read_text())
        return Profile(**data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        msg = f"profile '{name}' is invalid: {e}"
        raise ConfigurationError(msg) from e


def list_profiles() -> list[str]:
    """List all saved profile names."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.toml"))


def delete_profile(name: str) -> None:
    """Delete a saved profile."""
    path = _profile_path(name)
    if not path.exists():
        raise ProfileNotFoundError(name)
    path.unlink()
