from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_RECORD_CONFIG = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


def first_present(*values: str | None) -> str:
    """Return the first value that is not ``None``, or an empty string."""
    for value in values:
        if value is not None:
            return value
    return ""


def _parse_bool_like(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() == "true"
    return False


class VersionRecord(BaseModel):
    """One published version of a package, as listed by the registry."""

    model_config = _RECORD_CONFIG

    name: str = ""
    version_number: str | None = None
    description: str | None = None
    icon: str | None = None
    download_url: str | None = None
    package_url: str | None = None
    website_url: str | None = None
    is_active: bool | None = None  # None means "not reported", treated as active
    date_created: str | None = None
    dependencies: tuple[str, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def validate_is_active(cls, v: Any) -> bool | None:
        return None if v is None else _parse_bool_like(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def validate_dependencies(cls, v: Any) -> tuple[str, ...]:
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(d for d in v if isinstance(d, str))

    @property
    def active(self) -> bool:
        return self.is_active is None or self.is_active

    @property
    def download_link(self) -> str:
        return first_present(self.download_url, self.package_url, self.website_url)


class PackageRecord(BaseModel):
    """Single entry of the registry's package listing."""

    model_config = _RECORD_CONFIG

    name: str = ""
    full_name: str = ""
    owner: str | None = None
    namespace: str | None = None
    author: str | None = None
    description: str = ""
    icon: str = ""
    is_deprecated: bool = False
    package_url: str = ""
    versions: tuple[VersionRecord, ...] = ()

    @field_validator("name", "full_name", "description", "icon", "package_url", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_deprecated", mode="before")
    @classmethod
    def validate_is_deprecated(cls, v: Any) -> bool:
        return _parse_bool_like(v)

    @field_validator("versions", mode="before")
    @classmethod
    def validate_versions(cls, v: Any) -> tuple[Any, ...]:
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(item for item in v if isinstance(item, (dict, VersionRecord)))

    @property
    def publisher(self) -> str:
        """Owner, namespace or author, whichever the registry supplied first."""
        return first_present(self.owner, self.namespace, self.author)

    @property
    def first_version(self) -> VersionRecord | None:
        return self.versions[0] if self.versions else None

    def candidate_names(self) -> list[str]:
        """Names a user might type for this package, most specific first.

        Order is ``name``, ``full_name``, then the first listed version's name;
        blank values are left out.
        """
        names = [self.name, self.full_name]
        if self.first_version is not None:
            names.append(self.first_version.name)
        return [n for n in names if n and n.strip()]
