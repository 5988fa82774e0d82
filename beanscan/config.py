import re

from pydantic import BaseModel, Field, field_validator

from beanscan.errors import ConfigError

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


class ScanConfig(BaseModel):
    marker_name: str = Field(
        default="beans.xml",
        description="File name whose presence marks an archive as scannable",
        examples=["beans.xml"],
    )

    class_suffix: str = Field(
        default=".class",
        description="Suffix of compiled class entries fed to the indexer",
    )

    url_scheme: str = Field(
        default="archive",
        description="Scheme used for descriptor location URLs",
    )

    @field_validator("marker_name")
    @classmethod
    def validate_marker_name(cls, value: str) -> str:
        if not value:
            raise ConfigError("Marker name cannot be empty")
        if "/" in value or "\\" in value:
            raise ConfigError("Marker name must not contain path separators")
        return value

    @field_validator("class_suffix")
    @classmethod
    def validate_class_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ConfigError(
                f"Class suffix must start with '.' and name an extension: {value!r}"
            )
        return value

    @field_validator("url_scheme")
    @classmethod
    def validate_url_scheme(cls, value: str) -> str:
        if not _SCHEME_RE.fullmatch(value):
            raise ConfigError(f"Invalid URL scheme: {value!r}")
        return value

    class Config:
        frozen = True
