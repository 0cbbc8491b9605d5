"""Engine settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HierarchySettings(BaseSettings):
    """Hierarchy engine settings.

    Environment variables:
        HGROUPS_ACTIVITY_ENFORCEMENT: Who may widen activity streams
            (site-admins, group-admins, strict; default: strict)
        HGROUPS_MAX_DEPTH: Upper bound on steps of a single tree walk (default: 100)
        HGROUPS_CACHE_BACKEND: memory or redis (default: memory)
        HGROUPS_REDIS_URL: Redis connection URL (default: redis://localhost:6379/0)
        HGROUPS_CACHE_KEY_PREFIX: Namespace of all cache keys (default: hgbp)
        HGROUPS_CACHE_TTL_SECONDS: Optional expiry of cache entries (default: none)
        HGROUPS_CACHE_MAX_ENTRIES: Capacity of the memory backend (default: 10000)
        HGROUPS_PATH_SEPARATOR: Separator of hierarchical slugs (default: /)
        HGROUPS_GROUPS_DIRECTORY_URL: Base URL of the groups directory (default: /groups/)
    """

    model_config = SettingsConfigDict(
        env_prefix="HGROUPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    activity_enforcement: str = Field(
        default="strict",
        description="Global activity enforcement policy",
    )
    max_depth: int = Field(
        default=100,
        description="Maximum number of steps of a single tree walk",
        ge=1,
        le=10000,
    )
    cache_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Backend of the hierarchy cache",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL used when cache_backend is redis",
    )
    redis_socket_timeout: float = Field(
        default=5.0,
        description="Redis socket timeout in seconds",
        gt=0,
    )
    cache_key_prefix: str = Field(
        default="hgbp",
        description="Namespace of all hierarchy cache keys",
        min_length=1,
    )
    cache_ttl_seconds: int | None = Field(
        default=None,
        description="Expiry of cache entries; None keeps them until evicted",
        ge=1,
    )
    cache_max_entries: int = Field(
        default=10_000,
        description="Capacity of the in-memory cache backend",
        ge=1,
    )
    path_separator: str = Field(
        default="/",
        description="Separator between slugs of a hierarchical path",
        min_length=1,
    )
    groups_directory_url: str = Field(
        default="/groups/",
        description="Base URL of the groups directory",
    )

    @field_validator("activity_enforcement", mode="before")
    @classmethod
    def normalize_activity_enforcement(cls, value: object) -> str:
        """Fall back to strict for unrecognized values."""
        allowed = ("site-admins", "group-admins", "strict")
        if isinstance(value, str) and value.strip().lower() in allowed:
            return value.strip().lower()
        return "strict"

    @model_validator(mode="after")
    def validate_directory_url(self) -> "HierarchySettings":
        """Ensure the directory URL ends with a single slash."""
        self.groups_directory_url = self.groups_directory_url.rstrip("/") + "/"
        return self


@lru_cache
def get_hierarchy_settings() -> HierarchySettings:
    """Get cached hierarchy settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return HierarchySettings()
