"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with RECIPEBUMP_ prefix
3. .env file named by RECIPEBUMP_ENV_FILE (if present)

A few fields also honour the variables set by GitHub Actions and the gh CLI:
  GITHUB_OUTPUT           -> output_file
  GH_TOKEN / GITHUB_TOKEN -> github_token
"""

import os as _os
import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import recipebump.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit RECIPEBUMP_ENV_FILE is honoured, so that running inside
    an arbitrary checkout never picks up someone else's .env.
    """
    if env_file := _os.environ.get("RECIPEBUMP_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    recipebump configuration settings.

    All settings can be overridden via environment variables with RECIPEBUMP_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="RECIPEBUMP_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    recipes_dir: _pathlib.Path = _pydantic.Field(
        default=_pathlib.Path(constants.DEFAULT_RECIPES_DIR),
        description="Directory containing <package>/<recipe file> descriptors",
    )

    recipe_filename: str = _pydantic.Field(
        default=constants.DEFAULT_RECIPE_FILENAME,
        description="Descriptor file name inside each package directory",
    )

    github_api_url: str = _pydantic.Field(
        default=constants.DEFAULT_GITHUB_API_URL,
        description="Base URL of the GitHub REST API",
    )

    github_url: str = _pydantic.Field(
        default=constants.DEFAULT_GITHUB_URL,
        description="Base URL used to build release archive links",
    )

    github_token: _pydantic.SecretStr | None = _pydantic.Field(
        default=None,
        validation_alias=_pydantic.AliasChoices(
            "RECIPEBUMP_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN"
        ),
        description="Token sent as a bearer credential to the GitHub API",
    )

    default_branch: str = _pydantic.Field(
        default=constants.DEFAULT_BRANCH,
        min_length=1,
        description="Branch tracked by the latest-commit strategy",
    )

    http_timeout: float = _pydantic.Field(
        default=constants.DEFAULT_HTTP_TIMEOUT,
        gt=0,
        description="Timeout in seconds for upstream requests",
    )

    output_file: _pathlib.Path | None = _pydantic.Field(
        default=None,
        validation_alias=_pydantic.AliasChoices(
            "RECIPEBUMP_OUTPUT_FILE", "GITHUB_OUTPUT"
        ),
        description="File receiving key=value result lines (stdout when unset)",
    )

    @_pydantic.field_validator("github_api_url", "github_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @_pydantic.field_validator("output_file", mode="before")
    @classmethod
    def _empty_output_file_is_unset(cls, value: object) -> object:
        # GitHub Actions exports GITHUB_OUTPUT="" in some container steps
        if value == "":
            return None
        return value

    def recipe_path(self, package_name: str) -> _pathlib.Path:
        """Path to the descriptor for a package."""
        return self.recipes_dir / package_name / self.recipe_filename

    def github_token_value(self) -> str | None:
        """Plain-text token, or None when no token is configured."""
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value() or None
