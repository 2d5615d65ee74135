"""Settings for the Asana client, read from ``ASANA_*`` environment variables or ``.env``."""

from pydantic_settings import BaseSettings, SettingsConfigDict

LIBRARY_VERSION = "0.1.0"
DEFAULT_BASE_URL = "https://app.asana.com/api/1.0/"
DEFAULT_USER_AGENT = f"asana-client/{LIBRARY_VERSION}"


class AsanaSettings(BaseSettings):
    """
    Connection settings for the Asana API.

    ``access_token`` is only used to configure the default transport; the
    client itself never reads it.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASANA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    access_token: str | None = None
