"""
Adapter configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Only logging reads it; request/response translation is not configurable
through the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdapterConfig(BaseSettings):
    """
    Configuration for the Lambda adapter process.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default="logging.yml", description="YAML dictConfig file; ignored when missing"
    )
    SERVICE_NAME: str = Field(default="apigw-adapter", description="Logger name for the entry point")
    CAPTURE_STDOUT: bool = Field(
        default=False, description="Route print() output through logging during invocations"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Loaded once at import; every field has a default.
config = AdapterConfig()
