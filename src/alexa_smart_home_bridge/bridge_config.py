import logging
import os
from pathlib import Path
from typing import Self, TypeVar

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BridgeConfig(BaseModel):
    app_base_url: str = Field(description="Base URL of the application API, e.g. https://app.example.com")
    handler_path: str = Field(default="/alexa/handle", description="Path receiving forwarded directives")
    oauth_token_path: str = Field(default="/oauth/token", description="Path of the application's OAuth token endpoint")
    request_timeout: float | None = Field(
        default=None, description="Seconds before an upstream call is abandoned; HTTP client default when unset"
    )

    @field_validator("app_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("app_base_url must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("handler_path", "oauth_token_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @property
    def handler_url(self) -> str:
        return f"{self.app_base_url}{self.handler_path}"

    @property
    def oauth_token_url(self) -> str:
        return f"{self.app_base_url}{self.oauth_token_path}"

    @classmethod
    def from_env(cls) -> Self:
        data: dict[str, str | float] = {"app_base_url": os.getenv("APP_BASE_URL", "")}
        if handler_path := os.getenv("APP_HANDLER_PATH"):
            data["handler_path"] = handler_path
        if oauth_token_path := os.getenv("APP_OAUTH_TOKEN_PATH"):
            data["oauth_token_path"] = oauth_token_path
        if request_timeout := os.getenv("APP_REQUEST_TIMEOUT"):
            data["request_timeout"] = float(request_timeout)
        return cls.model_validate(data)


def combine_yaml_files(file_paths: list[Path]) -> dict:
    """
    Combine multiple YAML files into a single dictionary.

    Args:
        file_paths (list[Path]): List of paths to YAML files.

    Returns:
        dict: Combined dictionary from all YAML files, later files winning.
    """
    combined_data = {}
    for file_path in file_paths:
        with file_path.open("r") as file:
            data = yaml.safe_load(file) or {}
            combined_data.update(data)
    return combined_data


def load_config(config_path: str | Path, config_class: type[T]) -> T:
    """
    Load and validate configuration from YAML files.

    Args:
        config_path (Union[str, Path]): Path to a YAML file or a directory containing YAML files.
        config_class (Type[T]): The Pydantic model class to validate the combined data against.

    Returns:
        T: An instance of the provided Pydantic model class.

    Raises:
        FileNotFoundError: If no YAML files are found.
        ValidationError: If the combined data does not conform to the Pydantic model.
    """
    config_path = Path(config_path)

    yaml_files = sorted(config_path.glob("*.yaml")) if config_path.is_dir() else [config_path]

    if not yaml_files:
        raise FileNotFoundError(f"No YAML files found in the directory: {config_path}")

    try:
        combined_data = combine_yaml_files(yaml_files)
        return config_class.model_validate(combined_data)
    except FileNotFoundError as err:
        logger.error("Config file not found: %s", config_path)
        raise err
    except ValidationError as err_v:
        logger.error("Validation error: %s", err_v)
        raise err_v
