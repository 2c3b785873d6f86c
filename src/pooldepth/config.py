import tomllib
from pathlib import Path
from typing import Annotated

import tomlkit
from pydantic import BaseModel, Field, HttpUrl, WebsocketUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pooldepth.logging import logger
from pooldepth.types.aliases import ChainId

CONFIG_DIR = Path.home() / ".config" / "pooldepth"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Walking the full tick range at a tick spacing of 1 reads 6932 words
DEFAULT_MAX_SEARCH_WORDS = 10_000


class DepthSettings(BaseModel):
    max_search_words: Annotated[int, Field(gt=0)] = DEFAULT_MAX_SEARCH_WORDS


class FetchingSettings(BaseModel):
    rpc_retries: Annotated[int, Field(ge=1)] = 3


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="POOLDEPTH_", env_nested_delimiter="__")

    depth: DepthSettings = DepthSettings()
    rpc: dict[
        ChainId,
        HttpUrl | WebsocketUrl | Path,
    ] = {}
    fetching: FetchingSettings = FetchingSettings()

    @field_validator("rpc", mode="after")
    def validate_paths(
        cls,  # noqa: N805
        rpc_dict: dict[ChainId, HttpUrl | WebsocketUrl | Path],
    ) -> dict[ChainId, HttpUrl | WebsocketUrl | Path]:
        """
        Validate the endpoints.

        This will convert all file paths (IPC sockets) to an absolute reference, leaving HTTP and WS
        URLs as-is.
        """

        return {
            chain_id: endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint
            for chain_id, endpoint in rpc_dict.items()
        }


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(mode="json"),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


settings = load_config_from_file(CONFIG_FILE) if CONFIG_FILE.exists() else Settings()
