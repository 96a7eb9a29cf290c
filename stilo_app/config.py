"""Configuration helpers for the Stilo outfit concierge."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_SHARE_BASE_URL = "http://localhost:8080/"
STORAGE_BACKENDS = ("json", "sqlite", "memory")


@dataclass
class StiloConfig:
    """Configuration values for the Stilo app.

    The text model answers the structured outfit request and the image model
    renders one product photo per garment. Favorites live in a key-value store
    picked by ``storage_backend``.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    storage_backend: str = "json"
    storage_path: Optional[str] = None
    default_location: Optional[str] = None
    share_base_url: str = DEFAULT_SHARE_BASE_URL
    environment: str | None = None

    def __post_init__(self) -> None:
        backend = (self.storage_backend or "json").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage backend '{self.storage_backend}'. Allowed: {list(STORAGE_BACKENDS)}"
            )
        self.storage_backend = backend

    @classmethod
    def from_env(cls) -> "StiloConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that the Gemini key
        can be injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STILO_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = get_value("gemini_api_key") or get_value("google_api_key")
        text_model = get_value("text_model", DEFAULT_TEXT_MODEL)
        image_model = get_value("image_model", DEFAULT_IMAGE_MODEL)
        storage_backend = get_value("storage_backend", "json")
        storage_path = get_value("storage_path")
        default_location = get_value("default_location")
        share_base_url = get_value("share_base_url", DEFAULT_SHARE_BASE_URL)

        return cls(
            api_key=api_key,
            text_model=str(text_model or DEFAULT_TEXT_MODEL),
            image_model=str(image_model or DEFAULT_IMAGE_MODEL),
            storage_backend=str(storage_backend or "json"),
            storage_path=storage_path,
            default_location=default_location,
            share_base_url=str(share_base_url or DEFAULT_SHARE_BASE_URL),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
