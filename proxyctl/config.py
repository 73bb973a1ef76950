"""Configuration management for the proxyctl application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Envoy admin endpoint, only reachable from inside the pod network namespace
    SIDECAR_CONTAINER: str = "envoy-sidecar"
    ADMIN_HOST: str = "127.0.0.1"
    ADMIN_PORT: int = 19000
    CONFIG_DUMP_PATH: str = "/config_dump"

    DEFAULT_NAMESPACE: str = "default"
    OUTPUT_FORMATS: tuple = ("json", "yaml")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def admin_url(cls) -> str:
        """Address of the config dump as seen from inside the sidecar."""
        return f"{cls.ADMIN_HOST}:{cls.ADMIN_PORT}{cls.CONFIG_DUMP_PATH}"
