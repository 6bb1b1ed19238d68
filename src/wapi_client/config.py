"""Configuration management for the WAPI client."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import DEFAULT_WAPI_VERSION
from .observability.logger import configure_logging

_FALSE_STRINGS = ("false", "0", "no", "off")


@dataclass
class WAPIConfig:
    """Appliance connection configuration."""

    host: str
    username: str
    password: str
    wapi_version: str = DEFAULT_WAPI_VERSION
    timeout: int = 30
    verify_ssl: bool = True
    max_connections: int = 20  # Maximum total connections
    max_keepalive: int = 10  # Maximum keep-alive connections

    @property
    def base_url(self) -> str:
        """Root URL of the object API, always ending with a slash."""
        host = self.host.rstrip("/")
        if "://" not in host:
            host = f"https://{host}"
        return f"{host}/wapi/v{self.wapi_version}/"


@dataclass(frozen=True)
class CloudIdentity:
    """
    Identity stamped onto objects created on behalf of a cloud platform.

    With omit_cloud_attrs set (the default, local-management mode) no identity
    attributes are attached at all.
    """

    cmp_type: str = ""
    tenant_id: str = ""
    omit_cloud_attrs: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"
    file: Path | None = None

    def apply(self) -> None:
        """Configure structlog and stdlib logging from these settings."""
        configure_logging(level=self.level, json_logs=self.format == "json", log_file=self.file)


@dataclass
class ClientConfig:
    """
    Complete configuration for the WAPI client.

    This combines all configuration sections.
    """

    wapi: WAPIConfig | None = None
    identity: CloudIdentity = field(default_factory=CloudIdentity)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "ClientConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            ClientConfig instance
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        wapi_data = data.get("wapi")
        wapi = WAPIConfig(**wapi_data) if wapi_data else None

        identity = CloudIdentity(**(data.get("identity") or {}))

        logging_data = dict(data.get("logging") or {})
        if logging_data.get("file"):
            logging_data["file"] = Path(logging_data["file"])
        logging = LoggingConfig(**logging_data)

        return cls(wapi=wapi, identity=identity, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "wapi": self.wapi.__dict__ if self.wapi else None,
            "identity": {
                "cmp_type": self.identity.cmp_type,
                "tenant_id": self.identity.tenant_id,
                "omit_cloud_attrs": self.identity.omit_cloud_attrs,
            },
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            WAPI_HOST: Appliance host or URL
            WAPI_USERNAME: API username
            WAPI_PASSWORD: API password
            WAPI_VERSION: WAPI version (default: 2.5)
            WAPI_VERIFY_SSL: Set to 'false' to disable certificate checks
            CMP_TYPE: Cloud platform type stamped on created objects
            TENANT_ID: Tenant stamped on created objects
            OMIT_CLOUD_ATTRS: Set to 'false' to attach cloud identity attributes
            LOG_LEVEL: Logging level (default: INFO)
            LOG_FORMAT: 'json' or 'console' (default: json)

        Returns:
            ClientConfig instance

        Raises:
            ValueError: If WAPI_HOST is set but required credentials are missing
        """
        wapi_config = None
        host = os.getenv("WAPI_HOST")
        if host:
            username = os.environ.get("WAPI_USERNAME", "")
            password = os.environ.get("WAPI_PASSWORD", "")

            missing_creds = []
            if not username:
                missing_creds.append("WAPI_USERNAME")
            if not password:
                missing_creds.append("WAPI_PASSWORD")

            if missing_creds:
                raise ValueError(
                    f"WAPI_HOST is set but required credentials are missing: "
                    f"{', '.join(missing_creds)}."
                )

            verify_ssl = os.environ.get("WAPI_VERIFY_SSL", "true").lower() not in _FALSE_STRINGS

            wapi_config = WAPIConfig(
                host=host,
                username=username,
                password=password,
                wapi_version=os.environ.get("WAPI_VERSION", DEFAULT_WAPI_VERSION),
                verify_ssl=verify_ssl,
            )

        identity = CloudIdentity(
            cmp_type=os.environ.get("CMP_TYPE", ""),
            tenant_id=os.environ.get("TENANT_ID", ""),
            omit_cloud_attrs=os.environ.get("OMIT_CLOUD_ATTRS", "true").lower()
            not in _FALSE_STRINGS,
        )

        logging_config = LoggingConfig(
            level=os.environ.get("LOG_LEVEL", "INFO"),
            format=os.environ.get("LOG_FORMAT", "json"),
        )

        return cls(wapi=wapi_config, identity=identity, logging=logging_config)


def load_config(config_file: Path | None = None) -> ClientConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        ClientConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return ClientConfig.from_file(config_file)
    return ClientConfig.from_env()
