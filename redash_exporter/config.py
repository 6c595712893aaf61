from typing import Tuple

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Redash Exporter"
    listen_address: str = Field(
        ":9295", description="host:port to serve /metrics on. An empty host binds every interface."
    )
    metrics_interval_seconds: int = Field(
        30, description="Seconds to wait between two polls of the Redash status API."
    )
    redash_scheme: str = Field("http", description="Target Redash scheme.")
    redash_host: str = Field("localhost", description="Target Redash host.")
    redash_port: str = Field("5000", description="Target Redash port.")
    request_timeout_seconds: float = Field(
        5.0, description="Timeout applied to each outbound request to Redash."
    )
    log_level: str = Field("INFO", description="Root logging level.")
    # Only ever read from the environment so it stays out of process listings.
    api_key: SecretStr = Field(
        SecretStr(""),
        validation_alias="REDASH_API_KEY",
        description="Redash API key appended to every request.",
    )

    @field_validator("listen_address")
    def ensure_port(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"listen_address must look like 'host:port', got {value!r}")
        return value

    @field_validator("log_level")
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def listen_host(self) -> str:
        return self._split_listen_address()[0]

    @property
    def listen_port(self) -> int:
        return self._split_listen_address()[1]

    @property
    def redash_base_url(self) -> str:
        return self.redash_scheme + "://" + self.redash_host + ":" + self.redash_port

    def _split_listen_address(self) -> Tuple[str, int]:
        host, _, port = self.listen_address.rpartition(":")
        return host or "0.0.0.0", int(port)

    class Config:
        env_prefix = "REDASH_EXPORTER_"
        populate_by_name = True


settings = Settings()
