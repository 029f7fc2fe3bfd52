"""Config file."""
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # PROJECT
    project_name: str = Field(..., alias="PROJECT_NAME")

    # DATABASE
    postgres_user: str = Field(..., alias="POSTGRES_USER")
    postgres_password: SecretStr = Field(..., alias="POSTGRES_PASSWORD")
    postgres_server: str = Field(..., alias="POSTGRES_SERVER")
    postgres_port: int = Field(..., alias="POSTGRES_PORT")
    postgres_db: str = Field(..., alias="POSTGRES_DB")
    database_url: str | None = Field(None, alias="DATABASE_URL")

    # CHAIN
    rpc_urls: dict[int, str] = Field(default_factory=dict, alias="RPC_URLS")
    rpc_timeout_s: int = Field(30, alias="RPC_TIMEOUT_S")
    zero_address: str = Field("0x" + "00" * 20, alias="ZERO_ADDRESS")

    # REPLAY
    replay_batch_size: int = Field(2000, alias="REPLAY_BATCH_SIZE")

    @field_validator("zero_address")
    @classmethod
    def check_zero_address(cls, v: str) -> str:
        raw = v[2:] if v.startswith("0x") else v
        if len(bytes.fromhex(raw)) != 20:
            raise ValueError("ZERO_ADDRESS must be a 20-byte hex address")
        return "0x" + raw.lower()

    @model_validator(mode="after")
    def assemble_db_urls(self) -> "Settings":
        if not self.database_url:
            user = quote_plus(self.postgres_user)
            password = quote_plus(self.postgres_password.get_secret_value())
            host = self.postgres_server
            port = self.postgres_port
            db = self.postgres_db

            self.database_url = f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"

        return self

    @property
    def zero_address_bytes(self) -> bytes:
        return bytes.fromhex(self.zero_address[2:])

    def rpc_url(self, chain_id: int) -> str:
        try:
            return self.rpc_urls[chain_id]
        except KeyError:
            raise ValueError(f"No RPC URL configured for chain_id={chain_id}")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings: Settings = Settings()
