"""Application settings loaded from .env file."""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from models.connection import ConnectionDescriptor

DEFAULT_ALLOWED_TABLES = (
    "Buildings,Categories,Items,Residents,Transactions,"
    "TransactionItems,TransactionTypes,Units,Users"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Ollama
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "qwen2.5-coder:3b"
    OLLAMA_TIMEOUT_SECONDS: int = 120
    OLLAMA_NUM_CTX: int = 8192
    OLLAMA_TEMPERATURE: float = 0.2

    # Database
    DB_TYPE: Literal["sqlite", "postgresql", "mssql"] = "sqlite"
    DB_SERVER: str = "localhost"
    DB_PORT: Optional[int] = None   # engine default when unset
    DB_DATABASE: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_ENCRYPT: bool = True
    DB_TRUST_SERVER_CERTIFICATE: bool = False
    DB_FILE_PATH: str = "./data/inventory.db"
    DB_CONNECT_TIMEOUT_SECONDS: int = 15

    # Query policy
    QUERY_MODE: Literal["read_only", "read_write"] = "read_write"
    ALLOWED_TABLES: str = DEFAULT_ALLOWED_TABLES

    # Telemetry
    TELEMETRY_ENDPOINT: str = ""
    TELEMETRY_TIMEOUT_SECONDS: int = 5

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_table_list(self) -> list[str]:
        return [t.strip() for t in self.ALLOWED_TABLES.split(",") if t.strip()]

    @property
    def connection(self) -> ConnectionDescriptor:
        return ConnectionDescriptor(
            db_type=self.DB_TYPE,
            host=self.DB_SERVER,
            port=self.DB_PORT,
            database=self.DB_DATABASE,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            encrypt=self.DB_ENCRYPT,
            trust_server_certificate=self.DB_TRUST_SERVER_CERTIFICATE,
            file_path=self.DB_FILE_PATH,
            connect_timeout=self.DB_CONNECT_TIMEOUT_SECONDS,
        )


settings = Settings()
