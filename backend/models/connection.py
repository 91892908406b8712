"""Pydantic schema for the database connection descriptor."""
from typing import Optional, Literal
from urllib.parse import quote_plus

from pydantic import BaseModel, Field


class ConnectionDescriptor(BaseModel):
    db_type: Literal["sqlite", "postgresql", "mssql"] = Field(..., description="Database engine type")

    # SQLite only
    file_path: Optional[str] = Field(None, description="Path to .db file (SQLite only)")

    # Server databases
    host: Optional[str] = Field(None, description="Database host")
    port: Optional[int] = Field(None, description="Database port")
    database: Optional[str] = Field(None, description="Database name")
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")

    # TLS (SQL Server)
    encrypt: bool = True
    trust_server_certificate: bool = False

    connect_timeout: int = 15

    def get_sqlalchemy_url(self) -> str:
        if self.db_type == "sqlite":
            return f"sqlite:///{self.file_path}"
        credentials = f"{quote_plus(self.username or '')}:{quote_plus(self.password or '')}"
        if self.db_type == "postgresql":
            return (
                f"postgresql+psycopg2://{credentials}"
                f"@{self.host}:{self.port or 5432}/{self.database}"
            )
        return (
            f"mssql+pyodbc://{credentials}"
            f"@{self.host}:{self.port or 1433}/{self.database}"
            f"?driver={quote_plus('ODBC Driver 18 for SQL Server')}"
            f"&Encrypt={'yes' if self.encrypt else 'no'}"
            f"&TrustServerCertificate={'yes' if self.trust_server_certificate else 'no'}"
        )

    def get_connect_args(self) -> dict:
        if self.db_type == "sqlite":
            return {"timeout": self.connect_timeout}
        if self.db_type == "postgresql":
            return {"connect_timeout": self.connect_timeout}
        return {"timeout": self.connect_timeout}
