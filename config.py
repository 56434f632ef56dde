# config.py
"""
Process-wide settings loaded once from the environment (.env supported).

Usage:
     from config import get_settings

     settings = get_settings()
     settings.jwt_secret
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
     raw = os.getenv(name)
     if raw is None:
          return default
     return raw.strip().lower() in ("1", "true", "yes", "on")


def _build_database_url() -> str:
     """
     DATABASE_URL wins. Otherwise build an Azure SQL (pymssql) URL from the
     DB_* variables, and fall back to a local SQLite file for development.
     """
     explicit = os.getenv("DATABASE_URL")
     if explicit:
          return explicit

     server = os.getenv("DB_SERVER")
     if server:
          safe_user = quote_plus(os.getenv("DB_USER") or "")
          safe_pass = quote_plus(os.getenv("DB_PASS") or "")
          port = os.getenv("DB_PORT", "1433")
          name = os.getenv("DB_NAME")
          return f"mssql+pymssql://{safe_user}:{safe_pass}@{server}:{port}/{name}"

     return "sqlite:///./rentals.db"


@dataclass(frozen=True)
class Settings:
     app_env: str = "local"
     database_url: str = "sqlite:///./rentals.db"
     sql_echo: bool = False
     auto_create_tables: bool = False

     # Auth
     jwt_secret: str = "dev-change-me"
     jwt_algorithm: str = "HS256"
     jwt_exp_minutes: int = 60 * 24 * 7
     bcrypt_rounds: int = 10

     cors_origins: List[str] = field(default_factory=lambda: ["*"])

     # Azure Blob Storage
     azure_storage_account: Optional[str] = None
     azure_storage_key: Optional[str] = None
     azure_storage_container: str = "rentfit"

     # Firebase Admin
     firebase_service_account_key: Optional[str] = None
     firebase_project_id: Optional[str] = None
     firebase_client_email: Optional[str] = None
     firebase_private_key: Optional[str] = None

     # Uploads
     max_upload_bytes: int = 10 * 1024 * 1024
     max_upload_files: int = 10

     log_level: str = "INFO"

     @property
     def is_production(self) -> bool:
          return self.app_env.strip().lower() in ("prod", "production")


def load_settings() -> Settings:
     """Read settings from the environment. Raises on unsafe production config."""
     env = os.getenv("APP_ENV", "local")
     secret = os.getenv("JWT_SECRET")
     origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

     settings = Settings(
          app_env=env,
          database_url=_build_database_url(),
          sql_echo=_env_bool("SQL_ECHO"),
          auto_create_tables=_env_bool("AUTO_CREATE_TABLES"),
          jwt_secret=secret or "dev-change-me",
          jwt_exp_minutes=int(os.getenv("JWT_EXP_MINUTES", str(60 * 24 * 7))),
          bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
          cors_origins=origins or ["*"],
          azure_storage_account=os.getenv("AZURE_STORAGE_ACCOUNT"),
          azure_storage_key=os.getenv("AZURE_STORAGE_KEY"),
          azure_storage_container=os.getenv("AZURE_STORAGE_CONTAINER", "rentfit"),
          firebase_service_account_key=os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY"),
          firebase_project_id=os.getenv("FIREBASE_PROJECT_ID"),
          firebase_client_email=os.getenv("FIREBASE_CLIENT_EMAIL"),
          firebase_private_key=os.getenv("FIREBASE_PRIVATE_KEY"),
          max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
          log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
     )

     if settings.is_production and not secret:
          raise ValueError("JWT_SECRET must be set when APP_ENV=production")

     return settings


@lru_cache
def get_settings() -> Settings:
     return load_settings()
