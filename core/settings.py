# core/settings.py
from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

class AppConfig(BaseModel):
    name: str
    environment: str = "development"
    log_level: str = "INFO"

class ApiConfig(BaseModel):
    base_url: str = "http://localhost:8080"
    timeout_seconds: Optional[float] = None  # None -> transport default

class AuthConfig(BaseModel):
    cookie_name: str = "token"

class GradesConfig(BaseModel):
    server_upsert: bool = False

class Settings(BaseModel):
    app: AppConfig
    api: ApiConfig = ApiConfig()
    auth: AuthConfig = AuthConfig()
    grades: GradesConfig = GradesConfig()

# env var -> (section, key)
_ENV_OVERRIDES = {
    "SCHOOL_API_URL": ("api", "base_url"),
    "SCHOOL_LOG_LEVEL": ("app", "log_level"),
}

def _apply_env(data: dict) -> dict:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data.setdefault(section, {})[key] = value
    return data

def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    load_dotenv()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    data = _apply_env(data)
    return Settings(
        app=AppConfig(**data.get("app", {})),
        api=ApiConfig(**data.get("api", {})),
        auth=AuthConfig(**data.get("auth", {})),
        grades=GradesConfig(**data.get("grades", {})),
    )
