# oil_model_server/config/settings.py

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "oil-model-server"
    debug: bool = False
    version: str = "2.0.0"
    host: str = "0.0.0.0"
    port: int = 8080

    # --- Security ---
    # Seed credentials; kept in memory only and lost on restart.
    default_users: Dict[str, str] = Field(
        default_factory=lambda: {"admin": "admin123", "user": "user123"}
    )

    # --- Database ---
    # Unset means the audit store is unavailable; runs still succeed.
    database_url: Optional[str] = None
    history_limit: int = Field(50, gt=0)

    # --- Simulation engine ---
    model_dir: Path = Path("model")
    engine_executable: str = "java"
    engine_entrypoint: str = "ModelRunner"
    engine_classpath: List[str] = Field(
        default_factory=lambda: [
            ".",
            "model.jar",
            "lib/*",
            "lib/logging/*",
            "lib/database/*",
            "lib/database/querydsl/*",
            "lib/database/ucanaccess/*",
        ]
    )
    engine_timeout_seconds: Optional[float] = Field(None, gt=0)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def engine_command(self) -> List[str]:
        """Command prefix for the engine process; parameters are appended positionally."""
        model_dir = self.model_dir.resolve()
        classpath = ":".join(
            str(model_dir) if entry == "." else str(model_dir / entry)
            for entry in self.engine_classpath
        )
        return [self.engine_executable, "-cp", classpath, self.engine_entrypoint]


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
