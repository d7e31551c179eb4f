from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # --- catalog source ---
    data_url: str = "https://courses.cs.northwestern.edu/394/guides/data/cs-courses.php"
    request_timeout: float = 30.0

    # --- local cache ---
    data_dir: Path = PACKAGE_DIR / "data"

    # --- app ---
    log_level: str = "INFO"
    default_term: str = "Fall"

    model_config = SettingsConfigDict(
        env_prefix="COURSEPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def catalog_path(self) -> Path:
        return self.data_dir / "courses.json"


def get_settings() -> Settings:
    # Re-read the environment each call so tests can override it
    return Settings()
