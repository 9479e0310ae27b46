from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    data_dir: str = os.getenv("CGPACALC_DATA_DIR", "data")
    record_file: str = os.getenv("CGPACALC_RECORD_FILE", "record.txt")
    log_level: str = os.getenv("CGPACALC_LOG_LEVEL", "INFO")

    web_mode: bool = os.getenv("CGPACALC_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))
    api_host: str = os.getenv("CGPACALC_API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("CGPACALC_API_PORT", "8000"))

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )

    @property
    def default_record_path(self) -> Path:
        return Path(self.data_dir) / self.record_file


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
