import os

from dotenv import load_dotenv

load_dotenv()

BACKEND_ROOT = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ServerConfig:
    """
    Server settings read from the environment (.env supported).

    HOST / FAST_API_PORT / RELOAD control uvicorn, DATA_DIR is where the JSON
    collections live, DEFAULT_DAILY_LIMIT seeds the office settings the first
    time they are read and SWEEP_INTERVAL_SECONDS paces the background
    archival sweep (0 runs it only at startup).
    """

    def __init__(self):
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("FAST_API_PORT", "7860"))
        self.reload: bool = _env_bool("RELOAD", False)
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.data_dir: str = os.getenv(
            "DATA_DIR", os.path.join(BACKEND_ROOT, "resources", "data")
        )
        self.default_daily_limit: int = int(os.getenv("DEFAULT_DAILY_LIMIT", "20"))
        self.sweep_interval_seconds: int = int(os.getenv("SWEEP_INTERVAL_SECONDS", "3600"))
