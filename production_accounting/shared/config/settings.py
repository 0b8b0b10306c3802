from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from ...domain.value_objects.standard_conditions import StandardConditions

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings.

    Uses pydantic BaseSettings to load configuration from environment variables
    prefixed with ``PRODACCT_``.
    """
    # Environment
    ENV: str = "development"
    DEBUG: bool = False

    # Application paths
    APP_DIR: Path = Path(__file__).parent.parent.parent.parent
    DATA_ROOT_DIR: Path = APP_DIR / "data"
    DUCKDB_FILENAME: str = "production_accounting.duckdb"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOGS_DIR_NAME: str = "logs"
    LOG_FILENAME: str = "production_accounting.log"

    # Standard reference conditions
    STANDARD_TEMPERATURE_F: float = 60.0
    STANDARD_PRESSURE_PSIA: float = 14.7
    ROUNDING_DECIMALS: int = 2

    # Advanced correction defaults
    DEFAULT_SHRINKAGE_FACTOR: float = 0.98
    DEFAULT_THERMAL_EXPANSION: float = 0.0007

    # Allocation
    WELL_TEST_LOOKUP_CONCURRENCY: int = 10
    ALLOCATION_BALANCE_TOLERANCE: float = 0.01

    model_config = SettingsConfigDict(
        env_prefix="PRODACCT_",
        env_file=".env",
        extra="ignore"
    )

    @property
    def database_path(self) -> Path:
        """Full path of the DuckDB database file."""
        return self.DATA_ROOT_DIR / self.DUCKDB_FILENAME

    def standard_conditions(self) -> StandardConditions:
        """Build the standard reference conditions value object."""
        return StandardConditions(
            temperature_f=self.STANDARD_TEMPERATURE_F,
            pressure_psia=self.STANDARD_PRESSURE_PSIA
        )

    def setup_directories(self):
        """Create necessary directories if they don't exist."""
        for path in [self.DATA_ROOT_DIR, Path(self.LOGS_DIR_NAME)]:
            path.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
