"""
Global configuration loaded from environment variables.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from .env file."""

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    RESULTS_DIR: Path = PROJECT_ROOT / "results"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Report output
    REPORT_FILENAME: str = "report.html"
    VALIDATION_FILENAME: str = "validation.html"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


def print_settings():
    """Print current settings (for debugging)."""
    print("\n" + "=" * 50)
    print("DATA MINING REPORT - SETTINGS")
    print("=" * 50)
    print(f"Project Root: {settings.PROJECT_ROOT}")
    print(f"Results Dir: {settings.RESULTS_DIR}")
    print(f"Logs Dir: {settings.LOGS_DIR}")
    print(f"Report File: {settings.REPORT_FILENAME}")
    print(f"Validation File: {settings.VALIDATION_FILENAME}")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    print_settings()
