import os
from dotenv import load_dotenv

# This tells Python to look for the .env file in the folder ABOVE the package (the root)
# structure: zeux-coach/.env
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(project_root, '.env'))

EQUIPMENT_TIERS = ("none", "basic", "full_gym")


class Config:
    """
    Central source for all environment variables.
    """
    # Database Settings (key-value storage)
    POSTGRES_DB = os.getenv("POSTGRES_DB")
    POSTGRES_USER = os.getenv("POSTGRES_USER")
    POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD")
    POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
    STORAGE_TABLE = os.getenv("ZEUX_STORAGE_TABLE", "app_storage")

    # Planner defaults, used when the stored settings don't say otherwise
    DEFAULT_CALORIE_GOAL = int(os.getenv("ZEUX_DEFAULT_CALORIE_GOAL", "2000"))
    DEFAULT_WEIGHT_KG = float(os.getenv("ZEUX_DEFAULT_WEIGHT_KG", "70"))
    DEFAULT_EQUIPMENT = os.getenv("ZEUX_DEFAULT_EQUIPMENT", "basic")

    # Progress report window (days)
    PROGRESS_WINDOW_DAYS = int(os.getenv("ZEUX_PROGRESS_WINDOW_DAYS", "30"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls):
        """Checks the planner settings; a bad value stops the import."""
        if cls.PROGRESS_WINDOW_DAYS <= 0:
            raise ValueError("❌ CRITICAL ERROR: ZEUX_PROGRESS_WINDOW_DAYS must be a positive number of days!")

        if cls.DEFAULT_EQUIPMENT not in EQUIPMENT_TIERS:
            raise ValueError(
                f"❌ CRITICAL ERROR: ZEUX_DEFAULT_EQUIPMENT must be one of {EQUIPMENT_TIERS}, "
                f"got {cls.DEFAULT_EQUIPMENT!r}"
            )

    @classmethod
    def validate_database(cls):
        """Warns about missing credentials before we try to connect."""
        if not cls.POSTGRES_DB:
            raise ValueError("❌ CRITICAL ERROR: POSTGRES_DB is missing from .env file!")

        if not cls.POSTGRES_PASSWORD:
            print("⚠️ Warning: POSTGRES_PASSWORD is empty or missing.")


# Run validation immediately when this file is imported
Config.validate()
