import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables (single place for the app)
load_dotenv()


def convert_to_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value is not None else None


def convert_to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


class ConfigEnv:
    # ----- Nominatim -----
    NOMINATIM_URL = os.getenv("NOMINATIM_URL") or None
    NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "placefinder-nominatim-service/1.0")
    NOMINATIM_FORMAT = (os.getenv("NOMINATIM_FORMAT", "jsonv2") or "jsonv2").strip().lower()
    NOMINATIM_TIMEOUT = convert_to_float(os.getenv("NOMINATIM_TIMEOUT", "10.0")) or 10.0

    # ----- MongoDB -----
    MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
    MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "placefinder")

    # ----- Local fallback -----
    REVERSE_GEOCODE_MAX_DISTANCE_M = convert_to_int(os.getenv("REVERSE_GEOCODE_MAX_DISTANCE_M", "25000")) or 25000

    # ----- Feature flags -----
    _ci = (os.getenv("CREATE_INDEXES_ON_STARTUP", "true") or "").strip().lower()
    CREATE_INDEXES_ON_STARTUP = _ci not in {"0", "false", "no", "off"}

    SUPPORTED_FORMATS = ("json", "jsonv2", "xml")

    REQUIRED = [
        "MONGODB_URL",
        "MONGODB_DB_NAME",
    ]

    @classmethod
    def get_nominatim_format(cls) -> str:
        """Return NOMINATIM_FORMAT if supported, else the jsonv2 default."""
        if cls.NOMINATIM_FORMAT in cls.SUPPORTED_FORMATS:
            return cls.NOMINATIM_FORMAT
        return "jsonv2"

    @classmethod
    def validate(cls) -> None:
        missing = [key for key in cls.REQUIRED if getattr(cls, key) is None]
        if missing:
            raise RuntimeError(f"Missing required env vars: {', '.join(missing)}")
