import os
import json
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ApiKeyError

load_dotenv()

API_URL = os.getenv("CADAGENT_API_URL", "https://api.perplexity.ai")
MODEL = os.getenv("CADAGENT_MODEL", "sonar")
TEMPERATURE = float(os.getenv("CADAGENT_TEMPERATURE", "0.1"))
LOG_LEVEL = os.getenv("CADAGENT_LOG_LEVEL", "WARNING")

# drawing defaults
DEFAULT_LAYER = "0"
REQUIRED_LAYERS = [
    name.strip()
    for name in os.getenv("CADAGENT_REQUIRED_LAYERS", "WIRE,TITLE").split(",")
    if name.strip()
]

SETTINGS_FILE = "appsettings.local.json"
API_KEY_ENV = "PPLX_API_KEY"


def _key_from_settings(path: Path) -> Optional[str]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    section = data.get("Perplexity") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        return None
    key = section.get("ApiKey")
    if isinstance(key, str) and key.strip():
        return key.strip()
    return None


def get_api_key(settings_path: Optional[str] = None) -> str:
    """Settings file next to the package first, then the environment."""
    path = Path(settings_path) if settings_path else Path(__file__).resolve().parent / SETTINGS_FILE
    key = _key_from_settings(path) if path.is_file() else None
    if key:
        return key

    env_key = os.getenv(API_KEY_ENV)
    if env_key and env_key.strip():
        return env_key.strip()

    raise ApiKeyError(
        f"API key not configured. Create {SETTINGS_FILE} with Perplexity.ApiKey "
        f"next to the cadagent package or set the {API_KEY_ENV} environment variable."
    )
