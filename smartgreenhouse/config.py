"""Configuration for the Smart Greenhouse command bot"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
_repo_root = Path(__file__).parent.parent.resolve()
_env_file = _repo_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Base directory
BASE_DIR = Path(__file__).parent.resolve()

# Firebase Realtime Database (system of record for device status and schedules)
_default_creds = str(_repo_root / "serviceAccountKey.json")
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH", _default_creds)
FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL", "")

# Run against an in-process store instead of Firebase (local development)
SIMULATE_STATE_STORE = os.getenv("SIMULATE_STATE_STORE", "false").lower() == "true"

# Twilio WhatsApp gateway
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
TWILIO_WHATSAPP_NUMBER = os.getenv("TWILIO_WHATSAPP_NUMBER", "")
TWILIO_API_URL = os.getenv("TWILIO_API_URL", "https://api.twilio.com/2010-04-01")

# Conversational fallback (OpenRouter-compatible chat completions)
FALLBACK_API_URL = os.getenv("FALLBACK_API_URL", "https://openrouter.ai/api/v1/chat/completions")
FALLBACK_API_KEY = os.getenv("FALLBACK_API_KEY", os.getenv("DEEPSEEK_API_KEY", ""))
FALLBACK_MODEL = os.getenv("FALLBACK_MODEL", "openai/gpt-4o")
FALLBACK_MAX_TOKENS = int(os.getenv("FALLBACK_MAX_TOKENS", "1000"))
FALLBACK_TIMEOUT_SECONDS = float(os.getenv("FALLBACK_TIMEOUT_SECONDS", "30"))

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Scheduler
SCHEDULER_INTERVAL_SECONDS = int(os.getenv("SCHEDULER_INTERVAL_SECONDS", "60"))
DEFAULT_SCHEDULE_DURATION = int(os.getenv("DEFAULT_SCHEDULE_DURATION", "5"))  # minutes

# Cooler automatic mode threshold (enforced by the external temperature loop)
COOLER_AUTO_THRESHOLD_C = int(os.getenv("COOLER_AUTO_THRESHOLD_C", "34"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/greenhouse.log")

# Debug
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
