# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# --- Keys (Gemini only; missing key fails requests, never startup) ---
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "").strip()

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip()
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))

# --- Term list ---
# Relative paths resolve against the working directory of the running process
UNHEALTHY_LIST_PATH = Path(os.getenv("UNHEALTHY_LIST_PATH", "unhealthy_ingredients.txt"))

# --- Image pre-processing ---
MAX_IMAGE_SIZE = 800  # maximum width or height in pixels

# --- Streamlit client -> backend ---
API_URL = os.getenv("API_URL", "http://localhost:8000/api/analyze").strip()
API_TIMEOUT = int(os.getenv("API_TIMEOUT", "120"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
