import os
from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.0-flash")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

SENSOR_URL = os.getenv(
    "SENSOR_URL",
    "https://inshoe-pressure-measurement-default-rtdb.asia-southeast1.firebasedatabase.app/sensorData.json",
)
SENSOR_TIMEOUT_SECONDS = float(os.getenv("SENSOR_TIMEOUT_SECONDS", "5"))

# One sampling window = SAMPLING_TICKS ticks of TICK_SECONDS each
SAMPLING_TICKS = int(os.getenv("SAMPLING_TICKS", "30"))
TICK_SECONDS = float(os.getenv("TICK_SECONDS", "1.0"))

# "static" reads the reference table, "remote" asks the LLM per abnormal region
SUGGESTION_MODE = os.getenv("SUGGESTION_MODE", "static").strip().lower()
SUGGESTION_WORKERS = int(os.getenv("SUGGESTION_WORKERS", "4"))

# Finished or cancelled sessions are dropped once they are this old
SESSION_TTL_SECONDS = float(os.getenv("SESSION_TTL_SECONDS", "300"))

FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", "8080"))
