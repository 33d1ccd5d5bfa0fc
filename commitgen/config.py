import os

# --- Generation Service ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
MODEL_NAME = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
LLM_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "45"))

# --- HTTP Edge ---
DEFAULT_RATE_LIMIT = os.getenv("RATE_LIMIT", "10/minute")
