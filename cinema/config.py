import os
from dotenv import load_dotenv

load_dotenv()

TMDB_API_KEY = os.getenv("TMDB_API_KEY", "")
TRAILER_REGION = os.getenv("TRAILER_REGION", "US")
REMOTE_TRAILER_PAGES = int(os.getenv("REMOTE_TRAILER_PAGES", "1"))
REMOTE_TRAILER_LIMIT = int(
    os.getenv("REMOTE_TRAILER_LIMIT", "20")
)  # detail lookups per listing; each one is a TMDB request
REMOTE_TRAILER_TIMEOUT = float(os.getenv("REMOTE_TRAILER_TIMEOUT", "20"))
REMOTE_TRAILER_CACHE_TTL = int(os.getenv("REMOTE_TRAILER_CACHE_TTL", "3600"))
SUPPORTER_KEY = os.getenv("SUPPORTER_KEY", "")
CINEMA_MODE_CONFIG_PATH = os.getenv("CINEMA_MODE_CONFIG_PATH", "")
