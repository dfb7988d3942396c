import os

from public_url import get_ngrok_url

PORT = int(os.environ.get("PORT", 3001))
FRONTEND_URL = os.environ.get("FRONTEND_URL", "*")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Unset means the server's local time, like the original deployment.
TIMEZONE = os.environ.get("EVAC_TIMEZONE") or None

# Klaus Advanced Computing Building, Georgia Tech (266 Ferst Dr NW)
ORIGIN_LAT = float(os.environ.get("ORIGIN_LAT", 33.777525))
ORIGIN_LNG = float(os.environ.get("ORIGIN_LNG", -84.396128))
DEFAULT_ORIGIN = (ORIGIN_LAT, ORIGIN_LNG)

GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
BASE_URL = os.environ.get("BASE_URL", f"http://127.0.0.1:{PORT}")


def get_base_url():
    ngrok_url = get_ngrok_url()
    return ngrok_url if ngrok_url else BASE_URL
