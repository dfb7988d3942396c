import logging

import requests

logger = logging.getLogger(__name__)

NGROK_API_URL = "http://127.0.0.1:4040/api/tunnels"


def get_ngrok_url(api_url=NGROK_API_URL):
    try:
        data = requests.get(api_url, timeout=2).json()
    except (requests.RequestException, ValueError):
        logger.debug("No ngrok tunnel found at %s", api_url)
        return None

    for tunnel in data.get("tunnels", []):
        public_url = tunnel.get("public_url")
        if public_url and public_url.startswith("https://"):
            return public_url
    tunnels = data.get("tunnels", [])
    if not tunnels:
        return None
    return tunnels[0].get("public_url")
