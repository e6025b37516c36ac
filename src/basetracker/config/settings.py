import os
from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ---- Alchemy (transfer index) ----
ALCHEMY_API_KEY = os.environ.get("ALCHEMY_API_KEY")
ALCHEMY_BASE_URL = os.environ.get("ALCHEMY_BASE_URL", "https://base-mainnet.g.alchemy.com/v2")
ALCHEMY_TIMEOUT_SEC = int(os.environ.get("ALCHEMY_TIMEOUT_SEC", "15"))

# ---- Base RPC (block reads) ----
BASE_RPC_URL = os.environ.get("BASE_RPC_URL", "https://mainnet.base.org")
RPC_TIMEOUT_SEC = int(os.environ.get("RPC_TIMEOUT_SEC", "12"))

# ---- Network ----
NETWORK_NAME = os.environ.get("NETWORK_NAME", "Base")
BASE_LAUNCH_TIMESTAMP = int(os.environ.get("BASE_LAUNCH_TIMESTAMP", "1691539200"))   # 2023-08-09T00:00:00Z
BASE_LAUNCH_BLOCK = int(os.environ.get("BASE_LAUNCH_BLOCK", "17800000"))
BASE_SECONDS_PER_BLOCK = int(os.environ.get("BASE_SECONDS_PER_BLOCK", "2"))

# Fall back to simulated data when the index has nothing (or is unreachable)
SIMULATE_ON_MISS = _env_bool("SIMULATE_ON_MISS", True)

# ---- Display ----
DISPLAY_TIMEZONE = os.environ.get("DISPLAY_TIMEZONE", "UTC")
DATE_FORMAT = os.environ.get("DATE_FORMAT")          # strftime; None = M/D/YYYY

# ---- Frame metadata ----
FRAME_CACHE_MAX_ENTRIES = int(os.environ.get("FRAME_CACHE_MAX_ENTRIES", "1024"))
FRAME_CACHE_TTL_SEC = int(os.environ.get("FRAME_CACHE_TTL_SEC", "3600"))   # 0 = no expiry
FRAME_IMAGE_URL = os.environ.get("FRAME_IMAGE_URL", "https://base.org/images/logo.png")

# ---- Wallet connector ----
# Address of a connected wallet, used when --address is not given
CONNECTED_WALLET_ADDRESS = os.environ.get("CONNECTED_WALLET_ADDRESS")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
