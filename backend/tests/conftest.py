import os

# Keep tests off the network: no Redis cache or rate limiting backend
os.environ.setdefault("CACHE_ENABLED", "false")
