__version__ = "1.0.0"

# Reported by HELLO in place of a real server version.
REDIS_VERSION = "7.0.0-fake"
