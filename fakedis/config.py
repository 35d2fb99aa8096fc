"""
Configuration management for Fakedis connections.
"""

import os
from dataclasses import dataclass, fields


@dataclass
class Config:
    """Connection and console configuration settings."""

    # Timeouts (seconds). Recorded for compatibility; nothing blocks.
    read_timeout: float = 5.0
    connect_timeout: float = 1.0
    write_timeout: float = 5.0

    # Logging
    loglevel: str = "info"
    logfile: str = ""

    @classmethod
    def from_file(cls, filepath: str) -> "Config":
        """Load configuration from a file of ``name value`` lines."""
        config = cls()
        types = {f.name: type(getattr(config, f.name)) for f in fields(cls)}
        if os.path.exists(filepath):
            with open(filepath, 'r') as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith('#'):
                        continue
                    parts = line.split(None, 1)
                    if len(parts) == 2:
                        key, value = parts
                        key = key.lower()
                        attr_type = types.get(key)
                        if attr_type in (int, float):
                            setattr(config, key, attr_type(value))
                        elif attr_type == str:
                            setattr(config, key, value.strip('"'))
        return config
