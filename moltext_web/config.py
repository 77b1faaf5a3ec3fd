"""
Service settings read from the environment.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    opsin_url: str = ""
    opsin_timeout: float = 10.0
    rate_limit_per_minute: int = 100
    ink_color: str = "#000000"
    svg_size: int = 300
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            opsin_url=os.getenv("OPSIN_URL", ""),
            opsin_timeout=float(os.getenv("OPSIN_TIMEOUT", "10")),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "100")),
            ink_color=os.getenv("INK_COLOR", "#000000"),
            svg_size=int(os.getenv("SVG_SIZE", "300")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
