import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

TARGET_URL = os.getenv("UIPROBE_TARGET_URL", "https://www.swifttranslator.com/")
SCENARIO_FILE = os.getenv("UIPROBE_SCENARIO_FILE", "scenarios.yaml")
HEADLESS = os.getenv("UIPROBE_HEADLESS", "true").lower() != "false"

# Timings, all in milliseconds
SETTLE_MS = int(os.getenv("UIPROBE_SETTLE_MS", "1000"))
CLEAR_SETTLE_MS = int(os.getenv("UIPROBE_CLEAR_SETTLE_MS", "500"))
QUIESCENCE_MS = int(os.getenv("UIPROBE_QUIESCENCE_MS", "3000"))

# 'fixed' sleeps for QUIESCENCE_MS, 'stable' polls the output until it stops changing
WAIT_MODE = os.getenv("UIPROBE_WAIT_MODE", "fixed")
POLL_INTERVAL_MS = int(os.getenv("UIPROBE_POLL_INTERVAL_MS", "250"))
STABLE_SAMPLES = int(os.getenv("UIPROBE_STABLE_SAMPLES", "3"))
STABLE_TIMEOUT_MS = int(os.getenv("UIPROBE_STABLE_TIMEOUT_MS", "10000"))


class RunSettings(BaseModel):
    """Snapshot of the timing/target knobs for one run. CLI flags override the env defaults."""
    target_url: str = Field(default_factory=lambda: TARGET_URL)
    headless: bool = Field(default_factory=lambda: HEADLESS)
    ignore_https_errors: bool = False
    settle_ms: int = Field(default_factory=lambda: SETTLE_MS, ge=0)
    clear_settle_ms: int = Field(default_factory=lambda: CLEAR_SETTLE_MS, ge=0)
    quiescence_ms: int = Field(default_factory=lambda: QUIESCENCE_MS, ge=0)
    wait_mode: Literal["fixed", "stable"] = Field(default_factory=lambda: WAIT_MODE)
    poll_interval_ms: int = Field(default_factory=lambda: POLL_INTERVAL_MS, gt=0)
    stable_samples: int = Field(default_factory=lambda: STABLE_SAMPLES, ge=1)
    stable_timeout_ms: int = Field(default_factory=lambda: STABLE_TIMEOUT_MS, gt=0)
