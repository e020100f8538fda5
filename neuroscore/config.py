"""
NeuroScore Configuration
========================
Centralised settings for logging and report presentation.
Loads overrides from the project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent                  # neuroscore/
PROJECT_ROOT = PACKAGE_DIR.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("NEUROSCORE_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("NEUROSCORE_LOG_FILE", "")
LOG_AUTOSETUP: bool = _flag("NEUROSCORE_LOG_AUTOSETUP")       # off: library code leaves the root logger alone

# ── Report ──────────────────────────────────────────────────────────────
REPORT_BANNER: str = os.getenv("NEUROSCORE_REPORT_BANNER", "AVALIAÇÃO NEUROPSICOLÓGICA")
