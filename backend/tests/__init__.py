# Test defaults: never write log files, never need a real API key.
from __future__ import annotations

import os

os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("ASSEMBLYAI_API_KEY", "test-key")
