"""Helper to launch the orchestrator HTTP surface under uvicorn."""
from __future__ import annotations
import os
import subprocess
import sys

def build_command() -> list[str]:
    host = os.getenv("ORCHESTRATOR_HOST", "127.0.0.1")
    port = os.getenv("ORCHESTRATOR_PORT", "8010")
    log_level = os.getenv("ORCHESTRATOR_LOG_LEVEL", "INFO").lower()

    return [
        sys.executable,
        "-m",
        "uvicorn",
        "meta_prompt_orchestrator.serve.fastapi_app:app",
        "--host", host,
        "--port", str(port),
        "--log-level", log_level,
    ]

def main() -> None:
    subprocess.run(build_command(), check=True)

if __name__ == "__main__":
    main()
