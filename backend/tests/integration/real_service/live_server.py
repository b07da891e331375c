"""Shared live-server runner for real-service integration tests."""

from __future__ import annotations

import os
import subprocess
import sys
import time
from collections.abc import Generator
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import httpx

from tests.rendezvous_helpers import pick_free_port

BACKEND_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True, slots=True)
class LiveServer:
    """Endpoint for one launched rendezvous server."""

    base_url: str


def _wait_for_server_ready(*, base_url: str, process: subprocess.Popen[str], timeout_seconds: float) -> None:
    """Poll the API until the live server starts accepting requests."""
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        if process.poll() is not None:
            raise RuntimeError("uvicorn exited before becoming ready")

        try:
            response = httpx.get(
                f"{base_url}/rooms/waiting",
                timeout=0.3,
                trust_env=False,
            )
            if response.status_code == 200:
                return
        except httpx.HTTPError:
            pass

        time.sleep(0.1)

    raise RuntimeError("uvicorn did not become ready before timeout")


@contextmanager
def run_live_server(
    *,
    notify_port: int,
    env_overrides: Mapping[str, str] | None = None,
    startup_timeout_seconds: float = 10.0,
) -> Generator[LiveServer, None, None]:
    """Launch uvicorn and yield its HTTP endpoint for the test duration."""
    port = pick_free_port()
    base_url = f"http://127.0.0.1:{port}"

    env = os.environ.copy()
    env["RDV_APP_PORT"] = str(port)
    env["RDV_NOTIFY_PORT"] = str(notify_port)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(BACKEND_ROOT), env.get("PYTHONPATH")]))
    if env_overrides:
        env.update(env_overrides)

    process = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "rendezvous.main:app",
            "--host",
            "127.0.0.1",
            "--port",
            str(port),
            "--log-level",
            "warning",
        ],
        cwd=str(BACKEND_ROOT),
        env=env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        text=True,
    )

    try:
        _wait_for_server_ready(base_url=base_url, process=process, timeout_seconds=startup_timeout_seconds)
        yield LiveServer(base_url=base_url)
    finally:
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait(timeout=5)
