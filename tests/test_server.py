# tests/test_server.py
import os
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

import httpx
import pytest
import uvicorn

from core.server import ExitOnSignalServer

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_handle_exit_exits_with_zero(app, monkeypatch):
    exit_codes = []

    def fake_exit(code):
        exit_codes.append(code)
        raise SystemExit(code)

    monkeypatch.setattr(os, "_exit", fake_exit)
    server = ExitOnSignalServer(uvicorn.Config(app))

    with pytest.raises(SystemExit):
        server.handle_exit(signal.SIGTERM, None)

    assert exit_codes == [0]
    assert not server.should_exit


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
def test_signal_stops_running_server(sig):
    port = _free_port()
    env = dict(os.environ, PORT=str(port), HOST="127.0.0.1", DEBUG="false")
    proc = subprocess.Popen(
        [sys.executable, "main.py"],
        cwd=PROJECT_ROOT,
        env=env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    try:
        deadline = time.monotonic() + 20
        while True:
            try:
                if httpx.get(f"http://127.0.0.1:{port}/ready", timeout=1).status_code == 200:
                    break
            except httpx.TransportError:
                pass
            assert proc.poll() is None, "server exited before becoming ready"
            assert time.monotonic() < deadline, "server did not become ready"
            time.sleep(0.1)

        proc.send_signal(sig)

        assert proc.wait(timeout=5) == 0
        with pytest.raises(httpx.TransportError):
            httpx.get(f"http://127.0.0.1:{port}/ready", timeout=1)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
