#!/usr/bin/env python3
"""Local smoke test runner.

Starts the backend against a throwaway drafts directory, walks the draft
lifecycle over HTTP and checks the publish validation, then reports results.
Publishing itself is only exercised with ``--publish`` since it creates a
real (private) Qiita item and needs QIITA_ACCESS_TOKEN.
"""

import argparse
import atexit
import os
import signal
import subprocess
import sys
import tempfile
import time

import httpx

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BACKEND = {
    "name": "Editor backend",
    "module": "backend.main",
    "port": 3001,
}

BASE_URL = f"http://localhost:{BACKEND['port']}"
STARTUP_TIMEOUT = 30  # seconds to wait for the server

# ---------------------------------------------------------------------------
# Process management
# ---------------------------------------------------------------------------

_processes: list[subprocess.Popen] = []


def _cleanup() -> None:
    """Kill all child processes."""
    for proc in _processes:
        try:
            proc.terminate()
        except OSError:
            pass
    time.sleep(1)
    for proc in _processes:
        try:
            proc.kill()
        except OSError:
            pass
    print("\n--- All processes cleaned up ---")


atexit.register(_cleanup)
signal.signal(signal.SIGINT, lambda *_: sys.exit(1))
signal.signal(signal.SIGTERM, lambda *_: sys.exit(1))


def start_process(module: str, name: str, env: dict[str, str]) -> subprocess.Popen:
    """Start a Python module as a background process."""
    proc = subprocess.Popen(
        [sys.executable, "-m", module],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        env=env,
    )
    _processes.append(proc)
    print(f"  Started {name} (PID {proc.pid})")
    return proc


def wait_for_backend(timeout: int = STARTUP_TIMEOUT) -> bool:
    """Poll the health endpoint until it answers or timeout is reached."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with httpx.Client(timeout=5) as client:
                if client.get(f"{BASE_URL}/api/health").status_code == 200:
                    print(f"  Backend (port {BACKEND['port']}) is ready")
                    return True
        except (httpx.ConnectError, httpx.ReadTimeout):
            pass
        time.sleep(0.5)
    print(f"  TIMEOUT: Backend did not start in {timeout}s")
    return False


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check(name: str, condition: bool, detail: str = "") -> bool:
    print(f"  [{'PASS' if condition else 'FAIL'}] {name}{f' — {detail}' if detail else ''}")
    return condition


def run_draft_lifecycle(client: httpx.Client) -> list[bool]:
    """Create → list → update → delete → 404."""
    print(f"\n{'='*60}")
    print("Draft lifecycle")
    print(f"{'='*60}")
    results: list[bool] = []

    resp = client.post("/api/drafts", json={"title": "A", "markdown": "# hi"})
    results.append(check("create draft", resp.status_code == 200, resp.text))
    draft_id = resp.json().get("id", "")

    listed = client.get("/api/drafts/list").json()
    results.append(check("list has one draft", len(listed) == 1 and listed[0]["id"] == draft_id))

    latest = client.get("/api/drafts").json()
    results.append(check("latest is the new draft", (latest or {}).get("id") == draft_id))

    client.put(f"/api/drafts/{draft_id}", json={"title": "B"})
    draft = client.get(f"/api/drafts/{draft_id}").json()
    results.append(
        check(
            "update merges fields",
            draft["title"] == "B" and draft["markdown"] == "# hi",
            f"title={draft['title']!r}",
        )
    )

    resp = client.delete(f"/api/drafts/{draft_id}")
    results.append(check("delete draft", resp.status_code == 200))
    resp = client.get(f"/api/drafts/{draft_id}")
    results.append(check("deleted draft is 404", resp.status_code == 404))
    return results


def run_publish_checks(client: httpx.Client, publish: bool) -> list[bool]:
    print(f"\n{'='*60}")
    print("Publish proxy")
    print(f"{'='*60}")
    results: list[bool] = []

    resp = client.post("/api/articles", json={"title": "", "body": "x"})
    results.append(check("blank title rejected", resp.status_code == 400, resp.json()["message"]))

    if publish:
        resp = client.post(
            "/api/articles",
            json={
                "title": "Smoke test",
                "body": "Published by scripts/run_local.py",
                "tags": [{"name": "test", "versions": []}],
                "private": True,
            },
        )
        results.append(check("private article published", resp.status_code == 200, resp.text))
    return results


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--publish",
        action="store_true",
        help="also publish a private article to Qiita",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Qiita Markdown Editor — Local Smoke Tests")
    print("=" * 60)

    drafts_dir = tempfile.mkdtemp(prefix="drafts-")
    env = {**os.environ, "DRAFTS_DIR": drafts_dir, "PORT": str(BACKEND["port"])}

    print("\n--- Starting backend ---")
    start_process(BACKEND["module"], BACKEND["name"], env)
    if not wait_for_backend():
        print("FATAL: Backend failed to start. Aborting.")
        return 1

    with httpx.Client(base_url=BASE_URL, timeout=30) as client:
        results = run_draft_lifecycle(client)
        results += run_publish_checks(client, args.publish)

    passed = sum(results)
    print(f"\n{'='*60}")
    print(f"SUMMARY: {passed}/{len(results)} checks passed (drafts in {drafts_dir})")
    print(f"{'='*60}")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
