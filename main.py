"""MiniLife dev launcher. Runs the API server, optionally seeding demo saves first."""

import argparse
import os
import signal
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MiniLife dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Write demo lives into save slots before starting")
    parser.add_argument("--port", default=BACKEND_PORT,
                        help=f"API port (default: {BACKEND_PORT})")
    parser.add_argument("--no-reload", action="store_true",
                        help="Run uvicorn without watching for changes")
    return parser.parse_args()


def _seed_demo(data_dir: Path) -> None:
    from backend import storage
    from backend.demo import create_demo_data

    storage.init_storage(data_dir)
    for slot in create_demo_data():
        print(f"Wrote demo save '{slot}'")


def _server_command(port: str, reload: bool) -> list[str]:
    cmd = ["uv", "run", "uvicorn", "backend.app:app", "--host", HOST, "--port", port]
    if reload:
        cmd.append("--reload")
    return cmd


def main():
    args = _parse_args()
    data_dir = args.data_dir or ROOT / "data"

    if args.demo:
        _seed_demo(data_dir)

    env = os.environ.copy()
    env["DATA_DIR"] = str(data_dir.resolve())

    print(f"Starting MiniLife API on http://localhost:{args.port}/api ...")
    server = subprocess.Popen(_server_command(args.port, not args.no_reload), cwd=ROOT, env=env)

    def shutdown(*_):
        print("\nShutting down...")
        server.terminate()
        server.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    sys.exit(server.wait())


if __name__ == "__main__":
    main()
