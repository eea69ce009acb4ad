"""
Convenience launcher for an interactive game of Nines.

Behaviour:
- If not already running inside a virtual environment, create ``.venv`` in the
  project root (if it does not exist), then re-run this script inside it.
- Inside the venv:
  - If nines is importable: start a game directly (no pip install).
  - Otherwise: install the package with pip install -e ., then start a game.

Extra arguments are passed to ``nines play`` (e.g. ``--difficulty advanced``).
"""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent
VENV_DIR = ROOT / ".venv"


def in_virtualenv() -> bool:
    """Return True if we're currently running inside any virtualenv."""
    return sys.prefix != getattr(sys, "base_prefix", sys.prefix) or bool(
        os.environ.get("VIRTUAL_ENV")
    )


def venv_python_path() -> Path:
    if os.name == "nt":
        return VENV_DIR / "Scripts" / "python.exe"
    return VENV_DIR / "bin" / "python"


def package_installed() -> bool:
    try:
        import nines  # noqa: F401
        return True
    except ImportError:
        return False


def ensure_venv_and_rerun(play_args: list[str]) -> None:
    """Create .venv if needed and re-run this script inside it."""
    if not VENV_DIR.exists():
        print(f"Creating virtual environment at {VENV_DIR} ...")
        subprocess.check_call(
            [sys.executable, "-m", "venv", str(VENV_DIR)],
            cwd=str(ROOT),
        )

    py = venv_python_path()
    print(f"Re-running inside virtualenv using {py} ...")
    subprocess.check_call([str(py), str(ROOT / "run.py"), "--inside-venv", *play_args], cwd=str(ROOT))


def inside_venv_main(play_args: list[str]) -> None:
    if not package_installed():
        print("Installing nines-engine into virtualenv ...")
        subprocess.check_call(
            [sys.executable, "-m", "pip", "install", "-e", "."],
            cwd=str(ROOT),
        )

    subprocess.check_call(
        [sys.executable, "-m", "nines.cli", "play", *play_args],
        cwd=str(ROOT),
    )


def main() -> None:
    play_args = [a for a in sys.argv[1:] if a != "--inside-venv"]
    if "--inside-venv" in sys.argv or in_virtualenv():
        inside_venv_main(play_args)
    else:
        ensure_venv_and_rerun(play_args)


if __name__ == "__main__":
    main()
