"""Run flake8 with the options configured in ``pyproject.toml``."""

import pathlib
import subprocess
import sys
from typing import Iterable, Tuple

import pytest

tomllib = pytest.importorskip("tomllib")

Command = Tuple[str, ...]

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent
PATHS: Tuple[str, ...] = ("src", "tests")
FLAKE8_OPTION_KEYS: Tuple[Tuple[str, str], ...] = (
    ("max-line-length", "--max-line-length"),
    ("max-complexity", "--max-complexity"),
    ("select", "--select"),
    ("ignore", "--ignore"),
    ("per-file-ignores", "--per-file-ignores"),
    ("exclude", "--exclude"),
)


def _flake8_cli_args() -> Tuple[str, ...]:
    config_path = REPO_ROOT / "pyproject.toml"
    with config_path.open("rb") as config_file:
        config = tomllib.load(config_file)

    flake8_section = config.get("tool", {}).get("flake8", {})
    args: list[str] = []
    for key, option in FLAKE8_OPTION_KEYS:
        value = flake8_section.get(key)
        if value is None:
            continue
        if isinstance(value, list):
            serialized = ",".join(str(item) for item in value)
        else:
            serialized = str(value)
        args.append(f"{option}={serialized}")
    return tuple(args)


def test_flake8_options_come_from_pyproject() -> None:
    args = _flake8_cli_args()
    assert "--max-line-length=88" in args
    assert any(a.startswith("--ignore=") and "E203" in a for a in args)


def test_flake8() -> None:
    pytest.importorskip("flake8")
    command: Command = (sys.executable, "-m", "flake8", *_flake8_cli_args(), *PATHS)
    result = subprocess.run(
        command,
        cwd=REPO_ROOT,
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        details: Iterable[str] = [
            f"command: {' '.join(command)}",
            f"exit code: {result.returncode}",
            result.stdout.strip(),
            result.stderr.strip(),
        ]
        pytest.fail("\n\n".join(d for d in details if d))
