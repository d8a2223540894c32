from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_forbidden_import(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)

    violating_file = domain_dir / "model.py"
    violating_file.write_text("import sqlalchemy\n", encoding="utf-8")

    result = _run("--path", str(domain_dir))

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "sqlalchemy" in combined_output
    assert str(violating_file) in combined_output


def test_depcheck_flags_outer_layer_and_dynamic_imports(tmp_path: Path) -> None:
    violating_file = tmp_path / "pricing.py"
    violating_file.write_text(
        "import importlib\n"
        "from cafepos.infrastructure.storage import factory\n"
        "store = importlib.import_module('redis')\n",
        encoding="utf-8",
    )

    result = _run("--path", str(violating_file))

    assert result.returncode == 1
    assert f"{violating_file}:2 -> cafepos.infrastructure.storage" in result.stdout
    assert f"{violating_file}:3 -> redis" in result.stdout


def test_depcheck_passes_on_domain_package() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout
    assert "depcheck passed" in result.stdout
