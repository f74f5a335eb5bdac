from __future__ import annotations

import subprocess
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "tools"))

import depcheck

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def test_depcheck_fails_on_forbidden_import(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True, exist_ok=True)

    violating_file = domain_dir / "model.py"
    violating_file.write_text("import sqlalchemy\n", encoding="utf-8")

    result = subprocess.run(
        [sys.executable, str(SCRIPT_PATH), "--path", str(domain_dir)],
        capture_output=True,
        text=True,
        check=False,
    )

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "sqlalchemy" in combined_output
    assert str(violating_file) in combined_output


def test_domain_may_not_import_application_layer(tmp_path: Path) -> None:
    violating_file = tmp_path / "entities.py"
    violating_file.write_text(
        "from kitchenpos.application.errors import NotFoundError\n",
        encoding="utf-8",
    )

    [violation] = depcheck.find_violations([violating_file])

    assert violation.module == "kitchenpos.application.errors"
    assert violation.line == 1


def test_application_may_use_pydantic_but_not_infrastructure(tmp_path: Path) -> None:
    source = tmp_path / "use_case.py"
    source.write_text(
        "from pydantic import BaseModel\n"
        "from kitchenpos.infrastructure.db.session import get_engine\n",
        encoding="utf-8",
    )

    violations = depcheck.find_violations([source], depcheck.LAYER_RULES["application"])

    assert [violation.module for violation in violations] == ["kitchenpos.infrastructure.db.session"]


def test_kitchenpos_layers_are_clean() -> None:
    assert depcheck.check_layers() == []
