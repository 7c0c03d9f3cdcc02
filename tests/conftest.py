import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "skill-activation"


@pytest.fixture
def sample_skills() -> dict:
    return {
        "backend-dev-guidelines": {
            "priority": "high",
            "enforcement": "suggest",
            "description": "Backend conventions",
            "promptTriggers": {
                "keywords": ["api", "endpoint"],
                "intentPatterns": ["(create|add).*?(route|controller)"],
            },
            "fileTriggers": {
                "pathPatterns": ["src/app/api/**/*.ts"],
                "pathExclusions": ["**/*.test.ts"],
                "contentPatterns": ["export async function (GET|POST)"],
            },
        },
        "frontend-dev-guidelines": {
            "priority": "medium",
            "promptTriggers": {"keywords": ["component", "react"]},
            "fileTriggers": {"pathPatterns": ["src/components/**/*.tsx"]},
        },
        "database-verification": {
            "priority": "low",
            "enforcement": "block",
            "fileTriggers": {
                "pathPatterns": ["prisma/**"],
                "contentPatterns": [{"literal": "prisma."}],
            },
        },
    }


@pytest.fixture
def rules_file(tmp_path: Path, write_json, sample_skills: dict) -> Path:
    return write_json(
        tmp_path / "skill-rules.json", {"version": "1.0", "skills": sample_skills}
    )


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
