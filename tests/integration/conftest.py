import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _run_cli(args, cwd=None, env=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m hogsearch.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    cmd = [sys.executable, "-m", "hogsearch.cli"] + list(map(str, args))
    if env is None:
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
        env["PYTHONIOENCODING"] = "utf-8"
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, encoding="utf-8", timeout=timeout)


@pytest.fixture()
def dataset_dir(tmp_path: Path) -> Path:
    """
    Build a small directory of trufflehog-style NDJSON output files.
    """
    d = tmp_path / "dataset"
    d.mkdir()
    aws = {"DetectorName": "AWS", "Verified": True, "Raw": "AKIAEXAMPLE", "Redacted": "AKIAEXAMPLE"}
    github = {
        "DetectorName": "Github",
        "Verified": False,
        "Raw": "ghp_notarealtoken",
        "SourceMetadata": {"Data": {"Github": {"login": "alice", "email": "alice@example.com", "line": 12}}},
    }
    slack = {"DetectorName": "Slack", "Verified": False, "Raw": "xoxb-not-real"}
    (d / "repo-a.json").write_text("\n".join(json.dumps(r) for r in [aws, slack]) + "\n")
    (d / "repo-b.json").write_text(json.dumps(github) + "\n{bad}\n" + json.dumps(aws) + "\n")
    (d / "README.txt").write_text("AKIAEXAMPLE is mentioned here but this is not JSON\n")
    return d


def _assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"


@pytest.fixture()
def run_cli():
    return _run_cli


@pytest.fixture()
def assert_exit_ok():
    return _assert_exit_ok
