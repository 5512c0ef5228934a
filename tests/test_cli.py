from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")

ORIGIN = "https://app.example"
ZERO_PUBLIC_KEY_HEX = "3b6a27bcceb6a42d62a3a8d02a6f0d73653215771de243a63ac048a18b59da29"
ZERO_DID = "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp"


def _run_cli(*args: str, cwd: Path, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    command = [sys.executable, "-m", "irl_onboarding.cli", *args]
    env = os.environ.copy()
    module_root = Path(__file__).resolve().parents[1] / "src"
    env["PYTHONPATH"] = (
        f"{module_root}{os.pathsep}{env['PYTHONPATH']}"
        if env.get("PYTHONPATH")
        else str(module_root)
    )
    env["IRL_STORE_DIR"] = str(cwd / "store")
    return subprocess.run(
        command,
        check=check,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )


def test_cli_reports_version(tmp_path: Path) -> None:
    result = _run_cli("--version", cwd=tmp_path)
    assert result.stdout.decode("utf-8").strip().startswith("irl-onboarding")


def test_cli_did_from_hex(tmp_path: Path) -> None:
    result = _run_cli("did", ZERO_PUBLIC_KEY_HEX, cwd=tmp_path)
    assert result.stdout.decode("utf-8").strip() == ZERO_DID


def test_cli_issue_without_profile_hints(tmp_path: Path) -> None:
    result = _run_cli("issue-profile", "--audience", ORIGIN, cwd=tmp_path, check=False)
    assert result.returncode == 1
    assert b"create-profile" in result.stderr


def test_cli_profile_issue_verify_accept(tmp_path: Path) -> None:
    did = _run_cli(
        "create-profile", "--name", "Ada", "--social", "github:ada", cwd=tmp_path
    ).stdout.decode("utf-8").strip()
    assert did.startswith("did:key:z6Mk")

    shown = json.loads(_run_cli("show-profile", cwd=tmp_path).stdout)
    assert shown["did"] == did
    assert shown["socials"] == [{"platform": "GITHUB", "handle": "ada"}]

    token = _run_cli("issue-profile", "--audience", ORIGIN, cwd=tmp_path).stdout.decode("utf-8").strip()
    assert token.count(".") == 2

    ok = _run_cli("verify", token, "--did", did, cwd=tmp_path, check=False)
    assert ok.returncode == 0
    assert b"Verify OK" in ok.stdout

    wrong = _run_cli("verify", token, "--did", ZERO_DID, cwd=tmp_path, check=False)
    assert wrong.returncode == 2

    decoded = json.loads(_run_cli("decode", token, cwd=tmp_path).stdout)
    assert decoded["payload"]["aud"] == ORIGIN
    assert decoded["header"] == {"alg": "EdDSA", "typ": "JWT"}

    accepted = json.loads(
        _run_cli("accept", token, "--audience", ORIGIN, "--type", "irl:profile:details", cwd=tmp_path).stdout
    )
    assert accepted["iss"] == did

    rejected = _run_cli("accept", token, "--audience", "https://other.example", cwd=tmp_path, check=False)
    assert rejected.returncode == 2

    no_avatar = _run_cli("issue-avatar", "--audience", ORIGIN, cwd=tmp_path, check=False)
    assert no_avatar.returncode == 1

    _run_cli("clear-profile", "--yes", cwd=tmp_path)
    assert _run_cli("show-profile", cwd=tmp_path, check=False).returncode == 1


def test_cli_avatar_credential(tmp_path: Path) -> None:
    avatar = tmp_path / "avatar.png"
    avatar.write_bytes(b"\x89PNG\r\n\x1a\n")
    _run_cli("create-profile", "--name", "Ada", "--avatar", str(avatar), cwd=tmp_path)
    token = _run_cli("issue-avatar", "--audience", ORIGIN, cwd=tmp_path).stdout.decode("utf-8").strip()
    decoded = json.loads(_run_cli("decode", token, cwd=tmp_path).stdout)
    assert decoded["payload"]["type"] == "irl:avatar"
    assert decoded["payload"]["data"]["avatar"].startswith("data:image/png;base64,")


def test_cli_decode_rejects_garbage(tmp_path: Path) -> None:
    result = _run_cli("decode", "not-a-token", cwd=tmp_path, check=False)
    assert result.returncode == 2
