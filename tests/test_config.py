from pathlib import Path

import pytest

from blocker.config import (
    DEFAULT_LIST_PERM,
    DEFAULT_LIST_TEMP,
    default_config_text,
    load_config,
)
from blocker.errors import ConfigError


def write_env(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.env"
    path.write_text(text)
    return path


def test_default_template_loads(tmp_path):
    path = write_env(tmp_path, default_config_text(tmp_path))
    cfg = load_config(path)

    assert cfg.router_host == "192.168.88.1:8728"
    assert cfg.router_user == "admin"
    assert cfg.list_temp == "blocked_attackers"
    assert cfg.list_perm == "blocked_permanent"
    assert cfg.whitelist == ("8.8.8.8", "192.168.1.0/24")
    assert cfg.escalation == (1, 3, 7)
    assert cfg.state_file == tmp_path / "state.json"
    assert cfg.dry_run is False
    assert cfg.checkpoint is True
    assert cfg.log_format == "text"
    assert cfg.extra == {}


def test_escalation_keeps_file_order(tmp_path):
    path = write_env(tmp_path, "ESCALATE_2=3\nESCALATE_1=1\nESCALATE_3=1\nESCALATE_4=24\n")
    assert load_config(path).escalation == (3, 1, 1, 24)


def test_defaults_for_missing_keys(tmp_path):
    cfg = load_config(write_env(tmp_path, "# empty\n"))
    assert cfg.list_temp == DEFAULT_LIST_TEMP
    assert cfg.list_perm == DEFAULT_LIST_PERM
    assert cfg.whitelist == ()
    assert cfg.escalation == ()
    assert cfg.state_file == tmp_path / "state.json"


def test_explicit_state_file_and_booleans(tmp_path):
    state = tmp_path / "elsewhere" / "offenses.json"
    cfg = load_config(
        write_env(tmp_path, f"STATE_FILE={state}\nDRY_RUN=yes\nCHECKPOINT=off\nLOG_FORMAT=JSON\n")
    )
    assert cfg.state_file == state
    assert cfg.dry_run is True
    assert cfg.checkpoint is False
    assert cfg.log_format == "json"


def test_password_is_not_interpolated(tmp_path):
    cfg = load_config(write_env(tmp_path, "MT_PASS=pa$${HOME}ss\n"))
    assert cfg.router_password == "pa$${HOME}ss"


def test_unknown_keys_are_reported(tmp_path):
    cfg = load_config(write_env(tmp_path, "ESCALATION_1=5\nMT_HOST=10.0.0.1\n"))
    assert cfg.extra == {"ESCALATION_1": "5"}
    assert cfg.escalation == ()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "config.env")


@pytest.mark.parametrize(
    "text",
    ["ESCALATE_1=one\n", "ESCALATE_1=-3\n", "ESCALATE_1=\n", "DRY_RUN=maybe\n", "LOG_FORMAT=xml\n"],
)
def test_invalid_values(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(write_env(tmp_path, text))
