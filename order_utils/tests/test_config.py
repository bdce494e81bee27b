"""Tests for order_utils.config — load precedence and deployment resolution."""

import json
from dataclasses import fields

import pytest

from order_utils.config import Config
from order_utils.constants import AMOY, POLYGON, get_exchange_address
from order_utils.errors import ConfigError


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.chain_id == POLYGON
        assert cfg.neg_risk is False
        assert cfg.exchange_address == ""
        assert cfg.private_key == ""

    def test_only_deployment_and_auth_fields(self):
        assert {f.name for f in fields(Config)} == {
            "private_key", "chain_id", "neg_risk", "exchange_address",
        }

    def test_resolves_known_deployment(self):
        assert Config().resolve_exchange_address() == "0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E"
        assert Config(chain_id=AMOY).resolve_exchange_address() == (
            "0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40"
        )
        assert Config(neg_risk=True).resolve_exchange_address() == (
            "0xC5d563A36AE78145C45a50134d48A1215220f80a"
        )

    def test_explicit_address_wins(self):
        addr = "0x1111111111111111111111111111111111111111"
        assert Config(chain_id=31337, exchange_address=addr).resolve_exchange_address() == addr

    def test_unknown_chain(self):
        with pytest.raises(ConfigError):
            Config(chain_id=31337).resolve_exchange_address()
        with pytest.raises(ConfigError):
            get_exchange_address(1)


class TestConfigLoad:
    def test_file_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("POLY_CHAIN_ID", "137")
        (tmp_path / "config.json").write_text(json.dumps({"chain_id": 80002, "neg_risk": "true"}))
        cfg = Config.load(str(tmp_path))
        assert cfg.chain_id == AMOY
        assert cfg.neg_risk is True

    def test_env_used_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("POLY_PRIVATE_KEY", "0xabc")
        monkeypatch.setenv("POLY_CHAIN_ID", "80002")
        monkeypatch.setenv("POLY_NEG_RISK", "1")
        cfg = Config.load(str(tmp_path))
        assert cfg.private_key == "0xabc"
        assert cfg.chain_id == AMOY
        assert cfg.neg_risk is True

    def test_broken_file_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.delenv("POLY_CHAIN_ID", raising=False)
        (tmp_path / "config.json").write_text("{not json")
        assert Config.load(str(tmp_path)).chain_id == POLYGON

    def test_save_omits_private_key(self, tmp_path):
        Config(private_key="0xsecret", chain_id=AMOY).save(str(tmp_path))
        saved = json.loads((tmp_path / "config.json").read_text())
        assert "private_key" not in saved
        assert saved["chain_id"] == AMOY

    def test_update(self):
        cfg = Config()
        cfg.update({"chain_id": "80002", "neg_risk": "yes", "bogus": 1})
        assert cfg.chain_id == AMOY
        assert cfg.neg_risk is True
        assert not hasattr(cfg, "bogus")
