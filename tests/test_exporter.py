"""Tests for contractwiz.exporter -- writing the contract bundle."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from contractwiz.exporter import ContractExporter, ContractExportError
from contractwiz.generator import generate_contract

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


async def test_writes_all_files(tmp_path, make_config):
    config = make_config(name="Alpha", symbol="ALP", max_supply=100)
    result = await ContractExporter().export(config, tmp_path)

    assert result.contract_path == tmp_path / "Alpha.sol"
    assert [p.name for p in result.all_paths()] == [
        "Alpha.sol", "README.md", "gas-estimate.json", "contract-config.json",
    ]
    for path in result.all_paths():
        assert path.exists()

    assert result.contract_path.read_text(encoding="utf-8") == generate_contract(config)


async def test_gas_and_config_json(tmp_path, make_config):
    config = make_config("ERC20", name="Pay", decimals=6)
    result = await ContractExporter().export(config, tmp_path)

    gas = json.loads(result.gas_path.read_text(encoding="utf-8"))
    assert gas["estimated_gas"] == result.estimate.estimated_gas
    assert gas["breakdown"][0]["item"] == "ERC20 Base Deployment"

    saved = json.loads(result.config_path.read_text(encoding="utf-8"))
    assert saved["family"] == "ERC20"
    assert saved["decimals"] == 6


async def test_defaults_to_settings_output_dir(custom_settings, make_config):
    result = await ContractExporter(custom_settings).export(make_config())
    assert result.contract_path.parent == custom_settings.output_dir
    assert "Arc Devnet" in result.readme_path.read_text(encoding="utf-8")


async def test_creates_nested_directories(tmp_path, make_config):
    out = tmp_path / "a" / "b"
    result = await ContractExporter().export(make_config(), out)
    assert result.readme_path == out / "README.md"
    assert result.readme_path.exists()


async def test_write_failure_raises_export_error(tmp_path, make_config):
    with patch("contractwiz.exporter.write_text", side_effect=PermissionError("denied")):
        with pytest.raises(ContractExportError) as excinfo:
            await ContractExporter().export(make_config(), tmp_path)
    assert isinstance(excinfo.value.path, Path)
    assert "denied" in str(excinfo.value)
