"""Tests for contractwiz.utils -- naming, file I/O and console helpers."""

from __future__ import annotations

import json

import pytest

from contractwiz.utils import (
    console,
    contract_filename,
    load_mapping,
    print_error,
    print_summary_table,
)

pytestmark = pytest.mark.unit


class TestContractFilename:
    @pytest.mark.parametrize("name, expected", [
        ("MyToken", "MyToken.sol"),
        ("My Token!", "My_Token_.sol"),
        ("  Alpha  ", "Alpha.sol"),
        ("", "Contract.sol"),
        ("Token$1", "Token$1.sol"),
    ])
    def test_names(self, name, expected):
        assert contract_filename(name) == expected

    def test_suffix(self):
        assert contract_filename("Alpha", ".json") == "Alpha.json"


class TestLoadMapping:
    def test_yaml(self, tmp_path):
        path = tmp_path / "token.yaml"
        path.write_text("family: ERC20\nname: Pay\ndecimals: 6\n", encoding="utf-8")
        assert load_mapping(path) == {"family": "ERC20", "name": "Pay", "decimals": 6}

    def test_json(self, tmp_path):
        path = tmp_path / "token.json"
        path.write_text(json.dumps({"type": "ERC1155"}), encoding="utf-8")
        assert load_mapping(path) == {"type": "ERC1155"}

    def test_empty_document(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_mapping(path) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_mapping(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_mapping(tmp_path / "nope.yaml")


def test_console_helpers_render():
    with console.capture() as capture:
        print_summary_table({"Ownable": "50,000"}, title="Gas Estimate")
        print_error("boom")
    output = capture.get()
    assert "Gas Estimate" in output
    assert "50,000" in output
    assert "boom" in output
