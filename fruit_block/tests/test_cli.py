"""
Tests for the fruitchain-inspect command.
"""

import io
import json
from fruit_serialize.hashing import hash_to_hex
from fruit_serialize.stream import SerType
from fruit_block.block import Block
from fruit_block.header import BlockHeader
from fruit_block.locator import BlockLocator
from fruit_block.cli import main

def test_header(capsys):
    header = BlockHeader(version=1, bits=1)
    assert main(["header", header.serialize().hex()]) == 0
    out = capsys.readouterr().out
    assert out.startswith("BlockHeader(hash=" + hash_to_hex(header.get_hash()))

def test_header_json(capsys):
    header = BlockHeader(version=1, bits=1, tax=5)
    assert main(["--json", "header", header.serialize().hex()]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["tax"] == 5
    assert data["hash"] == hash_to_hex(header.get_hash())

def test_block(capsys):
    block = Block(header=BlockHeader(version=1, bits=1), vfrt=[BlockHeader(version=1, bits=2)])
    block.update_fruits_hash()
    assert main(["block", block.serialize().hex()]) == 0
    out = capsys.readouterr().out
    assert "fruits hash valid: True" in out
    assert "weight: " in out

def test_block_json(capsys):
    block = Block(header=BlockHeader(version=1, bits=1), vfrt=[BlockHeader(version=1, bits=2)])
    assert main(["--json", "block", block.serialize().hex()]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["fruits_hash_valid"] is False
    assert data["weight"] == len(block.serialize()) * 4

def test_locator_modes(capsys):
    locator = BlockLocator([b"\x01" * 32])
    assert main(["locator", locator.serialize(SerType.NETWORK).hex()]) == 0
    assert "version: 70012" in capsys.readouterr().out

    assert main(["locator", "--hash-mode", locator.serialize(SerType.GETHASH).hex()]) == 0
    out = capsys.readouterr().out
    assert "version: None" in out
    assert hash_to_hex(locator.get_hash()) in out

def test_stdin(capsys, monkeypatch):
    header = BlockHeader(version=1, bits=1)
    monkeypatch.setattr("sys.stdin", io.StringIO(header.serialize().hex() + "\n"))
    assert main(["header", "-"]) == 0
    assert "BlockHeader(" in capsys.readouterr().out

def test_malformed(capsys):
    header = BlockHeader(version=1, bits=1)
    assert main(["header", header.serialize()[:-1].hex()]) == 1
    assert "malformed header encoding" in capsys.readouterr().err

def test_bad_hex(capsys):
    assert main(["header", "zz"]) == 1
    assert capsys.readouterr().err.startswith("error:")
