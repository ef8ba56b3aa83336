"""
Command-line inspection of encoded fruitchain structures.

    fruitchain-inspect [--json] header <hex>
    fruitchain-inspect [--json] block <hex>
    fruitchain-inspect [--json] locator <hex> [--hash-mode]

Pass ``-`` instead of the hex string to read it from stdin. The log level
comes from the FRUITCHAIN_LOG_LEVEL environment variable.
"""

from typing import List, Optional
import argparse
import json
import logging
import os
import sys
from fruit_serialize.errors import MalformedEncodingError
from fruit_serialize.hashing import hash_to_hex
from fruit_serialize.stream import SerType
from .block import Block
from .header import BlockHeader
from .locator import BlockLocator
from .weight import get_block_weight

logger = logging.getLogger(__name__)

def _read_hex(value: str) -> bytes:
    if value == "-":
        value = sys.stdin.read()
    return bytes.fromhex(value.strip())

def _inspect_header(data: bytes, as_json: bool) -> str:
    header = BlockHeader.from_bytes(data)
    if as_json:
        return json.dumps(header.to_dict(), indent=2)
    return header.describe().rstrip("\n")

def _inspect_block(data: bytes, as_json: bool) -> str:
    block = Block.from_bytes(data)
    weight = get_block_weight(block)
    if as_json:
        info = block.to_dict()
        info["fruits_hash_valid"] = block.fruits_digest() == block.fruits_hash
        info["weight"] = weight
        return json.dumps(info, indent=2)
    lines = [
        block.describe().rstrip("\n"),
        f"fruits digest: {hash_to_hex(block.fruits_digest())}",
        f"fruits hash valid: {block.has_valid_fruits_hash()}",
        f"weight: {weight}"
    ]
    return "\n".join(lines)

def _inspect_locator(data: bytes, hash_mode: bool, as_json: bool) -> str:
    ser_type = SerType.GETHASH if hash_mode else SerType.NETWORK
    locator = BlockLocator.from_bytes(data, ser_type)
    info = {
        "version": locator.version,
        "have": [hash_to_hex(h) for h in locator.have],
        "hash": hash_to_hex(locator.get_hash())
    }
    if as_json:
        return json.dumps(info, indent=2)
    lines = [f"version: {locator.version}", f"hash: {info['hash']}"]
    lines.extend(f"  {h}" for h in info["have"])
    return "\n".join(lines)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fruitchain-inspect",
        description="Decode and describe encoded fruitchain structures"
    )
    parser.add_argument("--json", action="store_true", help="emit JSON")
    sub = parser.add_subparsers(dest="kind", required=True)

    header = sub.add_parser("header", help="decode a block header")
    header.add_argument("hex", help="hex encoding, or - for stdin")

    block = sub.add_parser("block", help="decode a full block")
    block.add_argument("hex", help="hex encoding, or - for stdin")

    locator = sub.add_parser("locator", help="decode a block locator")
    locator.add_argument("hex", help="hex encoding, or - for stdin")
    locator.add_argument(
        "--hash-mode",
        action="store_true",
        help="input is the hashing encoding (no version field)"
    )
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, os.environ.get("FRUITCHAIN_LOG_LEVEL", "WARNING").upper(),
                      logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )
    args = build_parser().parse_args(argv)

    try:
        data = _read_hex(args.hex)
        if args.kind == "header":
            output = _inspect_header(data, args.json)
        elif args.kind == "block":
            output = _inspect_block(data, args.json)
        else:
            output = _inspect_locator(data, args.hash_mode, args.json)
    except MalformedEncodingError as e:
        logger.debug("Decode failed for %s", args.kind, exc_info=True)
        print(f"error: malformed {args.kind} encoding: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
