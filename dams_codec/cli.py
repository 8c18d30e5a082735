import argparse
import logging
import os
import sys
from typing import List, Optional

from .codec import (
    CodecConfig,
    decode,
    encode,
    load_codec_config,
    save_codec_config,
)
from .lexer import tokenize


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_text(path: str, text: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DAMS text transliteration codec")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", help="Log skipped chunks to stderr"
    )

    enc = subparsers.add_parser("encode", parents=[common])
    enc.add_argument("--input-text", required=True)
    enc.add_argument("--output-code", required=True)

    dec = subparsers.add_parser("decode", parents=[common])
    dec.add_argument("--input-code", required=True)
    dec.add_argument("--output-text", required=True)
    dec.add_argument(
        "--config",
        help="Path to a codec config (loads existing values and writes updates)",
    )
    dec.add_argument(
        "--accent-aware",
        action="store_true",
        default=None,
        help="Recover accented letters from their accent digit",
    )
    dec.add_argument(
        "--keep-literals",
        action="store_true",
        default=None,
        help="Copy characters the encoder passed through back into the output",
    )
    dec.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on unrecognized chunks instead of skipping them",
    )

    ins = subparsers.add_parser("inspect", parents=[common])
    ins.add_argument("--input-code", required=True)
    ins.add_argument("--output", default="-")

    return parser


def _resolve_config(args) -> CodecConfig:
    if args.config and os.path.exists(args.config):
        config = load_codec_config(args.config)
    else:
        config = CodecConfig()
    if args.accent_aware is not None:
        config.accent_aware = args.accent_aware
    if args.keep_literals is not None:
        config.keep_literals = args.keep_literals
    if args.strict is not None:
        config.strict = args.strict
    return config


def run_encode(args) -> None:
    text = _read_text(args.input_text).rstrip("\r\n")
    _write_text(args.output_code, encode(text) + "\n")


def run_decode(args) -> None:
    config = _resolve_config(args)
    code = _read_text(args.input_code).rstrip("\r\n")
    text = decode(code, config)
    if args.config:
        save_codec_config(config, args.config)
    _write_text(args.output_text, text + "\n")


def run_inspect(args) -> None:
    code = _read_text(args.input_code).rstrip("\r\n")
    lines = [f"{token.kind.name}\t{token.text}" for token in tokenize(code)]
    _write_text(args.output, "".join(line + "\n" for line in lines))


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.command == "encode":
            run_encode(args)
        elif args.command == "decode":
            run_decode(args)
        elif args.command == "inspect":
            run_inspect(args)
        else:
            parser.error("Unknown command")
    except ValueError as exc:
        parser.error(str(exc))


__all__ = ["build_arg_parser", "run_encode", "run_decode", "run_inspect", "main"]
