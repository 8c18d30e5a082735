"""CLI shim for running the codec directly from the repository checkout."""

from dams_codec.cli import main
from dams_codec.codec import (
    CodecConfig,
    decode,
    encode,
    load_codec_config,
    save_codec_config,
)

__all__ = [
    "CodecConfig",
    "decode",
    "encode",
    "load_codec_config",
    "main",
    "save_codec_config",
]


if __name__ == "__main__":
    main()
