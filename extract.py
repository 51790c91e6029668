#!/usr/bin/env python3
"""
Dota 2 Loading Screen Exporter - Main Entry Point

Exports every loading screen registered in items_game.txt as an image, skipping
the ones already exported by a previous run.
"""
import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path

from dota_loadscreen_export import (
    setup_logging,
    get_config,
    Dota2Archive,
    TextureDecoder,
    ExportError,
    export_loading_screens,
)
from dota_loadscreen_export.constants import DEFAULT_DECODER, IMAGE_FORMATS

log = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for export.
    
    Args:
        argv: Optional list of command-line arguments. If None, uses sys.argv.
              Example: ['-d', 'C:\\Steam\\steamapps\\common\\dota 2 beta', 'output']
    """
    parser = ArgumentParser(prog="dota-loadscreen-export", description="Export Dota 2 loading screens.")
    parser.add_argument("-d", "--dota-path", type=Path, required=True,
        help="Path to the Dota 2 directory.")
    parser.add_argument("output", type=Path,
        help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true",
        help="Prints all messages to standard output.")
    parser.add_argument("-j", "--jobs", type=int, default=os.cpu_count() or 4,
        help="Number of concurrent exports (default: CPU count)")
    parser.add_argument("-f", "--format", type=str, default="jpeg", choices=sorted(IMAGE_FORMATS),
        help="Image format (default: jpeg)")
    parser.add_argument("--decoder", type=str, default=DEFAULT_DECODER,
        help="Texture decompiler command, with {input} and {output} placeholders")

    args = parser.parse_args(argv)

    # Configure global state
    config = get_config()
    config.verbose = args.verbose
    config.dota_dir = args.dota_path
    config.output_dir = args.output
    config.jobs = args.jobs
    config.image_format = args.format
    config.texture_decoder = args.decoder

    # Setup logging
    setup_logging(config.verbose)

    try:
        archive = Dota2Archive(config.dota_dir)
        decoder = TextureDecoder(archive, config.texture_decoder, config.image_size)
        result = export_loading_screens(archive, decoder, config)
    except (ExportError, OSError) as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1

    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
