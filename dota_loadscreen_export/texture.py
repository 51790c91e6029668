"""Texture decoding through an external Source 2 resource decompiler."""
import logging
import posixpath
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image

from .reconcile import AssetEntry

log = logging.getLogger(__name__)


class TextureDecodeError(RuntimeError):
    """The decompiler failed or produced no image."""


class TextureDecoder:
    """Decode compiled textures (vtex_c) into Pillow images.

    The decompiler is run as ``command``, a template with ``{input}`` (the
    compiled texture written to a temp file) and ``{output}`` (a directory it
    writes the decoded PNG into).
    """

    def __init__(self, archive, command: str, size: Optional[tuple[int, int]] = None):
        self.archive = archive
        self.command = command
        self.size = size

    def decode(self, entry: AssetEntry) -> Image.Image:
        data = self.archive.read_entry(entry.full_path)
        with tempfile.TemporaryDirectory() as tmp:
            tmp_dir = Path(tmp)
            input_path = tmp_dir / posixpath.basename(entry.full_path)
            input_path.write_bytes(data)
            output_dir = tmp_dir / "decoded"
            output_dir.mkdir()

            cmd = self.command.format(input=str(input_path), output=str(output_dir))
            log.debug(f"Texture decoder command: {cmd}")
            result = subprocess.run(cmd, shell=True, capture_output=True, text=True)
            if result.returncode != 0:
                raise TextureDecodeError(
                    f"Decoder exited with code {result.returncode} for {entry.full_path}: {result.stderr.strip()}")

            outputs = sorted(output_dir.rglob("*.png"))
            if not outputs:
                raise TextureDecodeError(f"Decoder produced no image for {entry.full_path}")
            with Image.open(outputs[0]) as img:
                img.load()
                return img.copy()

    def decode_and_resize(self, entry: AssetEntry) -> Image.Image:
        """Decode the entry's texture, resized to ``size`` when set."""
        image = self.decode(entry)
        if self.size and image.size != self.size:
            log.debug(f"RESIZE {entry.full_path}: {image.size} -> {self.size}")
            image = image.resize(self.size, Image.LANCZOS)
        return image
