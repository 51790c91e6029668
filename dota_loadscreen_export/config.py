"""Configuration and logging setup for the loading screen exporter."""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from tqdm import tqdm
from .constants import IMAGE_SIZE, DEFAULT_DECODER

log = logging.getLogger(__name__)


class TqdmLoggingHandler(logging.StreamHandler):
    """Logging handler that uses tqdm.write() to avoid breaking progress bars."""
    
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False):
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='[%(levelname).1s] %(message)s' if verbose else '%(message)s',
        handlers=[TqdmLoggingHandler()],
        force=True,
    )


@dataclass
class Config:
    """Global configuration."""
    verbose: bool = False
    dota_dir: Path = field(default_factory=lambda: Path("."))
    output_dir: Path = field(default_factory=lambda: Path("."))
    jobs: int = field(default_factory=lambda: os.cpu_count() or 4)
    image_format: str = "jpeg"
    image_size: tuple[int, int] = IMAGE_SIZE
    texture_decoder: str = DEFAULT_DECODER  # Command template with {input} and {output}


# Global config instance
_config = Config()


def get_config() -> Config:
    """Get global config instance."""
    return _config
