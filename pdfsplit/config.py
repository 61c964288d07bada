import logging
from typing import List, Optional

from omegaconf import DictConfig, OmegaConf

logger = logging.getLogger(__name__)

DEFAULTS = {
    "pdf_splitter": {
        "mode": "size",
        "max_chunk_size_mb": 10,
        # subtracted from the ceiling to leave room for PDF overhead
        "safety_margin_mb": 0.0,
        "out_dir": ".",
        "zip": False,
        "slugify_names": False,
    },
    "logging": {
        "level": "INFO",
    },
}


def load_config(path: Optional[str] = None, overrides: Optional[List[str]] = None) -> DictConfig:
    """Defaults, then an optional YAML file, then ``key=value`` overrides."""
    cfg = OmegaConf.create(DEFAULTS)
    if path:
        logger.info(f"Loading config from {path}")
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return cfg
