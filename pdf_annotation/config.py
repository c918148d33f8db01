"""
Default configuration.

Values can be overridden from the environment, e.g.
``PDF_ANNOTATION_UNSELECTED_ALPHA=40`` or ``PDF_ANNOTATION_DOCUMENT__SAVETEXTRESULT=yes``.
"""

import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from .utils.env import load_cfg_from_env


def default_config() -> edict:
    cfg = edict()
    # "26" hex alpha is about 15% opacity
    cfg.unselected_alpha = "26"
    cfg.fallback_background = "#000000"
    cfg.id_length = 10
    cfg.document = edict()
    cfg.document.selectionenabled = "true"
    cfg.document.savetextresult = "no"
    return cfg


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Defaults with environment overrides applied."""
    if env is None:
        env = dict(os.environ)
    return load_cfg_from_env(default_config(), env)
