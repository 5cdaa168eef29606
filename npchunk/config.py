# np_chunker/npchunk/config.py
"""Manages the loading of the chunker configuration.

This module defines the `Config` dataclass, which holds every setting the
annotator understands, and the `load_config` function, which reads those
settings from a YAML file. Keys missing from the file fall back to the
defaults below, and relative resource paths are resolved against the
directory the configuration file lives in.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_PATHS = {
    "rules": "resources/rules",
    "pos_tag_dict": "resources/pos_tag_dict",
}


def _default_paths() -> dict[str, str]:
    return dict(DEFAULT_PATHS)


@dataclass
class Config:
    """
    A typed configuration object that holds all settings for the NP chunker.

    Attributes:
        pos_feature: The name of the token feature that holds the POS tag.
        unknown_tag: The initial chunk tag used for POS tags that are missing
                     from the POS tag dictionary.
        annotation_name: The type of the annotations added to mark noun chunks.
        input_as_name: The annotation set to read sentences and tokens from.
                       None selects the document's default set.
        output_as_name: The annotation set noun chunks are written to. None
                        selects the document's default set.
        fail_on_missing_input_annotations: When true, a document without
                        sentence annotations is an error. When false it is
                        skipped silently.
        show_progress: Displays a per-sentence progress bar while annotating.
        paths: Locations of the rule file (``rules``) and the POS tag
               dictionary (``pos_tag_dict``).
    """
    pos_feature: str = "category"
    unknown_tag: str = "I"
    annotation_name: str = "NounChunk"
    input_as_name: Optional[str] = None
    output_as_name: Optional[str] = None
    fail_on_missing_input_annotations: bool = True
    show_progress: bool = False
    paths: dict[str, str] = field(default_factory=_default_paths)


def _as_set_name(value) -> Optional[str]:
    # An empty name means the default annotation set.
    if value is None or value == "":
        return None
    return str(value)


def _as_flag(value, default: bool) -> bool:
    # A key left empty in YAML loads as None and keeps the default.
    if value is None:
        return default
    return bool(value)


def _resolve_path(config_dir: Path, value) -> str:
    # Empty entries stay empty so the annotator can report them as unset.
    if value is None or str(value).strip() == "":
        return ""
    p = Path(value)
    return str(p if p.is_absolute() else config_dir / p)


def load_config(path: str = "config.yaml") -> Config:
    """
    Loads a YAML configuration file into a Config object.

    Relative entries under ``paths`` are resolved against the directory of the
    configuration file, so a config can ship next to its resources.

    Args:
        path: The path to the YAML configuration file.

    Returns:
        A fully populated `Config` object.

    Raises:
        FileNotFoundError: If the specified configuration file cannot be found.
        ValueError: If there is an error parsing the YAML file.
        TypeError: If the root of the YAML file is not a dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    config_dir = Path(path).parent
    paths = {**DEFAULT_PATHS, **dict(y.get("paths") or {})}
    paths = {key: _resolve_path(config_dir, p) for key, p in paths.items()}

    return Config(
        pos_feature=str(y.get("pos_feature", "category")),
        unknown_tag=str(y.get("unknown_tag", "I")),
        annotation_name=str(y.get("annotation_name", "NounChunk")),
        input_as_name=_as_set_name(y.get("input_as_name")),
        output_as_name=_as_set_name(y.get("output_as_name")),
        fail_on_missing_input_annotations=_as_flag(
            y.get("fail_on_missing_input_annotations"), True
        ),
        show_progress=_as_flag(y.get("show_progress"), False),
        paths=paths,
    )
