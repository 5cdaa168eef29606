from pathlib import Path

import pytest

from npchunk.config import Config, load_config


def test_load_config_reads_settings_and_resolves_paths(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
pos_feature: pos
unknown_tag: O
annotation_name: NP
input_as_name: Original markups
output_as_name: ""
fail_on_missing_input_annotations: false
show_progress: true
paths:
  rules: data/rules.txt
""".strip(),
        encoding="utf-8",
    )

    cfg = load_config(str(config_path))

    assert cfg.pos_feature == "pos"
    assert cfg.unknown_tag == "O"
    assert cfg.annotation_name == "NP"
    assert cfg.input_as_name == "Original markups"
    assert cfg.output_as_name is None
    assert cfg.fail_on_missing_input_annotations is False
    assert cfg.show_progress is True
    assert cfg.paths["rules"] == str(tmp_path / "data" / "rules.txt")
    assert cfg.paths["pos_tag_dict"] == str(tmp_path / "resources" / "pos_tag_dict")


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    cfg = load_config(str(config_path))
    defaults = Config()

    assert cfg.pos_feature == defaults.pos_feature == "category"
    assert cfg.unknown_tag == defaults.unknown_tag == "I"
    assert cfg.annotation_name == defaults.annotation_name == "NounChunk"
    assert cfg.input_as_name is None
    assert cfg.fail_on_missing_input_annotations is True
    assert cfg.show_progress is False


def test_load_config_keeps_absolute_paths(tmp_path: Path) -> None:
    rules = tmp_path / "elsewhere" / "rules"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"paths:\n  rules: '{rules}'\n", encoding="utf-8")

    cfg = load_config(str(config_path))

    assert cfg.paths["rules"] == str(rules)


def test_default_config_instances_do_not_share_paths() -> None:
    a, b = Config(), Config()
    a.paths["rules"] = "other"

    assert b.paths["rules"] == "resources/rules"


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_load_config_rejects_non_dict_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- not a mapping", encoding="utf-8")

    with pytest.raises(TypeError):
        load_config(str(config_path))


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths: [unclosed", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(config_path))


def test_bundled_config_points_at_bundled_resources() -> None:
    root = Path(__file__).resolve().parents[1]

    cfg = load_config(str(root / "config.yaml"))

    assert Path(cfg.paths["rules"]).is_file()
    assert Path(cfg.paths["pos_tag_dict"]).is_file()
    assert cfg.input_as_name is None


def test_load_config_leaves_empty_paths_unset(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  rules: ''\n  pos_tag_dict:\n", encoding="utf-8")

    cfg = load_config(str(config_path))

    assert cfg.paths["rules"] == ""
    assert cfg.paths["pos_tag_dict"] == ""


def test_empty_rules_path_is_reported_as_unset(tmp_path: Path) -> None:
    from npchunk.annotator import NounPhraseChunker

    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  rules: ''\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Rules path must be specified"):
        NounPhraseChunker(load_config(str(config_path)))


def test_load_config_null_flags_keep_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "fail_on_missing_input_annotations:\nshow_progress: null\n", encoding="utf-8"
    )

    cfg = load_config(str(config_path))

    assert cfg.fail_on_missing_input_annotations is True
    assert cfg.show_progress is False
