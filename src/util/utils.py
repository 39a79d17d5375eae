"""
どこで: `util.utils`
何を: YAML 構成（`configs/default.yaml` + ルート `config.yaml`）の読み込みと、シーン既定値の取り出し。
なぜ: 起動時の既定値をコード外に置き、欠落や不正があっても起動を止めないため（フェイルソフト）。
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("failed to load %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _find_project_root(start: Path) -> Path:
    """プロジェクトルートを推定して返す。

    - `src/` 配下から呼ばれることを想定し、上位に `.git` や `pyproject.toml`、`configs/` がある
      もっとも近いディレクトリを返す。
    - 見つからない場合は `start.parent.parent` をフォールバックとして返す。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (
            (parent / ".git").exists()
            or (parent / "pyproject.toml").exists()
            or (parent / "configs").exists()
        ):
            return parent
    # 典型: <repo>/src/util/utils.py -> <repo>
    return cur.parent.parent


def load_config(project_root: Path | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す（フェイルソフト）。

    優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（ベースに上書き）

    - いずれも存在しない/不正な場合は空辞書を返す。
    - ネストした辞書のディープマージは行わず、トップレベルのみ上書き。
    """
    root = project_root if project_root is not None else _find_project_root(Path(__file__).parent)
    base: Dict[str, Any] = {}

    default_path = root / "configs" / "default.yaml"
    if default_path.exists():
        base.update(_safe_load_yaml(default_path))

    root_config_path = root / "config.yaml"
    if root_config_path.exists():
        base.update(_safe_load_yaml(root_config_path))

    return base


def scene_defaults(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """構成の `scene` セクションを `SceneState(**...)` に渡せる形で返す。

    未知のキーは捨てる。`params` は種別ごとの辞書 `object_params[object_type]` から取る。
    """
    cfg = load_config() if config is None else config
    scene = cfg.get("scene")
    if not isinstance(scene, dict):
        return {}
    out: Dict[str, Any] = {}
    for key in ("object_type", "dimension", "faces_visible", "slice_w"):
        if key in scene:
            out[key] = scene[key]
    per_type = cfg.get("object_params")
    object_type = out.get("object_type")
    if isinstance(per_type, dict) and isinstance(per_type.get(object_type), dict):
        out["params"] = dict(per_type[object_type])
    return out


def slice_animation_defaults(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """`animation.slice` セクションを `SliceAnimator(**...)` 向けの辞書で返す。"""
    cfg = load_config() if config is None else config
    animation = cfg.get("animation")
    section = animation.get("slice") if isinstance(animation, dict) else None
    if not isinstance(section, dict):
        return {}
    keys = ("value", "minimum", "maximum", "speed", "enabled")
    return {k: section[k] for k in keys if k in section}
