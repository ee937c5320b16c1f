"""設定檔載入與基本驗證."""

import json
from pathlib import Path
from typing import Any, Optional

from .duplicates import FigmaFile

CONFIG_FILE_NAME = "figmakeys.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "files", "variants", "excludeKeys", "excludeChildren", "keyFormat", "output"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "output": {"textsFile", "imagesDir", "tokensFile"},
}

_LIST_KEYS = ("variants", "excludeKeys", "excludeChildren")
_KNOWN_FILE_KEYS = {"name", "url", "pages"}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    for key in _LIST_KEYS:
        val = cfg.get(key)
        if val is not None and not isinstance(val, list):
            _warn(f"{key} 應為字串陣列，目前是 {type(val).__name__}")

    files = cfg.get("files", [])
    if not isinstance(files, list):
        _warn(f"files 應為陣列，目前是 {type(files).__name__}")
        return
    for i, entry in enumerate(files):
        if not isinstance(entry, dict):
            _warn(f"files[{i}] 應為物件")
            continue
        for key in ("name", "url"):
            if not entry.get(key):
                _warn(f"files[{i}] 缺少 '{key}'")
        for key in entry:
            if key not in _KNOWN_FILE_KEYS:
                _warn(f"files[{i}] 未知欄位 '{key}'")
        if not isinstance(entry.get("pages", []), list):
            _warn(f"files[{i}].pages 應為字串陣列")


def load_config(config_path: str = CONFIG_FILE_NAME) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def figma_file_from_config(cfg: dict, name: Optional[str]) -> Optional[FigmaFile]:
    """依名稱（不分大小寫）找出 files 中的 Figma 檔案設定。"""
    if not name:
        return None
    for entry in cfg.get("files", []) or []:
        if isinstance(entry, dict) and str(entry.get("name", "")).lower() == name.lower():
            return FigmaFile(name=entry["name"], url=entry.get("url", ""), pages=list(entry.get("pages", [])))
    return None
