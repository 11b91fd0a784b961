"""
PadMap Editor - 设置管理器

负责编辑器设置（界面语言、设备方案、上次打开目录）的加载与保存。
设置存储在 settings/editor.json。
"""

import json
import os
import copy
import logging

from .constants import SETTINGS_FILE, DEFAULT_LANGUAGE
from .i18n import AVAILABLE_LANGUAGES
from .profiles import DEFAULT_PROFILE_NAME, list_profiles

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "language": DEFAULT_LANGUAGE,
    "profile":  DEFAULT_PROFILE_NAME,
    "last_dir": "",
}


def _valid(key, value) -> bool:
    if key == "language":
        return value in AVAILABLE_LANGUAGES
    if key == "profile":
        return value in list_profiles()
    if key == "last_dir":
        return isinstance(value, str)
    return False


def load_settings(path: str = None) -> dict:
    """加载设置。不存在或无效的字段使用默认值。"""
    path = path or SETTINGS_FILE
    result = copy.deepcopy(DEFAULT_SETTINGS)
    if not os.path.exists(path):
        return result
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.error(f"设置文件格式无效: {path}")
            return result
        for k in DEFAULT_SETTINGS:
            if k in data:
                if _valid(k, data[k]):
                    result[k] = data[k]
                else:
                    logger.warning(f"设置项无效，使用默认值: {k}={data[k]!r}")
        logger.info(f"设置加载成功: {path}")
    except (OSError, ValueError) as e:
        logger.error(f"设置加载失败: {e}")
    return result


def save_settings(settings: dict, path: str = None) -> bool:
    """保存设置（合并写入，保留文件中的其他字段）。"""
    path = path or SETTINGS_FILE
    try:
        existing = {}
        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    existing = json.load(f)
            except (OSError, ValueError):
                existing = {}
            if not isinstance(existing, dict):
                existing = {}
        existing.update(settings)
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(existing, f, ensure_ascii=False, indent=2)
        logger.info(f"设置保存成功: {path}")
        return True
    except (OSError, TypeError) as e:
        logger.error(f"设置保存失败: {e}")
        return False
