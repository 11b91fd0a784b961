"""
PadMap Editor i18n 翻译引擎

用法:
    from core.i18n import t, load_locale, get_lang
    load_locale("en")                  # 启动时调用一次
    t("upload.title")                  # → "1. Load config file"
    t("message.saved", name="a.bin")   # → "Saved a.bin"
"""

import json
import os
import sys
import logging

logger = logging.getLogger(__name__)

_strings = {}       # 扁平化的翻译字典 {"message.saved": "Saved {name}", ...}
_current_lang = "en"

# 语言切换按钮顺序
AVAILABLE_LANGUAGES = ("zh-CN", "en", "ko")

# APP_DIR: 与 constants.py 保持一致
if getattr(sys, 'frozen', False):
    _APP_DIR = os.path.dirname(sys.executable)
else:
    _APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_LOCALES_DIR = os.path.join(_APP_DIR, "locales")


def _flatten(d, prefix=""):
    """将嵌套 dict 扁平化为 "a.b.c" 格式。"""
    items = {}
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            items.update(_flatten(v, new_key))
        else:
            items[new_key] = v
    return items


def load_locale(lang="en", locales_dir=None):
    """加载语言包 JSON。

    Args:
        lang: 语言代码，如 "en"、"zh-CN"、"ko"
        locales_dir: 语言包目录，默认 APP_DIR/locales
    """
    global _strings, _current_lang
    base = locales_dir or _LOCALES_DIR
    locale_path = os.path.join(base, f"{lang}.json")

    if not os.path.exists(locale_path):
        logger.warning(f"Locale file not found: {locale_path}, falling back to en")
        lang = "en"
        locale_path = os.path.join(base, "en.json")

    _current_lang = lang
    try:
        with open(locale_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        _strings = _flatten(raw)
        logger.info(f"Locale loaded: {lang} ({len(_strings)} keys)")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load locale {lang}: {e}")
        _strings = {}


def t(msg_id, **kwargs):
    """翻译函数。

    用法:
        t("message.saved", name="a.bin") → "Saved a.bin"
        缺失 key 返回 key 本身（不会崩溃）
    """
    text = _strings.get(msg_id, msg_id)
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            pass
    return text


def action_label(action):
    """动作显示名：下划线替换为空格（LB_BUTTON → "LB BUTTON"）。"""
    return action.replace("_", " ")


def get_lang():
    """返回当前语言代码。"""
    return _current_lang


def get_font():
    """根据当前语言返回合适的 UI 字体名。"""
    if _current_lang.startswith("zh"):
        return "Microsoft YaHei UI"
    if _current_lang.startswith("ko"):
        return "Malgun Gothic"
    return "Segoe UI"
