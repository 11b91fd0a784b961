"""
PadMap Editor - 全局常量与默认值
"""

import os
import sys
from core.i18n import t

# === 应用根目录（frozen 兼容） ===
# 开发时: 项目根
# 打包后: EXE 所在目录
if getattr(sys, 'frozen', False):
    APP_DIR = os.path.dirname(sys.executable)
else:
    APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# === 应用信息 ===
APP_VERSION = "0.1.0"
SETTINGS_FILE = "settings/editor.json"
LOG_FILE = "padmap.log"

def get_app_title():
    """返回本地化的应用标题。"""
    return t("app.title")

# === 二进制格式 ===
FIELD_SIZE = 4                  # 每个按钮字段: 4 字节, big-endian u32
FIELD_FORMAT = ">I"
U32_MASK = 0xFFFFFFFF

# === 文件 ===
DEFAULT_FILE_NAME = "gamepad_config.bin"
OPEN_FILE_FILTER = "Gamepad config (*.ini);;All files (*)"

# === 默认设置 ===
DEFAULT_LANGUAGE = "zh-CN"
SETTINGS_KEYS = ("language", "profile", "last_dir")

# === 窗口 ===
WINDOW_MIN_WIDTH = 960
WINDOW_MIN_HEIGHT = 720
CARD_COLUMNS = 3

# === 配色 ===
COLOR_BG = "#1F2430"
COLOR_PANEL = "#2D2D2D"
COLOR_CARD = "#242424"
COLOR_BORDER = "#444444"
COLOR_TEXT = "#EEEEEE"
COLOR_MUTED = "#999999"
COLOR_ACCENT = "#A78BFA"       # 标题/按钮名：紫
COLOR_ACCENT_H = "#8B5CF6"
COLOR_OK_BG = "#15803D"        # 成功提示：绿
COLOR_OK_TEXT = "#DCFCE7"
COLOR_ERR_BG = "#B91C1C"       # 错误提示：红
COLOR_ERR_TEXT = "#FEE2E2"
COLOR_SAVE = "#16A34A"
COLOR_SAVE_H = "#15803D"
COLOR_DISABLED = "#6B7280"
COLOR_WARN = "#F59E0B"         # "未测试" 标记：琥珀
