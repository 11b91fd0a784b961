"""
PadMap Editor (PyQt6) - Entry Point
"""

import sys
import os
import logging

# 确保工作目录为脚本/EXE 所在目录（无论从哪里启动）
if getattr(sys, 'frozen', False):
    os.chdir(os.path.dirname(sys.executable))
else:
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

from core.constants import LOG_FILE, APP_VERSION

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE,
    filemode='w'
)
logger = logging.getLogger(__name__)

# ═══ i18n 初始化（必须在所有 UI 模块导入之前） ═══
from core.i18n import load_locale, t
from core.config_manager import load_settings

_settings = load_settings()
load_locale(_settings["language"])

from PyQt6.QtWidgets import QApplication
from views.editor_window import EditorWindow


def main():
    try:
        app = QApplication(sys.argv)
        app.setApplicationName("PadMap Editor")
        app.setApplicationVersion(APP_VERSION)

        window = EditorWindow(_settings)
        window.show()

        sys.exit(app.exec())
    except Exception as e:
        logger.critical(f"Unhandled exception: {e}", exc_info=True)
        print(t("app.error_msg", error=str(e)))


if __name__ == "__main__":
    main()
