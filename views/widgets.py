"""
PadMap Editor (PyQt6) - widgets.py
通用小部件：字体工具、分区面板、提示条。
"""

from PyQt6.QtWidgets import QFrame, QLabel, QVBoxLayout
from PyQt6.QtGui import QFont

from core.i18n import get_font
from core.constants import (
    COLOR_PANEL, COLOR_BORDER, COLOR_TEXT,
    COLOR_OK_BG, COLOR_OK_TEXT, COLOR_ERR_BG, COLOR_ERR_TEXT,
)


def make_font(name, pixel_size, bold=False):
    f = QFont(name)
    f.setPixelSize(pixel_size)
    if bold:
        f.setWeight(QFont.Weight.Bold)
    return f


class SectionPanel(QFrame):
    """带标题的分区面板（上传 / 编辑 / 导出）"""

    def __init__(self, title, parent=None):
        super().__init__(parent)
        self.setObjectName("section_panel")
        self.setStyleSheet(f"""
            QFrame#section_panel {{
                background: {COLOR_PANEL};
                border-radius: 8px;
                border: 1px solid {COLOR_BORDER};
            }}
        """)
        self.body = QVBoxLayout(self)
        self.body.setContentsMargins(20, 16, 20, 16)
        self.body.setSpacing(12)

        self._title = QLabel(title)
        self._title.setFont(make_font(get_font(), 20, bold=True))
        self._title.setStyleSheet(f"color: {COLOR_TEXT}; background: transparent; border: none;")
        self.body.addWidget(self._title)


class MessageBanner(QLabel):
    """成功（绿）/ 错误（红）提示条；空文本时隐藏"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWordWrap(True)
        self.setFont(make_font(get_font(), 15, bold=True))
        self.hide()

    def show_message(self, text, error=False):
        if not text:
            self.clear_message()
            return
        bg, fg = (COLOR_ERR_BG, COLOR_ERR_TEXT) if error else (COLOR_OK_BG, COLOR_OK_TEXT)
        self.setStyleSheet(f"""
            QLabel {{
                background: {bg}; color: {fg};
                padding: 12px 16px;
                border-radius: 8px;
            }}
        """)
        self.setText(text)
        self.show()

    def clear_message(self):
        self.setText("")
        self.hide()
