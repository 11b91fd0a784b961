"""
PadMap Editor (PyQt6) - button_card.py
单个物理按钮的动作卡片 — 每个动作一个复选框。
"""

from PyQt6.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QLabel, QCheckBox
from PyQt6.QtCore import pyqtSignal

from core.i18n import t, get_font, action_label
from core.constants import COLOR_CARD, COLOR_BORDER, COLOR_ACCENT, COLOR_TEXT, COLOR_WARN
from views.widgets import make_font


class ButtonCard(QFrame):
    """按钮卡片：标题 + 动作复选框列表

    勾选变化通过 action_toggled(button, action, checked) 发出，
    卡片本身不修改任何配置。
    """

    action_toggled = pyqtSignal(str, str, bool)

    def __init__(self, button, actions, checked=(), tested=True, parent=None):
        super().__init__(parent)
        self._button = button
        self._boxes = {}
        self.setObjectName("button_card")
        self.setStyleSheet(f"""
            QFrame#button_card {{
                background: {COLOR_CARD};
                border-radius: 8px;
                border: 1px solid {COLOR_BORDER};
            }}
            QCheckBox {{ color: {COLOR_TEXT}; background: transparent; spacing: 10px; }}
        """)
        fn = get_font()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title = QLabel(t("editor.button_card", name=button))
        title.setFont(make_font(fn, 17, bold=True))
        title.setStyleSheet(f"color: {COLOR_ACCENT}; background: transparent; border: none;")
        header.addWidget(title)
        header.addStretch()
        if not tested:
            badge = QLabel(t("editor.not_tested"))
            badge.setFont(make_font(fn, 12, bold=True))
            badge.setStyleSheet(f"""
                color: black; background: {COLOR_WARN};
                border: none; border-radius: 4px; padding: 2px 6px;
            """)
            header.addWidget(badge)
        layout.addLayout(header)

        checked = set(checked)
        for action in actions:
            box = QCheckBox(action_label(action))
            box.setFont(make_font(fn, 14))
            box.setChecked(action in checked)
            box.toggled.connect(lambda state, a=action: self.action_toggled.emit(self._button, a, state))
            layout.addWidget(box)
            self._boxes[action] = box
