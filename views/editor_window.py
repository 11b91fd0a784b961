"""
PadMap Editor (PyQt6) - editor_window.py
主窗口 — 加载配置文件、勾选按键映射、保存修改后的文件。

布局（自上而下）:
    标题栏: 标题 + 设备方案下拉框 + 语言切换
    1. 上传: 选择文件
    提示条: 成功/错误信息 + 解码诊断
    2. 编辑: 每个按钮一张卡片（加载后显示）
    3. 导出: 文件名 + 保存按钮（加载后显示）
"""

import os
import logging

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QComboBox, QLineEdit, QScrollArea,
    QFileDialog, QMessageBox, QApplication,
)
from PyQt6.QtCore import Qt

from core.i18n import t, get_font, get_lang, load_locale, AVAILABLE_LANGUAGES
from core.constants import (
    APP_VERSION, get_app_title, OPEN_FILE_FILTER, DEFAULT_FILE_NAME,
    WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT, CARD_COLUMNS,
    COLOR_BG, COLOR_TEXT, COLOR_MUTED, COLOR_ACCENT, COLOR_ACCENT_H,
    COLOR_SAVE, COLOR_SAVE_H, COLOR_DISABLED, COLOR_BORDER,
)
from core.config_manager import save_settings
from core.profiles import list_profiles
from core.codec import OffsetOutOfRangeError
from core.session import EditorSession
from views.widgets import make_font, SectionPanel, MessageBanner
from views.button_card import ButtonCard

logger = logging.getLogger(__name__)

_LANG_NAMES = {"zh-CN": "中文", "en": "English", "ko": "한국어"}

# 这些提示后附带解码诊断
_DIAG_MESSAGES = ("message.loaded", "message.profile_switched")


def _button_style(bg, bg_h, fg="white"):
    return f"""
        QPushButton {{
            background: {bg}; color: {fg};
            border: none; border-radius: 6px;
            padding: 8px 20px;
        }}
        QPushButton:hover {{ background: {bg_h}; }}
        QPushButton:disabled {{ background: {COLOR_DISABLED}; color: #DDD; }}
    """


class EditorWindow(QMainWindow):
    """手柄配置编辑器主窗口"""

    def __init__(self, settings: dict, parent=None):
        super().__init__(parent)
        self._settings = dict(settings)
        self._session = EditorSession(self._settings["profile"])
        self._message = None     # (msg_id, kwargs, is_error)

        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)
        self.setStyleSheet(f"QMainWindow {{ background: {COLOR_BG}; }}")
        self._build_ui()

    @property
    def session(self):
        return self._session

    # ── 构建界面 ──

    def _build_ui(self):
        """按当前会话状态整体重建（加载文件 / 切换方案 / 切换语言后调用）"""
        self.setWindowTitle(f"{get_app_title()} v{APP_VERSION}")
        fn = get_font()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setStyleSheet(f"QScrollArea {{ background: {COLOR_BG}; border: none; }}")

        root = QWidget()
        root.setStyleSheet(f"background: {COLOR_BG};")
        layout = QVBoxLayout(root)
        layout.setContentsMargins(28, 24, 28, 24)
        layout.setSpacing(18)

        layout.addLayout(self._build_header(fn))
        layout.addWidget(self._build_upload(fn))

        self._banner = MessageBanner()
        layout.addWidget(self._banner)

        if self._session.is_loaded:
            layout.addWidget(self._build_editor())
            layout.addWidget(self._build_export(fn))

        layout.addStretch()
        scroll.setWidget(root)
        self.setCentralWidget(scroll)
        self._render_message()

    def _build_header(self, fn):
        header = QHBoxLayout()

        title = QLabel(f"🎮  {get_app_title()}")
        title.setFont(make_font(fn, 30, bold=True))
        title.setStyleSheet(f"color: {COLOR_ACCENT};")
        header.addWidget(title)
        header.addStretch()

        prof_lbl = QLabel(t("header.profile"))
        prof_lbl.setFont(make_font(fn, 14))
        prof_lbl.setStyleSheet(f"color: {COLOR_MUTED};")
        header.addWidget(prof_lbl)

        self._profile_combo = QComboBox()
        self._profile_combo.setFont(make_font(fn, 14))
        self._profile_combo.setStyleSheet(f"""
            QComboBox {{
                background: #3A3A3A; color: {COLOR_TEXT};
                border: 1px solid {COLOR_BORDER}; border-radius: 6px;
                padding: 4px 10px;
            }}
        """)
        for name in list_profiles():
            self._profile_combo.addItem(t(f"profile.{name}"), name)
        self._profile_combo.setCurrentIndex(
            self._profile_combo.findData(self._session.profile.name))
        self._profile_combo.currentIndexChanged.connect(self._on_profile_changed)
        header.addWidget(self._profile_combo)
        header.addSpacing(16)

        lang_lbl = QLabel(t("header.language"))
        lang_lbl.setFont(make_font(fn, 14))
        lang_lbl.setStyleSheet(f"color: {COLOR_MUTED};")
        header.addWidget(lang_lbl)

        current = get_lang()
        for lang in AVAILABLE_LANGUAGES:
            btn = QPushButton(_LANG_NAMES.get(lang, lang))
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setFont(make_font(fn, 13, bold=lang == current))
            if lang == current:
                btn.setStyleSheet(_button_style(COLOR_ACCENT_H, COLOR_ACCENT_H))
            else:
                btn.setStyleSheet(_button_style("#404040", "#505050"))
            btn.clicked.connect(lambda _checked=False, l=lang: self._set_language(l))
            header.addWidget(btn)

        return header

    def _build_upload(self, fn):
        panel = SectionPanel(t("upload.title"))
        row = QHBoxLayout()

        open_btn = QPushButton(t("upload.open"))
        open_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        open_btn.setFont(make_font(fn, 14, bold=True))
        open_btn.setStyleSheet(_button_style(COLOR_ACCENT_H, COLOR_ACCENT))
        open_btn.clicked.connect(self._on_open)
        row.addWidget(open_btn)
        row.addStretch()
        panel.body.addLayout(row)

        if self._session.source_path:
            selected = QLabel(t("upload.selected", name=os.path.basename(self._session.source_path)))
            selected.setFont(make_font(fn, 13))
            selected.setStyleSheet(f"color: {COLOR_MUTED}; background: transparent; border: none;")
            panel.body.addWidget(selected)
        return panel

    def _build_editor(self):
        panel = SectionPanel(t("editor.title"))
        grid = QGridLayout()
        grid.setSpacing(14)

        profile = self._session.profile
        config = self._session.config
        for i, button in enumerate(profile.buttons):
            card = ButtonCard(
                button, profile.actions,
                checked=config.actions(button),
                tested=profile.is_tested(button),
            )
            card.action_toggled.connect(self._on_action_toggled)
            grid.addWidget(card, i // CARD_COLUMNS, i % CARD_COLUMNS)

        panel.body.addLayout(grid)
        return panel

    def _build_export(self, fn):
        panel = SectionPanel(t("export.title"))
        row = QHBoxLayout()

        self._name_edit = QLineEdit(self._session.file_name)
        self._name_edit.setPlaceholderText(t("export.placeholder"))
        self._name_edit.setFont(make_font(fn, 14))
        self._name_edit.setStyleSheet(f"""
            QLineEdit {{
                background: #111; color: {COLOR_TEXT};
                border: 1px solid {COLOR_BORDER}; border-radius: 6px;
                padding: 8px 12px;
            }}
        """)
        self._name_edit.textChanged.connect(self._on_file_name_changed)
        row.addWidget(self._name_edit, 1)

        self._save_btn = QPushButton(t("export.save"))
        self._save_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._save_btn.setFont(make_font(fn, 15, bold=True))
        self._save_btn.setStyleSheet(_button_style(COLOR_SAVE, COLOR_SAVE_H))
        self._save_btn.setEnabled(self._session.is_loaded)
        self._save_btn.clicked.connect(self._on_save)
        row.addWidget(self._save_btn)
        panel.body.addLayout(row)

        self._target_lbl = QLabel(t("export.target", name=self._session.file_name))
        self._target_lbl.setFont(make_font(fn, 13))
        self._target_lbl.setStyleSheet(f"color: {COLOR_MUTED}; background: transparent; border: none;")
        panel.body.addWidget(self._target_lbl)
        return panel

    # ── 提示条 ──

    def _set_message(self, msg_id, is_error=False, **kwargs):
        self._message = (msg_id, kwargs, is_error)
        self._render_message()

    def _render_message(self):
        if not self._message:
            self._banner.clear_message()
            return
        msg_id, kwargs, error = self._message
        lines = [t(msg_id, **kwargs)]
        if msg_id in _DIAG_MESSAGES:
            for diag in self._session.diagnostics:
                lines.append("• " + t(f"diag.{diag.kind}", button=diag.button,
                                       offset=f"{diag.offset:#x}", value=f"{diag.value:#010x}"))
        self._banner.show_message("\n".join(lines), error=error)

    # ── 事件处理 ──

    def _on_open(self):
        if not self._confirm_discard():
            return
        path, _ = QFileDialog.getOpenFileName(
            self, t("upload.dialog_title"), self._settings.get("last_dir", ""), OPEN_FILE_FILTER)
        if not path:
            self._set_message("message.select_file", is_error=not self._session.is_loaded)
            return
        try:
            self._session.load_file(path)
        except OSError as e:
            logger.error(f"File read failed: {path}: {e}")
            self._set_message("message.read_error", is_error=True, error=str(e))
            return

        self._settings["last_dir"] = os.path.dirname(path)
        save_settings(self._settings)
        self._message = ("message.loaded", {}, False)
        self._build_ui()

    def _on_action_toggled(self, button, action, checked):
        self._session.toggle_action(button, action, checked)

    def _on_file_name_changed(self, text):
        self._session.file_name = text.strip() or DEFAULT_FILE_NAME
        self._target_lbl.setText(t("export.target", name=self._session.file_name))

    def _on_save(self):
        if not self._session.is_loaded:
            self._set_message("message.load_first", is_error=True)
            return
        start = os.path.join(self._settings.get("last_dir", ""), self._session.file_name)
        path, _ = QFileDialog.getSaveFileName(self, t("export.dialog_title"), start, OPEN_FILE_FILTER)
        if not path:
            return

        self._save_btn.setEnabled(False)
        self._save_btn.setText(t("export.saving"))
        self._set_message("message.generating")
        QApplication.processEvents()
        try:
            written = self._session.export(path)
        except OffsetOutOfRangeError as e:
            logger.error(f"Encode failed: {e}")
            self._set_message("message.format_mismatch", is_error=True, error=str(e))
        except OSError as e:
            logger.error(f"File write failed: {path}: {e}")
            self._set_message("message.save_error", is_error=True, error=str(e))
        else:
            self._set_message("message.saved", name=os.path.basename(written))
        finally:
            self._save_btn.setText(t("export.save"))
            self._save_btn.setEnabled(True)

    def _on_profile_changed(self, index):
        name = self._profile_combo.itemData(index)
        if not name or name == self._session.profile.name:
            return
        if not self._confirm_discard():
            self._profile_combo.blockSignals(True)
            self._profile_combo.setCurrentIndex(
                self._profile_combo.findData(self._session.profile.name))
            self._profile_combo.blockSignals(False)
            return

        self._session.set_profile(name)
        self._settings["profile"] = name
        save_settings(self._settings)
        if self._session.is_loaded:
            self._message = ("message.profile_switched", {"name": t(f"profile.{name}")}, False)
        self._build_ui()

    def _set_language(self, lang):
        if lang == get_lang():
            return
        load_locale(lang)
        self._settings["language"] = get_lang()
        save_settings(self._settings)
        logger.info(f"Language changed to {lang}")
        self._build_ui()

    def _confirm_discard(self) -> bool:
        """有未保存修改时询问是否放弃"""
        if not self._session.is_dirty:
            return True
        answer = QMessageBox.question(
            self, t("confirm.discard_title"), t("confirm.discard_text"),
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def closeEvent(self, event):
        if self._confirm_discard():
            event.accept()
        else:
            event.ignore()
