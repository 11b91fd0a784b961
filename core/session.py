"""
PadMap Editor - 编辑会话

负责 "加载 → 编辑 → 导出" 的顺序：持有原始字节（只读）、
当前按钮映射与设备方案。文件读写在这里完成，编解码器本身不做 I/O。
"""

import os
import logging

from .constants import DEFAULT_FILE_NAME
from .profiles import get_profile, DEFAULT_PROFILE_NAME
from .codec import decode, encode

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """尚未加载文件就尝试编辑/导出"""


class EditorSession:
    """单个文件的编辑会话"""

    def __init__(self, profile_name: str = DEFAULT_PROFILE_NAME):
        self._profile = get_profile(profile_name)
        self._original = None      # bytes, 加载后不可变
        self._config = None
        self._diagnostics = []
        self._dirty = False
        self.file_name = DEFAULT_FILE_NAME
        self.source_path = None

    # ── 状态 ──

    @property
    def profile(self):
        return self._profile

    @property
    def original(self):
        return self._original

    @property
    def config(self):
        return self._config

    @property
    def diagnostics(self) -> list:
        return list(self._diagnostics)

    @property
    def is_loaded(self) -> bool:
        return self._original is not None

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # ── 加载 ──

    def load_bytes(self, data, file_name: str = None):
        """从内存加载。返回 DecodeResult。"""
        self._original = bytes(data)
        if file_name:
            self.file_name = file_name
        return self._decode()

    def load_file(self, path: str):
        """从文件加载。读取失败时 OSError 原样抛出。"""
        with open(path, 'rb') as f:
            data = f.read()
        self.source_path = path
        result = self.load_bytes(data, os.path.basename(path))
        logger.info(f"Loaded {path} ({len(data)} bytes, profile={self._profile.name})")
        return result

    def _decode(self):
        result = decode(self._original, self._profile.button_offsets, self._profile.action_flags)
        self._config = result.config
        self._diagnostics = result.diagnostics
        self._dirty = False
        return result

    def set_profile(self, name: str):
        """切换设备方案；已加载的文件按新方案重新解码（丢弃未保存的修改）。"""
        self._profile = get_profile(name)
        logger.info(f"Profile switched to {name}")
        if self.is_loaded:
            return self._decode()
        return None

    def revert(self):
        """丢弃修改，重新解码原始数据"""
        self._require_loaded()
        return self._decode()

    # ── 编辑 ──

    def toggle_action(self, button: str, action: str, checked: bool) -> bool:
        self._require_loaded()
        changed = self._config.set_action(button, action, checked)
        if changed:
            self._dirty = True
        return changed

    # ── 导出 ──

    def build_output(self) -> bytes:
        """把当前映射合并到原始数据的副本上"""
        self._require_loaded()
        return encode(self._config, self._original,
                      self._profile.button_offsets, self._profile.action_flags)

    def export(self, path: str = None) -> str:
        """写出编码结果。写入失败时 OSError 原样抛出。返回写入路径。"""
        data = self.build_output()
        path = path or self.file_name or DEFAULT_FILE_NAME
        with open(path, 'wb') as f:
            f.write(data)
        self._dirty = False
        logger.info(f"Exported {path} ({len(data)} bytes)")
        return path

    def _require_loaded(self):
        if not self.is_loaded:
            raise SessionStateError("no configuration file loaded")
