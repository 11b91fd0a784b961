"""
PadMap Editor - 二进制编解码器

文件布局: 每个按钮在固定偏移处有一个 4 字节 big-endian u32 字段，
字段值 = 该按钮触发的所有动作标志按位或。其余字节原样透传。

    decode(buffer)           → DecodeResult(config, diagnostics)
    encode(config, original) → 新 bytes（只改写映射字段）

注意: 解码时丢弃动作表之外的位，编码只写配置中的动作位，
所以原文件中的未映射位在重新编码后会被清零。解码时会为此发出
unmapped_bits 诊断，但不改变这一行为。
"""

import struct
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .constants import FIELD_SIZE, FIELD_FORMAT, U32_MASK
from .profiles import get_profile
from models.config_model import GamepadConfig

logger = logging.getLogger(__name__)

_FIELD = struct.Struct(FIELD_FORMAT)

# 诊断类型
DIAG_TRUNCATED = "truncated_field"
DIAG_UNMAPPED = "unmapped_bits"


class OffsetOutOfRangeError(ValueError):
    """偏移表引用了超出文件长度的字段 — 文件与设备方案不匹配"""

    def __init__(self, button, offset, length):
        self.button = button
        self.offset = offset
        self.length = length
        super().__init__(
            f"field for button {button!r} at offset {offset:#x} "
            f"does not fit in a {length}-byte buffer")


@dataclass(frozen=True)
class Diagnostic:
    """非致命的解码诊断"""
    kind: str           # truncated_field | unmapped_bits
    button: str
    offset: int
    value: int = 0      # unmapped_bits: 被丢弃的位

    def describe(self) -> str:
        if self.kind == DIAG_TRUNCATED:
            return (f"Buffer too short for button {self.button} "
                    f"at offset {self.offset:#x}. Skipping.")
        return (f"Button {self.button} at offset {self.offset:#x} has unmapped "
                f"bits {self.value:#010x}; they will be cleared on save.")


@dataclass
class DecodeResult:
    config: GamepadConfig
    diagnostics: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


# ─── 位运算原语 ──────────────────────────────────────────────

def has_flag(value: int, flag: int) -> bool:
    """标志位必须全部存在（不是任意位重叠）"""
    flag &= U32_MASK
    return (value & U32_MASK) & flag == flag


def combine_flags(flags) -> int:
    value = 0
    for flag in flags:
        value |= flag
    return value & U32_MASK


def unmapped_bits(value: int, action_flags: Mapping) -> int:
    """返回 value 中不属于任何动作标志的位"""
    return value & U32_MASK & ~combine_flags(action_flags.values())


def read_field(buffer, offset: int) -> int:
    return _FIELD.unpack_from(buffer, offset)[0]


def write_field(buffer: bytearray, offset: int, value: int):
    _FIELD.pack_into(buffer, offset, value & U32_MASK)


def _tables(button_offsets, action_flags):
    if button_offsets is None or action_flags is None:
        profile = get_profile()
        button_offsets = profile.button_offsets if button_offsets is None else button_offsets
        action_flags = profile.action_flags if action_flags is None else action_flags
    return button_offsets, action_flags


# ─── 解码 ────────────────────────────────────────────────────

def decode(buffer, button_offsets: Mapping = None, action_flags: Mapping = None) -> DecodeResult:
    """缓冲区 → 按钮映射。

    对任意长度都不会抛异常：字段越界的按钮记为空列表并产生诊断，
    其余按钮照常解码。不修改输入。
    """
    button_offsets, action_flags = _tables(button_offsets, action_flags)
    length = len(buffer)
    config = GamepadConfig()
    diagnostics = []

    for button, offset in button_offsets.items():
        if length < offset + FIELD_SIZE:
            diag = Diagnostic(DIAG_TRUNCATED, button, offset)
            logger.warning(diag.describe())
            diagnostics.append(diag)
            config.mappings[button] = []
            continue

        value = read_field(buffer, offset)
        config.mappings[button] = [
            action for action, flag in action_flags.items()
            if has_flag(value, flag)
        ]

        extra = unmapped_bits(value, action_flags)
        if extra:
            diag = Diagnostic(DIAG_UNMAPPED, button, offset, extra)
            logger.warning(diag.describe())
            diagnostics.append(diag)

    return DecodeResult(config, diagnostics)


# ─── 编码 ────────────────────────────────────────────────────

def encode(config, original, button_offsets: Mapping = None, action_flags: Mapping = None) -> bytes:
    """按钮映射 + 原始缓冲区 → 新缓冲区。

    在原始数据的副本上只改写配置中出现的按钮字段；未知按钮、
    未知动作静默跳过。原始缓冲区不会被修改，返回长度与其相同。

    Raises:
        OffsetOutOfRangeError: 字段超出文件长度（文件与方案不匹配）
    """
    button_offsets, action_flags = _tables(button_offsets, action_flags)
    mappings = config.mappings if isinstance(config, GamepadConfig) else config
    out = bytearray(original)

    for button, actions in mappings.items():
        offset = button_offsets.get(button)
        if offset is None:
            logger.debug(f"Unknown button {button!r} skipped")
            continue

        flags = []
        if isinstance(actions, (list, tuple)):
            for action in actions:
                flag = action_flags.get(action)
                if flag is None:
                    logger.debug(f"Unknown action {action!r} on {button} skipped")
                    continue
                flags.append(flag)

        if offset + FIELD_SIZE > len(out):
            raise OffsetOutOfRangeError(button, offset, len(out))
        write_field(out, offset, combine_flags(flags))

    return bytes(out)
