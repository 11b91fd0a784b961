"""
PadMap Editor - 编解码器测试

用法:
    python -m pytest tests/test_codec.py
"""

import sys
import os
import struct

import pytest

# 确保项目根目录在 sys.path 中
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.codec import (
    decode, encode, has_flag, combine_flags, unmapped_bits,
    OffsetOutOfRangeError, DIAG_TRUNCATED, DIAG_UNMAPPED,
)
from core.profiles import STANDARD, BUTTON_OFFSETS
from models.config_model import GamepadConfig

FILE_SIZE = 0xA4


def make_buffer(fields=None, size=FILE_SIZE):
    """构造测试文件：头部/空洞填充非零字节，按偏移写入字段值"""
    buf = bytearray((i * 7 + 3) & 0xFF for i in range(size))
    for offset in BUTTON_OFFSETS.values():
        if offset + 4 <= size:
            struct.pack_into(">I", buf, offset, 0)
    for offset, value in (fields or {}).items():
        struct.pack_into(">I", buf, offset, value)
    return bytes(buf)


def field_at(buf, offset):
    return struct.unpack_from(">I", buf, offset)[0]


# ─── 位运算原语 ──────────────────────────────────────────────

def test_has_flag_requires_every_bit():
    """标志位必须全部存在，部分重叠不算匹配"""
    assert has_flag(0x00300000, 0x00200000)
    assert not has_flag(0x00100000, 0x00300000)
    assert not has_flag(0, 0x00200000)


def test_bit31_is_unsigned():
    assert has_flag(0x80000000, 0x80000000)
    assert has_flag(-0x80000000, 0x80000000)  # 有符号表示同样按 u32 处理
    assert combine_flags([0x80000000, 0x40000000]) == 0xC0000000
    assert combine_flags([]) == 0


def test_unmapped_bits():
    assert unmapped_bits(0x00200001, STANDARD.action_flags) == 0x00000001
    assert unmapped_bits(0xFFFF0200, STANDARD.action_flags) == 0


# ─── 解码 ────────────────────────────────────────────────────

def test_example_scenario():
    """单按钮偏移表 + 两个动作：A → B"""
    offsets = {'A': 0x4C}
    actions = {'A': 0x00200000, 'B': 0x00100000}
    original = bytearray(0x50)
    original[0x4C:0x50] = b"\x00\x20\x00\x00"
    original = bytes(original)

    result = decode(original, offsets, actions)
    assert result.config.to_dict() == {'A': ['A']}

    result.config.remove_action('A', 'A')
    result.config.add_action('A', 'B')
    out = encode(result.config, original, offsets, actions)

    assert out[0x4C:0x50] == b"\x00\x10\x00\x00"
    assert out[:0x4C] == original[:0x4C]


def test_decode_keeps_table_order():
    buf = make_buffer({BUTTON_OFFSETS['A']: 0xFFFF0200})
    result = decode(buf)
    assert result.config.buttons() == list(BUTTON_OFFSETS)
    # 全部 17 个动作，按动作表声明顺序
    assert result.config.actions('A') == list(STANDARD.action_flags)
    assert result.ok


def test_decode_left_dpad_bit31():
    buf = make_buffer({BUTTON_OFFSETS['LB']: 0x80000000})
    assert decode(buf).config.actions('LB') == ['LEFT_DPAD']


def test_decode_unmapped_bits_flagged():
    """未映射位被丢弃，并产生诊断"""
    buf = make_buffer({BUTTON_OFFSETS['A']: 0x00200001})
    result = decode(buf)
    assert result.config.actions('A') == ['A']
    assert len(result.diagnostics) == 1
    diag = result.diagnostics[0]
    assert diag.kind == DIAG_UNMAPPED
    assert diag.button == 'A'
    assert diag.value == 0x00000001


def test_decode_truncated_buffer():
    """字段越界的按钮为空列表，其余照常解码"""
    buf = make_buffer({BUTTON_OFFSETS['A']: 0x00200000, BUTTON_OFFSETS['HOME']: 0x00000200}, size=0x84)
    result = decode(buf)

    assert result.config.actions('A') == ['A']
    assert result.config.actions('HOME') == ['HOME_BUTTON']
    truncated = [b for b, off in BUTTON_OFFSETS.items() if off + 4 > 0x84]
    for button in truncated:
        assert result.config.actions(button) == []
    assert [d.button for d in result.diagnostics] == truncated
    assert all(d.kind == DIAG_TRUNCATED for d in result.diagnostics)


def test_decode_empty_buffer():
    result = decode(b"")
    assert result.config.buttons() == list(BUTTON_OFFSETS)
    assert all(not result.config.actions(b) for b in BUTTON_OFFSETS)
    assert len(result.diagnostics) == len(BUTTON_OFFSETS)


def test_decode_accepts_memoryview_and_bytearray():
    buf = make_buffer({BUTTON_OFFSETS['X']: 0x10000000})
    assert decode(memoryview(buf)).config.actions('X') == ['X']
    assert decode(bytearray(buf)).config.actions('X') == ['X']


# ─── 编码 ────────────────────────────────────────────────────

def test_round_trip_identity():
    fields = {
        BUTTON_OFFSETS['A']: 0x00200000,
        BUTTON_OFFSETS['B']: 0x00100000 | 0x80000000,
        BUTTON_OFFSETS['HOME']: 0x00000200,
        BUTTON_OFFSETS['R4']: 0xFFFF0200,
    }
    buf = make_buffer(fields)
    assert encode(decode(buf).config, buf) == buf


def test_lossy_unmapped_bits_cleared():
    buf = make_buffer({BUTTON_OFFSETS['A']: 0x00200001})
    out = encode(decode(buf).config, buf)
    assert field_at(out, BUTTON_OFFSETS['A']) == 0x00200000


def test_encode_is_idempotent_and_keeps_source():
    source = bytearray(make_buffer({BUTTON_OFFSETS['Y']: 0x20000000}))
    snapshot = bytes(source)
    config = decode(source).config
    config.add_action('Y', 'MENU_BUTTON')

    first = encode(config, source)
    second = encode(config, source)

    assert first == second
    assert bytes(source) == snapshot
    assert isinstance(first, bytes)
    assert len(first) == len(source)


def test_flag_independence():
    """切换一个动作只改变该按钮的 4 字节"""
    buf = make_buffer({BUTTON_OFFSETS['RB']: 0x00080000})
    config = decode(buf).config
    config.set_action('RB', 'RT_TRIGGER', True)
    out = encode(config, buf)

    off = BUTTON_OFFSETS['RB']
    changed = [i for i in range(len(buf)) if buf[i] != out[i]]
    assert changed
    assert all(off <= i < off + 4 for i in changed)
    assert field_at(out, off) == 0x00080000 | 0x00800000


def test_encode_skips_unknown_button_and_action():
    buf = make_buffer()
    out = encode({'ZZ': ['A'], 'A': ['A', 'NOPE']}, buf)
    assert field_at(out, BUTTON_OFFSETS['A']) == 0x00200000
    changed = [i for i in range(len(buf)) if buf[i] != out[i]]
    assert all(BUTTON_OFFSETS['A'] <= i < BUTTON_OFFSETS['A'] + 4 for i in changed)


def test_encode_non_list_actions_clears_field():
    buf = make_buffer({BUTTON_OFFSETS['X']: 0x10000000})
    out = encode({'X': 'X'}, buf)
    assert field_at(out, BUTTON_OFFSETS['X']) == 0


def test_encode_only_touches_listed_buttons():
    buf = make_buffer({BUTTON_OFFSETS['A']: 0x00200001, BUTTON_OFFSETS['B']: 0x00100000})
    out = encode(GamepadConfig({'B': []}), buf)
    assert field_at(out, BUTTON_OFFSETS['A']) == 0x00200001
    assert field_at(out, BUTTON_OFFSETS['B']) == 0


def test_encode_offset_out_of_range():
    """偏移表超出文件长度 → 整个编码失败"""
    short = make_buffer(size=0xA2)
    with pytest.raises(OffsetOutOfRangeError) as exc_info:
        encode({'R4': []}, short)
    assert exc_info.value.button == 'R4'
    assert exc_info.value.offset == 0xA0
    assert exc_info.value.length == 0xA2
    assert isinstance(exc_info.value, ValueError)
