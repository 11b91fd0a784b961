"""
PadMap Editor - 设备方案表测试

用法:
    python -m pytest tests/test_profiles.py
"""

import sys
import os

import pytest

# 确保项目根目录在 sys.path 中
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.profiles import (
    get_profile, list_profiles, UnknownProfileError,
    STANDARD, HOME_UNTESTED, DEFAULT_PROFILE_NAME, BUTTON_OFFSETS,
)


def test_offsets_are_fixed_constants():
    assert BUTTON_OFFSETS['A'] == 0x4C
    assert BUTTON_OFFSETS['MENU'] == 0x78
    assert BUTTON_OFFSETS['HOME'] == 0x80
    assert BUTTON_OFFSETS['R4'] == 0xA0
    assert 0x7C not in BUTTON_OFFSETS.values()
    assert STANDARD.min_size == 0xA4


def test_fields_do_not_overlap():
    offsets = sorted(BUTTON_OFFSETS.values())
    assert all(b - a >= 4 for a, b in zip(offsets, offsets[1:]))


def test_action_flags_are_distinct_single_bits():
    for profile in (STANDARD, HOME_UNTESTED):
        values = list(profile.action_flags.values())
        assert len(set(values)) == len(values)
        assert all(v and v & (v - 1) == 0 and v <= 0xFFFFFFFF for v in values)
    assert STANDARD.action_flags['LEFT_DPAD'] == 0x80000000


def test_declaration_order():
    assert STANDARD.buttons[:4] == ('A', 'B', 'X', 'Y')
    assert STANDARD.actions[:4] == ('Y', 'X', 'A', 'B')
    assert STANDARD.actions[-1] == 'HOME_BUTTON'


def test_home_variant():
    """HOME 未测试方案：偏移相同，HOME 动作键大小写不同"""
    assert HOME_UNTESTED.button_offsets == STANDARD.button_offsets
    assert 'Home_Button' in HOME_UNTESTED.action_flags
    assert 'HOME_BUTTON' not in HOME_UNTESTED.action_flags
    assert HOME_UNTESTED.action_flags['Home_Button'] == STANDARD.action_flags['HOME_BUTTON']
    assert not HOME_UNTESTED.is_tested('HOME')
    assert HOME_UNTESTED.is_tested('A')
    assert STANDARD.is_tested('HOME')


def test_get_profile():
    assert get_profile() is STANDARD
    assert get_profile(DEFAULT_PROFILE_NAME) is STANDARD
    assert get_profile("home_untested") is HOME_UNTESTED
    assert list_profiles() == ["standard", "home_untested"]
    with pytest.raises(UnknownProfileError):
        get_profile("nope")
    with pytest.raises(KeyError):
        get_profile("nope")


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        STANDARD.button_offsets['A'] = 0
    with pytest.raises(TypeError):
        STANDARD.action_flags['A'] = 0
