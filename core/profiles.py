"""
PadMap Editor - 设备方案（偏移表 + 动作表）

每个方案是一组固定的协议常量，对应手柄固件的文件布局：
    偏移表: 按钮 → 该按钮 4 字节字段在文件中的起始偏移
    动作表: 动作 → 32 位标志值（big-endian 存储）

切换设备 = 整体替换两张表，不在运行时修改单个条目。
"""

from dataclasses import dataclass, field
from enum import IntFlag
from types import MappingProxyType


class UnknownProfileError(KeyError):
    """请求了未注册的设备方案"""


# ─── 偏移表 ──────────────────────────────────────────────────
# 0x7C 未映射，原样保留

BUTTON_OFFSETS = MappingProxyType({
    'A':          0x4C,
    'B':          0x50,
    'X':          0x54,
    'Y':          0x58,
    'LB':         0x5C,
    'RB':         0x60,
    'LT':         0x64,
    'RT':         0x68,
    'L3':         0x6C,
    'R3':         0x70,
    'BACK':       0x74,
    'MENU':       0x78,
    'HOME':       0x80,
    'UP_DPAD':    0x84,
    'DOWN_DPAD':  0x88,
    'LEFT_DPAD':  0x8C,
    'RIGHT_DPAD': 0x90,
    'PR':         0x94,
    'PL':         0x98,
    'L4':         0x9C,
    'R4':         0xA0,
})


# ─── 动作表 ──────────────────────────────────────────────────
# 声明顺序即解码结果顺序 / 复选框顺序

class StandardAction(IntFlag):
    Y = 0x20000000
    X = 0x10000000
    A = 0x00200000
    B = 0x00100000
    RIGHT_DPAD = 0x40000000    # →
    LEFT_DPAD = 0x80000000     # ←  (bit 31)
    DOWN_DPAD = 0x00010000     # ↓
    UP_DPAD = 0x00020000       # ↑
    L3_CLICK = 0x02000000
    LB_BUTTON = 0x00040000
    LT_TRIGGER = 0x00400000
    RB_BUTTON = 0x00080000
    RT_TRIGGER = 0x00800000
    BACK_BUTTON = 0x08000000
    R3_CLICK = 0x04000000
    MENU_BUTTON = 0x01000000
    HOME_BUTTON = 0x00000200


class HomeUntestedAction(IntFlag):
    """HOME 未测试固件：标志值相同，HOME 动作键大小写不同"""
    Y = 0x20000000
    X = 0x10000000
    A = 0x00200000
    B = 0x00100000
    RIGHT_DPAD = 0x40000000
    LEFT_DPAD = 0x80000000
    DOWN_DPAD = 0x00010000
    UP_DPAD = 0x00020000
    L3_CLICK = 0x02000000
    LB_BUTTON = 0x00040000
    LT_TRIGGER = 0x00400000
    RB_BUTTON = 0x00080000
    RT_TRIGGER = 0x00800000
    BACK_BUTTON = 0x08000000
    R3_CLICK = 0x04000000
    MENU_BUTTON = 0x01000000
    Home_Button = 0x00000200


def _action_table(flag_enum):
    """IntFlag → 只读 {动作名: int}，保持声明顺序。"""
    return MappingProxyType({member.name: int(member) for member in flag_enum.__members__.values()})


# ─── 方案 ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DeviceProfile:
    """一个设备方案 = 偏移表 + 动作表 + 未测试按钮集合"""
    name: str
    button_offsets: MappingProxyType
    action_flags: MappingProxyType
    untested_buttons: frozenset = field(default_factory=frozenset)

    @property
    def buttons(self) -> tuple:
        return tuple(self.button_offsets)

    @property
    def actions(self) -> tuple:
        return tuple(self.action_flags)

    @property
    def min_size(self) -> int:
        """完整解码所需的最小文件长度"""
        return max(self.button_offsets.values()) + 4

    def is_tested(self, button: str) -> bool:
        return button not in self.untested_buttons


STANDARD = DeviceProfile(
    name="standard",
    button_offsets=BUTTON_OFFSETS,
    action_flags=_action_table(StandardAction),
)

HOME_UNTESTED = DeviceProfile(
    name="home_untested",
    button_offsets=BUTTON_OFFSETS,
    action_flags=_action_table(HomeUntestedAction),
    untested_buttons=frozenset({'HOME'}),
)

PROFILES = MappingProxyType({
    STANDARD.name: STANDARD,
    HOME_UNTESTED.name: HOME_UNTESTED,
})

DEFAULT_PROFILE_NAME = STANDARD.name


def list_profiles() -> list:
    """返回所有方案名（注册顺序）。"""
    return list(PROFILES)


def get_profile(name: str = None) -> DeviceProfile:
    """按名称取方案；name 为空时返回默认方案。"""
    if not name:
        name = DEFAULT_PROFILE_NAME
    try:
        return PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name) from None
