"""
PadMap Editor - config_model.py
按钮映射数据模型 — 纯数据：按钮 → 动作列表，不含任何 UI 状态。
"""

from dataclasses import dataclass, field


@dataclass
class GamepadConfig:
    """按钮 → 动作列表（去重，保持插入顺序）

    由解码器创建，UI 逐个勾选/取消动作，编码器消费。
    只存在于会话内存中，落盘只能通过编码后的二进制。
    """
    mappings: dict = field(default_factory=dict)

    def buttons(self) -> list:
        return list(self.mappings)

    def actions(self, button: str) -> list:
        """返回该按钮动作列表的副本（按钮不存在时为空）"""
        return list(self.mappings.get(button, []))

    def has_action(self, button: str, action: str) -> bool:
        return action in self.mappings.get(button, ())

    def add_action(self, button: str, action: str) -> bool:
        """添加动作；已存在时不重复添加。返回是否有变化。"""
        current = self.mappings.setdefault(button, [])
        if action in current:
            return False
        current.append(action)
        return True

    def remove_action(self, button: str, action: str) -> bool:
        """移除动作；不存在时什么都不做。返回是否有变化。"""
        current = self.mappings.get(button)
        if not current or action not in current:
            return False
        self.mappings[button] = [a for a in current if a != action]
        return True

    def set_action(self, button: str, action: str, checked: bool) -> bool:
        """复选框语义：checked=True 添加，False 移除"""
        if checked:
            return self.add_action(button, action)
        return self.remove_action(button, action)

    def items(self):
        return self.mappings.items()

    def copy(self) -> 'GamepadConfig':
        return GamepadConfig({b: list(a) for b, a in self.mappings.items()})

    def __len__(self):
        return len(self.mappings)

    def __contains__(self, button):
        return button in self.mappings

    def to_dict(self) -> dict:
        return {b: list(a) for b, a in self.mappings.items()}

    @classmethod
    def from_dict(cls, d: dict) -> 'GamepadConfig':
        """从普通 dict 构建；非列表值视为空，重复动作去重"""
        mappings = {}
        for button, actions in d.items():
            if not isinstance(actions, (list, tuple)):
                actions = []
            mappings[button] = list(dict.fromkeys(actions))
        return cls(mappings)
