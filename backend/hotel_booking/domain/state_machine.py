"""
hotel_booking/domain/state_machine.py

状态机 - 声明合法的状态转换
"""
from typing import Dict, List, Optional
from dataclasses import dataclass
import logging

from hotel_booking.models.entities import BookingStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateTransition:
    """
    状态转换定义

    Attributes:
        from_state: 源状态
        to_state: 目标状态
        trigger: 触发动作
    """

    from_state: str
    to_state: str
    trigger: str


@dataclass
class StateMachineConfig:
    """
    状态机配置

    Attributes:
        name: 状态机名称
        states: 所有状态的列表
        transitions: 转换列表
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]


class StateMachine:
    """
    无状态的转换表，当前状态由调用方传入

    Example:
        >>> BOOKING_STATE_MACHINE.can_transition("confirmed", "cancelled", "cancel")
        True
    """

    def __init__(self, config: StateMachineConfig):
        self._config = config
        # (from_state, trigger) -> transition
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}
        for t in config.transitions:
            self._transition_map.setdefault(t.from_state, {})[t.trigger] = t

    def find(self, current_state: str, trigger: str) -> Optional[StateTransition]:
        return self._transition_map.get(current_state, {}).get(trigger)

    def can_transition(self, current_state: str, target_state: str, trigger: str) -> bool:
        """检查 current_state --trigger--> target_state 是否合法"""
        if target_state not in self._config.states:
            return False
        transition = self.find(current_state, trigger)
        return transition is not None and transition.to_state == target_state

    def is_terminal(self, state: str) -> bool:
        """没有任何出边的状态为终态"""
        return not self._transition_map.get(state)


BOOKING_STATE_MACHINE = StateMachine(
    config=StateMachineConfig(
        name="Booking",
        states=[BookingStatus.CONFIRMED.value, BookingStatus.CANCELLED.value],
        transitions=[
            StateTransition(
                from_state=BookingStatus.CONFIRMED.value,
                to_state=BookingStatus.CANCELLED.value,
                trigger="cancel",
            ),
        ],
    )
)
