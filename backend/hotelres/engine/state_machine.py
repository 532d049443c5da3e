"""
hotelres/engine/state_machine.py

State machine engine - guarded transitions keyed by (state, trigger)
"""
from typing import Dict, List, Any, Optional, Callable
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass
class StateTransition:
    """
    Transition definition

    Attributes:
        from_state: source state
        to_state: target state
        trigger: event name that fires the transition
        condition: optional guard evaluated against a context dict
    """

    from_state: str
    to_state: str
    trigger: str
    condition: Optional[Callable[[Dict[str, Any]], bool]] = None

    def is_allowed(self, context: Dict[str, Any]) -> bool:
        """Evaluate the guard"""
        if self.condition is None:
            return True
        return bool(self.condition(context))


@dataclass
class StateMachineConfig:
    """
    State machine configuration

    Attributes:
        name: machine name, used in log lines
        states: every state
        transitions: allowed transitions
        initial_state: state a new machine starts in
    """

    name: str
    states: List[str]
    transitions: List[StateTransition]
    initial_state: str


class StateMachine:
    """
    State machine

    Example:
        >>> machine = StateMachine(
        ...     config=StateMachineConfig(
        ...         name="Door",
        ...         states=["open", "closed"],
        ...         transitions=[StateTransition("open", "closed", "close")],
        ...         initial_state="open"
        ...     )
        ... )
        >>> machine.fire("close")
        'closed'
    """

    def __init__(self, config: StateMachineConfig, current_state: Optional[str] = None):
        self._config = config
        self._current_state = current_state if current_state is not None else config.initial_state
        self._transition_map: Dict[str, Dict[str, StateTransition]] = {}

        # (from_state, trigger) -> transition
        for t in config.transitions:
            self._transition_map.setdefault(t.from_state, {})[t.trigger] = t

    @property
    def current_state(self) -> str:
        return self._current_state

    def is_terminal(self, state: Optional[str] = None) -> bool:
        """A state with no outgoing transitions"""
        state = self._current_state if state is None else state
        return not self._transition_map.get(state)

    def available_triggers(self) -> List[str]:
        """Triggers defined from the current state, guards not evaluated"""
        return sorted(self._transition_map.get(self._current_state, {}))

    def get_transition(self, trigger: str) -> Optional[StateTransition]:
        return self._transition_map.get(self._current_state, {}).get(trigger)

    def can_fire(self, trigger: str, context: Optional[Dict[str, Any]] = None) -> bool:
        transition = self.get_transition(trigger)
        return transition is not None and transition.is_allowed(context or {})

    def fire(self, trigger: str, context: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Fire a trigger

        Returns:
            the new state, or None when the trigger is not allowed
        """
        transition = self.get_transition(trigger)
        if transition is None or not transition.is_allowed(context or {}):
            logger.warning(
                f"{self._config.name}: invalid trigger '{trigger}' from '{self._current_state}'"
            )
            return None

        previous_state = self._current_state
        self._current_state = transition.to_state
        logger.info(
            f"{self._config.name}: {previous_state} -> {transition.to_state} (trigger: {trigger})"
        )
        return transition.to_state


__all__ = [
    "StateTransition",
    "StateMachineConfig",
    "StateMachine",
]
