# Engine module
from hotelres.engine.state_machine import StateMachine, StateMachineConfig, StateTransition

__all__ = ['StateMachine', 'StateMachineConfig', 'StateTransition']
