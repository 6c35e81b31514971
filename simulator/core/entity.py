import simpy
from abc import ABC, abstractmethod
import itertools  # Helper for entity ID counter
from typing import Optional


class Entity(ABC):
    """
    Abstract base class for simulated components driven by an external tick.

    Each entity owns the SimPy environment that serves as its clock; advance()
    moves that clock forward by one step. Entities share nothing but the ID
    counter, so independent cars are simply independent instances.
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: Optional[str] = None):
        """
        Initialize the entity.

        Args:
            env: The SimPy environment this entity keeps time with.
            name: Entity name. Optional. If not specified, auto-generated from class name and ID.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        print(f'{self.env.now:.2f}: Entity "{self.name}" ({self.__class__.__name__}, ID:{self.entity_id}) created.')

    @property
    def now(self) -> float:
        """Current simulated time in seconds"""
        return self.env.now

    @abstractmethod
    def advance(self, dt: float):
        """
        Advance the entity by one tick of dt seconds (abstract method).

        Must be implemented in subclasses.
        """
        pass

    def _log(self, message: str):
        print(f"{self.env.now:.2f} [{self.name}] {message}")

    def _log_state_change(self, old_state, new_state):
        """
        Internal helper method to log state transitions.
        """
        print(f'{self.env.now:.2f}: Entity "{self.name}" ({self.__class__.__name__}, ID:{self.entity_id}) state transition: {old_state} -> {new_state}')
