from abc import ABC, abstractmethod
from enum import Enum


class InputStyle(Enum):
    """Style of the operator's pending input line"""
    NEUTRAL = "neutral"
    COMMAND = "command"
    WARNING = "warning"


class Display(ABC):
    """Surface the server renders its transcript on"""

    @abstractmethod
    def show_text(self, text: str) -> None:
        """Replaces the displayed transcript with text"""

    @abstractmethod
    def set_input_style(self, style: InputStyle) -> None:
        """Restyles the operator's input line"""

    @abstractmethod
    def prompt_confirm(self, message: str) -> bool:
        """Asks the operator a yes/no question and blocks for the answer"""


class InputSource(ABC):
    """Where operator command lines are typed"""

    @abstractmethod
    def clear(self) -> None:
        """Resets the pending input to empty"""


class NullDisplay(Display, InputSource):
    """Headless collaborator: renders nothing and never confirms"""

    def show_text(self, text: str) -> None:
        pass

    def set_input_style(self, style: InputStyle) -> None:
        pass

    def prompt_confirm(self, message: str) -> bool:
        return False

    def clear(self) -> None:
        pass
