"""
Presenter implementations.
"""

from .console_presenter import ConsolePresenter
from .scripted_presenter import ScriptedPresenter
from .sim_presenter import SimulatedPresenter

__all__ = [
    "ConsolePresenter",
    "ScriptedPresenter",
    "SimulatedPresenter",
]
