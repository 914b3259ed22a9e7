from decision.modes.matrix import MatrixMode
from decision.modes.proscons import ProsConsMode

__all__ = ["MatrixMode", "ProsConsMode"]
