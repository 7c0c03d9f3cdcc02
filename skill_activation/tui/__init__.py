from skill_activation.tui.renderers import ActivationConsoleUI

__all__ = ["ActivationConsoleUI"]
