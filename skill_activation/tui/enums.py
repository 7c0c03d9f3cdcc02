from enum import Enum

from skill_activation.models import Enforcement, Priority


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


PRIORITY_STYLE = {
    Priority.HIGH: UIStyle.RED.value,
    Priority.MEDIUM: UIStyle.YELLOW.value,
    Priority.LOW: UIStyle.DIM.value,
}

ENFORCEMENT_STYLE = {
    Enforcement.BLOCK: UIStyle.MAGENTA.value,
    Enforcement.SUGGEST: UIStyle.CYAN.value,
}
