"""
Editor action catalog.

Each toolbar action of the photo editor is described by an EditAction:
which transform it runs, which single parameter it takes, and the range
and default a slider or spin box should offer for that parameter. Values
are checked against the range before the transform is called, so a control
wired up by name can never hand a transform an out-of-range value.

Classes:
    EditAction: One editor action and its parameter range

Functions:
    get_action: Look up an action by name
    list_actions: Action names in toolbar order
"""

import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from PM_Libs.constants import (
    BORDER_WIDTH_MIN,
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    CONTRAST_MAX,
    CONTRAST_MIN,
    DEFAULT_BORDER_WIDTH,
    DEFAULT_BRIGHTNESS,
    DEFAULT_CONTRAST,
)
from PM_Libs.errors import InvalidParameterError
from PM_Libs.ImageEditingLib import image_editing_ops
from PM_Libs.ImageEditingLib.image_models import PixelBuffer


@dataclass(frozen=True)
class EditAction:
    """A named editor action.

    Attributes:
        name: Action name used by controls (e.g., 'brightness')
        label: Text for a button or menu entry
        transform: Pure transform taking (buffer) or (buffer, value)
        parameter: Name of the single parameter, None for parameterless actions
        minimum: Smallest accepted value, None if unbounded or non-numeric
        maximum: Largest accepted value, None if unbounded or non-numeric
        default: Value used when none is given, None if the value is required
        integral: Whether the value must be a whole number
        changes_size: Whether the result can differ in size from the input
    """
    name: str
    label: str
    transform: Callable[..., PixelBuffer]
    parameter: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    default: Any = None
    integral: bool = False
    changes_size: bool = False

    @property
    def is_ranged(self) -> bool:
        return self.minimum is not None or self.maximum is not None

    def resolve(self, value: Any = None) -> Any:
        """
        Fill in the default and check a value against the action's range.

        Args:
            value: Parameter value, or None to use the default

        Returns:
            The value to pass to the transform (None for parameterless actions)

        Raises:
            InvalidParameterError: If the value is missing, of the wrong kind,
                or outside the range
        """
        if self.parameter is None:
            if value is not None:
                raise InvalidParameterError(f"'{self.name}' takes no parameter, got {value!r}")
            return None

        if value is None:
            value = self.default
        if value is None:
            raise InvalidParameterError(f"'{self.name}' requires a {self.parameter} value")

        if not self.is_ranged:
            return value

        kind = numbers.Integral if self.integral else numbers.Real
        if isinstance(value, bool) or not isinstance(value, kind):
            expected = "an integer" if self.integral else "a number"
            raise InvalidParameterError(f"{self.parameter} must be {expected}, got {value!r}")

        if self.minimum is not None and value < self.minimum:
            raise InvalidParameterError(
                f"{self.parameter} must be at least {self.minimum}, got {value}"
            )
        if self.maximum is not None and value > self.maximum:
            raise InvalidParameterError(
                f"{self.parameter} must be at most {self.maximum}, got {value}"
            )

        return value

    def run(self, buffer: PixelBuffer, value: Any = None) -> PixelBuffer:
        """Resolve the value, then run the transform on buffer."""
        value = self.resolve(value)
        if self.parameter is None:
            return self.transform(buffer)
        return self.transform(buffer, value)

    def to_dict(self) -> Dict[str, Any]:
        """Describe the action's control (the transform itself is omitted)."""
        return {
            "name": self.name,
            "label": self.label,
            "parameter": self.parameter,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "default": self.default,
            "integral": self.integral,
            "changes_size": self.changes_size,
        }


# Toolbar order
_ACTIONS = (
    EditAction(
        name="brightness",
        label="Brightness",
        transform=image_editing_ops.adjust_brightness,
        parameter="offset",
        minimum=BRIGHTNESS_MIN,
        maximum=BRIGHTNESS_MAX,
        default=DEFAULT_BRIGHTNESS,
        integral=True,
    ),
    EditAction(
        name="contrast",
        label="Contrast",
        transform=image_editing_ops.adjust_contrast,
        parameter="factor",
        minimum=CONTRAST_MIN,
        maximum=CONTRAST_MAX,
        default=DEFAULT_CONTRAST,
    ),
    EditAction(
        name="grayscale",
        label="Grayscale",
        transform=image_editing_ops.convert_to_grayscale,
    ),
    EditAction(
        name="rotate",
        label="Rotate",
        transform=image_editing_ops.rotate_90,
        changes_size=True,
    ),
    EditAction(
        name="add_border",
        label="Add Border",
        transform=image_editing_ops.add_border,
        parameter="border_width",
        minimum=BORDER_WIDTH_MIN,
        default=DEFAULT_BORDER_WIDTH,
        integral=True,
        changes_size=True,
    ),
    EditAction(
        name="crop",
        label="Crop",
        transform=image_editing_ops.crop,
        parameter="rect",
        changes_size=True,
    ),
)

EDIT_ACTIONS: Dict[str, EditAction] = {action.name: action for action in _ACTIONS}


def get_action(name: str) -> EditAction:
    """
    Look up an editor action.

    Raises:
        KeyError: If no action has that name
    """
    key = str(name).strip().lower()

    if key not in EDIT_ACTIONS:
        available = ", ".join(list_actions())
        raise KeyError(f"Unknown edit action '{name}'. Available actions: {available}")

    return EDIT_ACTIONS[key]


def list_actions() -> List[str]:
    return [action.name for action in _ACTIONS]
