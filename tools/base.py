"""
Harmony tool base class and common types.

Every harmony tool inherits from HarmonyTool and implements execute().
Tools are thin adapters: they turn plain parameters (chord symbols as text)
into engine calls on core/harmony and package the result as a ToolResult.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """
    Tool parameter specification.

    Attributes:
        name: Parameter name, e.g. "chords"
        type: Python type (str, int, ...)
        description: Human-readable description, shown to callers
        required: Whether the parameter must be supplied
        default: Value used when an optional parameter is omitted
    """

    name: str
    type: type
    description: str
    required: bool = True
    default: Any = None

    def validate(self, value: Any) -> tuple[bool, str | None]:
        """
        Validate a parameter value.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            if self.required:
                return False, f"Required parameter '{self.name}' is missing"
            return True, None

        # bool is an int subclass; never accept it for numeric parameters
        if isinstance(value, bool) and self.type is not bool:
            return False, f"Parameter '{self.name}' must be {self.type.__name__}, got bool"

        if not isinstance(value, self.type):
            return (
                False,
                f"Parameter '{self.name}' must be {self.type.__name__}, got {type(value).__name__}",
            )

        return True, None


@dataclass(frozen=True)
class ToolResult:
    """
    Result of a tool call.

    Attributes:
        success: Whether the call succeeded
        data: JSON-friendly result payload
        error: Error message if success=False
        metadata: Optional extras (counts, chosen key, ...)
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] | None = None


class HarmonyTool(ABC):
    """
    Abstract base class for harmony tools.

    Subclasses provide name, description, parameters and execute(). Calling
    the tool validates inputs first; execute() only sees valid parameters.

    Example:
        class RecommendNote(HarmonyTool):
            @property
            def name(self) -> str:
                return "recommend_note"

            def execute(self, **kwargs) -> ToolResult:
                return ToolResult(success=True, data={"best_note": "B"})
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool identifier (lowercase, underscores)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What the tool does and when to call it."""

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """Parameters this tool accepts, in positional order."""

    def validate_inputs(self, **kwargs) -> tuple[bool, str | None]:
        """
        Validate all input parameters.

        Returns:
            Tuple of (is_valid, error_message) for the first failing parameter
        """
        for param in self.parameters:
            is_valid, error = param.validate(kwargs.get(param.name))
            if not is_valid:
                return False, error
        return True, None

    @abstractmethod
    def execute(self, **kwargs) -> ToolResult:
        """
        Run the tool with validated parameters.

        Returns:
            ToolResult with success status and data
        """

    def __call__(self, **kwargs) -> ToolResult:
        """
        Validate inputs, then execute.

        Unexpected exceptions become a failed ToolResult; they are logged with
        their traceback.
        """
        is_valid, error = self.validate_inputs(**kwargs)
        if not is_valid:
            logger.warning("Tool %s rejected input: %s", self.name, error)
            return ToolResult(success=False, error=error)

        try:
            return self.execute(**kwargs)
        except Exception as e:
            logger.exception("Tool %s failed", self.name)
            return ToolResult(success=False, error=f"Tool execution failed: {e}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the tool's name, description and parameter specs."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type.__name__,
                    "description": p.description,
                    "required": p.required,
                    "default": p.default,
                }
                for p in self.parameters
            ],
        }
