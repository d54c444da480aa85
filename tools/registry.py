"""
Harmony tool registry with package discovery.

Tools register themselves by subclassing HarmonyTool inside the scanned
package; nothing is listed by hand.
"""

import importlib
import inspect
import logging
import pkgutil

from tools.base import HarmonyTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Name → tool lookup for every HarmonyTool.

    Usage:
        registry = ToolRegistry()
        registry.discover()

        tool = registry.get("analyze_progression")
        result = tool(chords="Am7 D7 Gmaj7")
    """

    def __init__(self) -> None:
        self._tools: dict[str, HarmonyTool] = {}

    def register(self, tool: HarmonyTool) -> None:
        """
        Register a tool instance.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> HarmonyTool | None:
        """Return the tool registered under ``name``, or None."""
        return self._tools.get(name)

    def list_tools(self) -> list[dict]:
        """Serialized specs of every registered tool."""
        return [tool.to_dict() for tool in self._tools.values()]

    def discover(self, package_name: str = "tools.harmony") -> int:
        """
        Import every module of a package and register its HarmonyTool subclasses.

        Args:
            package_name: Package to scan (default: "tools.harmony")

        Returns:
            Number of tools registered by this call
        """
        try:
            package = importlib.import_module(package_name)
        except ImportError:
            logger.warning("Tool package %r not importable, nothing discovered", package_name)
            return 0
        if not hasattr(package, "__path__"):
            return 0

        count = 0
        for _finder, module_name, _is_pkg in pkgutil.walk_packages(
            package.__path__, prefix=f"{package_name}."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                logger.warning("Skipping tool module %s: import failed", module_name, exc_info=True)
                continue
            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if obj is HarmonyTool or not issubclass(obj, HarmonyTool):
                    continue
                if inspect.isabstract(obj) or obj.__module__ != module.__name__:
                    continue
                self.register(obj())
                count += 1

        logger.debug("Discovered %d tool(s) in %s", count, package_name)
        return count

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """
    Return the global registry, discovering tools on first call.
    """
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
        _registry.discover()
    return _registry
