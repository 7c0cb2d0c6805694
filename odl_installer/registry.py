"""
Component registry.

Component modules register their class under a name together with the
components they must run after ("dependencies"), the ones whose changes
trigger their refresh ("subscribes") and a one-line description.
"""

from typing import Any, Dict, List, Optional, Set, Type

from odl_installer.base_component import BaseComponent


class ComponentRegistry:
    """Name to component class mapping shared by the planner and orchestrator."""

    _registry: Dict[str, Type["BaseComponent"]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Class decorator adding a component under ``name``.

        Raises:
            ValueError: The name is taken, or the component subscribes to a
                component it does not depend on. A subscription is only seen
                when its target was applied first.
        """

        def decorator(
            component_class: Type["BaseComponent"],
        ) -> Type["BaseComponent"]:
            if name in cls._registry:
                raise ValueError(
                    f"Component with name '{name}' already registered"
                )

            if metadata:
                unordered = set(metadata.get("subscribes", [])) - set(
                    metadata.get("dependencies", [])
                )
                if unordered:
                    raise ValueError(
                        f"Component '{name}' subscribes to components it does not "
                        f"depend on: {', '.join(sorted(unordered))}"
                    )
                component_class.metadata = metadata

            component_class.component_name = name
            cls._registry[name] = component_class
            return component_class

        return decorator

    @classmethod
    def get_component(cls, name: str) -> Type["BaseComponent"]:
        if name not in cls._registry:
            raise KeyError(f"No component registered with name '{name}'")
        return cls._registry[name]

    @classmethod
    def get_all_components(cls) -> Dict[str, Type["BaseComponent"]]:
        return cls._registry.copy()

    @classmethod
    def get_component_dependencies(cls, name: str) -> Set[str]:
        metadata = getattr(cls.get_component(name), "metadata", {})
        return set(metadata.get("dependencies", []))

    @classmethod
    def resolve_dependencies(
        cls, components: List[str], allowed: Optional[Set[str]] = None
    ) -> List[str]:
        """
        Order ``components`` and their dependencies so every component comes
        after what it depends on. Siblings are visited in name order, so the
        result is stable across runs.

        Components declare the dependencies of both install routes; with
        ``allowed`` set to the chosen route's components, the others are
        skipped.

        Raises:
            KeyError: A component or dependency is not registered.
            ValueError: The dependencies form a cycle.
        """
        ordered: List[str] = []
        done: Set[str] = set()
        in_progress: Set[str] = set()

        def visit(component: str):
            if component in done:
                return
            if component in in_progress:
                raise ValueError(
                    f"Circular dependency detected involving '{component}'"
                )
            in_progress.add(component)
            for dependency in sorted(cls.get_component_dependencies(component)):
                if allowed is None or dependency in allowed:
                    visit(dependency)
            in_progress.remove(component)
            done.add(component)
            ordered.append(component)

        for component in components:
            visit(component)
        return ordered
