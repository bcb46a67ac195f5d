"""Run-scoped registry of analyzed components."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .models import Component


class ComponentRegistry:
    """Components keyed by ``(name, file_path)``, plus a by-name index.

    Two components with the same name in different files are distinct
    entries; JSX tag lookup picks between them with :meth:`lookup_tag`.
    """

    def __init__(self) -> None:
        self._by_key: Dict[Tuple[str, str], Component] = {}
        self._by_name: Dict[str, List[Component]] = {}

    def register(self, component: Component) -> None:
        self._by_key[component.key] = component
        self._by_name.setdefault(component.name, []).append(component)

    def get(self, name: str, file_path: Union[str, Path]) -> Optional[Component]:
        return self._by_key.get((name, str(file_path)))

    def lookup_tag(
        self,
        name: str,
        file_path: Union[str, Path],
        imported_from: Optional[Union[str, Path]] = None,
    ) -> Optional[Component]:
        """Resolve a JSX tag used in *file_path* to a known component.

        Prefers a component declared in the same file, then one declared in
        the file the tag was imported from, then the most recently
        registered component with that name.
        """
        local = self.get(name, file_path)
        if local is not None:
            return local
        if imported_from is not None:
            imported = self.get(name, imported_from)
            if imported is not None:
                return imported
        candidates = self._by_name.get(name)
        if not candidates:
            return None
        return candidates[-1]
