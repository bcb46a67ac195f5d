"""Tests for relative import and re-export resolution."""

from pathlib import Path

from reactgraph_cli.parser import SourceParser
from reactgraph_cli.resolver import STAR_EXPORT, collect_module_links, resolve_import_path


def _links(path: Path, diagnostics):
    parsed = SourceParser().parse_file(path)
    return collect_module_links(parsed, diagnostics)


class TestResolveImportPath:
    def test_extension_priority(self, write_files):
        """Extensions are tried in priority order."""
        root = write_files({"App.jsx": "", "Button.js": "", "Button.tsx": ""})

        assert resolve_import_path(root / "App.jsx", "./Button") == root / "Button.tsx"

    def test_literal_path_with_extension(self, write_files):
        """A specifier with an existing extension resolves as-is."""
        root = write_files({"App.jsx": "", "Button.js": "", "Button.tsx": ""})

        assert resolve_import_path(root / "App.jsx", "./Button.js") == root / "Button.js"

    def test_directory_index(self, write_files):
        """A directory resolves to its index file."""
        root = write_files({"src/App.jsx": "", "src/components/index.ts": ""})

        resolved = resolve_import_path(root / "src" / "App.jsx", "./components")

        assert resolved == root / "src" / "components" / "index.ts"

    def test_parent_directory(self, write_files):
        """Parent-relative specifiers resolve."""
        root = write_files({"src/ui/Card.jsx": "", "src/theme.js": ""})

        assert resolve_import_path(root / "src" / "ui" / "Card.jsx", "../theme") == root / "src" / "theme.js"

    def test_dotted_basename(self, write_files):
        """A dotted basename still gets extensions appended."""
        root = write_files({"App.jsx": "", "Button.stories.tsx": ""})

        assert resolve_import_path(root / "App.jsx", "./Button.stories") == root / "Button.stories.tsx"

    def test_package_imports_are_not_resolved(self, write_files):
        """Bare package imports are not resolved."""
        root = write_files({"App.jsx": ""})

        assert resolve_import_path(root / "App.jsx", "react") is None

    def test_missing_target(self, write_files):
        """Specifiers with no matching file resolve to None."""
        root = write_files({"App.jsx": ""})

        assert resolve_import_path(root / "App.jsx", "./Nope") is None
        assert resolve_import_path(root / "App.jsx", "./Nope.jsx") is None


class TestModuleLinks:
    def test_imports(self, write_files, diagnostics):
        """Default and named imports map to their files."""
        root = write_files({
            "App.jsx": (
                "import React from 'react';\n"
                "import Header from './Header';\n"
                "import { Card, List as Items } from './widgets';\n"
                "import './styles.css';\n"
            ),
            "Header.jsx": "",
            "widgets/index.js": "",
            "styles.css": "",
        })

        links = _links(root / "App.jsx", diagnostics)

        assert links == {
            "Header": root / "Header.jsx",
            "Card": root / "widgets" / "index.js",
            "Items": root / "widgets" / "index.js",
        }

    def test_reexports(self, write_files, diagnostics):
        """Named, default and star re-exports are collected."""
        root = write_files({
            "index.js": (
                "export { default } from './Button';\n"
                "export { Tooltip as Tip } from './Tooltip';\n"
                "export * from './utils';\n"
                "export * from 'external-lib';\n"
            ),
            "Button.jsx": "",
            "Tooltip.tsx": "",
            "utils.ts": "",
        })

        links = _links(root / "index.js", diagnostics)

        assert links["Tip"] == root / "Tooltip.tsx"
        assert links[f"{STAR_EXPORT}:./utils"] == root / "utils.ts"
        assert root / "Button.jsx" in links.values()
        assert "Found re-export from: ./Button" in diagnostics.analysis_log
        assert "Found re-export from: external-lib" in diagnostics.analysis_log

    def test_unresolved_specifiers_are_silent(self, write_files, diagnostics):
        """Unresolved specifiers are dropped silently."""
        root = write_files({"App.jsx": "import Missing from './Missing';\nexport { x } from './gone';\n"})

        assert _links(root / "App.jsx", diagnostics) == {}
        assert diagnostics.parse_errors == []
