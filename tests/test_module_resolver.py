"""Unit tests for module resolution.

Covers the resolution precedence (relative, absolute, bare, base URL,
fallback), the extension and index probing order, path equivalence and
base URL discovery from tsconfig.json/jsconfig.json.
"""

import os

import pytest

from imports_detector.config import DEFAULT_EXTENSIONS
from imports_detector.module_resolver import ModuleResolver, discover_base_url


@pytest.fixture
def project(make_project):
    return make_project({
        "src/App.tsx": "export const App = 1;\n",
        "src/components/Test.tsx": "export const Test = 1;\n",
        "src/components/Both.ts": "export const a = 1;\n",
        "src/components/Both.tsx": "export const a = 1;\n",
        "src/widgets/index.ts": "export const w = 1;\n",
        "src/utils/format.js": "module.exports = {};\n",
        "src/styles.css": "body {}\n",
    })


@pytest.fixture
def resolver():
    return ModuleResolver()


class TestResolve:
    """Resolution precedence and probing."""

    def test_relative_sibling(self, project, resolver):
        """./components/Test from App.tsx resolves to the concrete .tsx file."""
        app = str(project / "src" / "App.tsx")
        assert resolver.resolve("./components/Test", app) == str(project / "src/components/Test.tsx")

    def test_relative_parent(self, project, resolver):
        test = str(project / "src/components/Test.tsx")
        assert resolver.resolve("../App", test) == str(project / "src/App.tsx")

    def test_extension_order_prefers_ts(self, project, resolver):
        """Both.ts and Both.tsx exist; .ts comes first in the extension list."""
        app = str(project / "src/App.tsx")
        assert resolver.resolve("./components/Both", app) == str(project / "src/components/Both.ts")

    def test_explicit_extension(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve("./components/Both.tsx", app) == str(project / "src/components/Both.tsx")

    def test_directory_index(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve("./widgets", app) == str(project / "src/widgets/index.ts")

    def test_dot_specifier_is_relative(self, project, resolver):
        """'.' from a file inside widgets/ means widgets/index."""
        inner = str(project / "src/widgets/Inner.ts")
        assert resolver.resolve(".", inner) == str(project / "src/widgets/index.ts")

    def test_unknown_extension_not_resolved(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve("./styles.css", app) is None

    def test_missing_file_is_none(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve("./components/Nope", app) is None

    def test_empty_specifier_is_none(self, project, resolver):
        assert resolver.resolve("", str(project / "src/App.tsx")) is None

    def test_bare_module_passthrough(self, project, resolver):
        """Packages are returned unchanged, without touching the filesystem."""
        app = str(project / "src/App.tsx")
        assert resolver.resolve("react", app) == "react"
        assert resolver.resolve("lodash", app) == "lodash"

    def test_absolute_path(self, project, resolver):
        target = str(project / "src/components/Test")
        assert resolver.resolve(target, str(project / "src/App.tsx")) == target + ".tsx"

    def test_base_url(self, project):
        resolver = ModuleResolver(base_url=str(project / "src"))
        page = str(project / "src/pages/Home.tsx")
        assert resolver.resolve("components/Test", page) == str(project / "src/components/Test.tsx")

    def test_non_relative_without_base_url_falls_back_to_relative(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve("components/Test", app) == str(project / "src/components/Test.tsx")

    def test_scoped_package_unresolvable(self, project, resolver):
        """@scope/pkg contains a slash, so it is probed; nothing exists, so None."""
        app = str(project / "src/App.tsx")
        assert resolver.resolve("@apollo/client", app) is None

    def test_backslash_separators(self, project, resolver):
        app = str(project / "src/App.tsx")
        assert resolver.resolve(".\\components\\Test", app) == str(project / "src/components/Test.tsx")

    def test_resolved_paths_only_carry_known_extensions(self, project, resolver):
        app = str(project / "src/App.tsx")
        for spec in ("./components/Test", "./components/Both", "./widgets", "./utils/format"):
            resolved = resolver.resolve(spec, app)
            assert resolved is not None
            assert os.path.splitext(resolved)[1] in DEFAULT_EXTENSIONS
            assert os.path.isfile(resolved)


class TestPathsMatch:
    """Path equivalence is the only notion of 'same file'."""

    @pytest.mark.parametrize("ext", DEFAULT_EXTENSIONS)
    def test_extension_variants_match(self, resolver, ext):
        assert resolver.paths_match("/app/src/Foo", "/app/src/Foo" + ext)

    def test_ts_and_tsx_match(self, resolver):
        assert resolver.paths_match("/app/src/Foo.ts", "/app/src/Foo.tsx")

    def test_reflexive_and_symmetric(self, resolver):
        a, b = "/app/src/Foo.ts", "/app/src/Foo.jsx"
        assert resolver.paths_match(a, a)
        assert resolver.paths_match(a, b) == resolver.paths_match(b, a)

    def test_separators_normalized(self, resolver):
        assert resolver.paths_match("C:\\app\\src\\Foo.ts", "C:/app/src/Foo.ts")

    def test_different_directories_do_not_match(self, resolver):
        assert not resolver.paths_match("/app/admin/Dashboard.tsx", "/app/user/Dashboard.tsx")

    def test_is_index_file(self, resolver):
        assert resolver.is_index_file("/app/src/widgets/index.ts")
        assert resolver.is_index_file("/app/src/index.jsx")
        assert not resolver.is_index_file("/app/src/indexer.ts")


class TestDiscoverBaseUrl:
    """Base URL discovery from project manifests."""

    def test_explicit_base_url_wins(self, make_project):
        root = make_project({"tsconfig.json": '{"compilerOptions": {"baseUrl": "lib"}}'})
        assert discover_base_url(str(root), base_url=str(root / "src")) == os.path.abspath(root / "src")

    def test_tsconfig_with_comments(self, make_project):
        """tsconfig.json allows comments and trailing commas."""
        root = make_project({
            "tsconfig.json": """
                {
                  // project settings
                  "compilerOptions": {
                    "baseUrl": "./src",
                  },
                }
            """,
            "src/App.ts": "export {};\n",
        })
        assert discover_base_url(str(root / "src")) == str((root / "src").resolve())

    def test_jsconfig(self, make_project):
        root = make_project({"jsconfig.json": '{"compilerOptions": {"baseUrl": "."}}'})
        assert discover_base_url(str(root)) == str(root.resolve())

    def test_walks_up_from_search_root(self, make_project):
        root = make_project({
            "tsconfig.json": '{"compilerOptions": {"baseUrl": "src"}}',
            "src/deep/nested/File.ts": "export {};\n",
        })
        assert discover_base_url(str(root / "src/deep/nested")) == str((root / "src").resolve())

    def test_explicit_tsconfig_path(self, make_project):
        root = make_project({"config/tsconfig.app.json": '{"compilerOptions": {"baseUrl": ".."}}'})
        found = discover_base_url(str(root), tsconfig_path=str(root / "config/tsconfig.app.json"))
        assert found == str(root.resolve())

    def test_malformed_manifest_is_ignored(self, make_project):
        root = make_project({"sub/tsconfig.json": "{ not json at all"})
        # Nothing above tmp_path declares a baseUrl for this project
        assert discover_base_url(str(root / "sub"), tsconfig_path=str(root / "sub/tsconfig.json")) is None

    def test_manifest_without_base_url(self, make_project):
        root = make_project({"tsconfig.json": '{"compilerOptions": {"strict": true}}'})
        assert discover_base_url(str(root), tsconfig_path=str(root / "tsconfig.json")) is None
