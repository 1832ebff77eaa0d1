"""Tests for barrel tracing and the consumer walker.

A barrel is a file that re-exports a target module; the consumer walker
finds the files importing a barrel through one of the names it forwards.
"""

import os

import pytest

from imports_detector.barrel import BarrelTracer, forwarded_names
from imports_detector.consumers import ConsumerWalker, uses_forwarded_name
from imports_detector.context import AnalysisContext
from imports_detector.models import ImportBinding, ImportRecord, ImportType
from imports_detector.module_resolver import ModuleResolver


@pytest.fixture
def context():
    return AnalysisContext(resolver=ModuleResolver())


def _load(context, root, rel_path):
    collection = context.load(os.path.join(str(root), rel_path))
    assert collection is not None
    return collection


class TestIsBarrelFor:
    """The barrel predicate, evaluated per target."""

    def test_reexport_from_target(self, make_project, context):
        root = make_project({
            "src/Target.ts": "export const X = 1;\n",
            "src/index.ts": "export { X } from './Target';\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/index.ts"), str(root / "src/Target.ts"))
        assert check.is_barrel
        assert check.re_exported_names == frozenset({"X"})

    def test_reexport_with_alias(self, make_project, context):
        root = make_project({
            "src/Target.ts": "export default 1;\n",
            "src/index.ts": "export { default as Target } from './Target';\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/index.ts"), str(root / "src/Target.ts"))
        assert check.re_exported_names == frozenset({"Target"})

    def test_import_then_export(self, make_project, context):
        root = make_project({
            "src/Target.tsx": "export default function Target() { return null; }\n",
            "src/index.ts": "import Target from './Target';\nimport { helper } from './helpers';\nexport { Target };\n",
            "src/helpers.ts": "export const helper = 1;\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/index.ts"), str(root / "src/Target.tsx"))
        assert check.is_barrel
        assert check.re_exported_names == frozenset({"Target"})

    def test_side_effect_import_is_not_a_barrel(self, make_project, context):
        root = make_project({
            "src/Target.ts": "export const X = 1;\n",
            "src/setup.ts": "import './Target';\nexport const ready = true;\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/setup.ts"), str(root / "src/Target.ts"))
        assert not check.is_barrel
        assert check.re_exported_names == frozenset()

    def test_local_use_only_is_not_a_barrel(self, make_project, context):
        root = make_project({
            "src/Target.ts": "export const X = 1;\n",
            "src/user.ts": "import { X } from './Target';\nexport const doubled = X * 2;\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/user.ts"), str(root / "src/Target.ts"))
        assert not check.is_barrel

    def test_export_star(self, make_project, context):
        root = make_project({
            "src/Target.ts": "export const X = 1;\n",
            "src/index.ts": "export * from './Target';\n",
        })
        check = BarrelTracer(context).is_barrel_for(_load(context, root, "src/index.ts"), str(root / "src/Target.ts"))
        assert check.re_exported_names == frozenset({"*"})

    def test_barrel_for_one_target_only(self, make_project, context):
        """A file can forward several targets; the check is per target."""
        root = make_project({
            "src/A.ts": "export const A = 1;\n",
            "src/B.ts": "export const B = 1;\n",
            "src/C.ts": "export const C = 1;\n",
            "src/index.ts": "export { A } from './A';\nexport { B } from './B';\n",
        })
        tracer = BarrelTracer(context)
        index = _load(context, root, "src/index.ts")
        assert tracer.is_barrel_for(index, str(root / "src/A.ts")).re_exported_names == frozenset({"A"})
        assert tracer.is_barrel_for(index, str(root / "src/B.ts")).re_exported_names == frozenset({"B"})
        assert not tracer.is_barrel_for(index, str(root / "src/C.ts")).is_barrel

    def test_forwarded_names_restrict_tracing(self, make_project, context):
        root = make_project({
            "src/inner/index.ts": "export const A = 1;\nexport const B = 2;\n",
            "src/index.ts": "export { A, B as Bee } from './inner';\n",
        })
        index = _load(context, root, "src/index.ts")
        check = BarrelTracer(context).is_barrel_for(index, str(root / "src/inner/index.ts"), frozenset({"B"}))
        assert check.re_exported_names == frozenset({"Bee"})


class TestForwardedNames:
    def test_named_passes_without_restriction(self):
        assert forwarded_names("X", "Y", None) == {"Y"}

    def test_named_filtered_by_forwarded(self):
        assert forwarded_names("X", "X", frozenset({"Z"})) == set()
        assert forwarded_names("X", "X", frozenset({"X"})) == {"X"}

    def test_star_forwards_everything_but_default(self):
        assert forwarded_names("*", "*", frozenset({"A", "default"})) == {"A"}
        assert forwarded_names("*", "*", None) == {"*"}

    def test_namespace_reexport(self):
        assert forwarded_names("*", "ns", frozenset({"A"})) == {"ns"}

    def test_default_not_covered_by_star(self):
        assert forwarded_names("default", "Thing", frozenset({"*"})) == set()
        assert forwarded_names("Named", "Named", frozenset({"*"})) == {"Named"}


def _record(*bindings):
    return ImportRecord(
        module="./index",
        type=ImportType.STATIC,
        line=1,
        column=0,
        bindings=tuple(ImportBinding(imported, local) for imported, local in bindings),
    )


class TestUsesForwardedName:
    def test_no_bindings_matches(self):
        assert uses_forwarded_name(_record(), frozenset({"X"}))

    def test_namespace_matches(self):
        assert uses_forwarded_name(_record(("*", "all")), frozenset({"X"}))

    def test_named_intersection(self):
        assert uses_forwarded_name(_record(("X", "X")), frozenset({"X"}))
        assert not uses_forwarded_name(_record(("Y", "Y")), frozenset({"X"}))

    def test_default_requires_default(self):
        assert uses_forwarded_name(_record(("default", "Thing")), frozenset({"default"}))
        assert not uses_forwarded_name(_record(("default", "Thing")), frozenset({"X"}))

    def test_star_forwards_named(self):
        assert uses_forwarded_name(_record(("Y", "Y")), frozenset({"*"}))


class TestFindConsumers:
    @pytest.fixture
    def project(self, make_project):
        return make_project({
            "src/components/Button.tsx": "export const Button = () => null;\n",
            "src/components/Card.tsx": "export const Card = () => null;\n",
            "src/components/index.ts": (
                "export { Button } from './Button';\nexport { Card } from './Card';\n"
            ),
            "src/pages/Home.tsx": "import { Button } from '../components';\n",
            "src/pages/About.tsx": "import { Card } from '../components';\n",
            "src/pages/All.tsx": "import * as ui from '../components';\n",
        })

    def _corpus(self, context, root):
        corpus = {}
        for dirpath, _, filenames in sorted(os.walk(root)):
            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                corpus[path] = context.load(path)
        return corpus

    def test_consumers_using_forwarded_name(self, project, context):
        corpus = self._corpus(context, project)
        barrel = str(project / "src/components/index.ts")

        results = ConsumerWalker(context).find_consumers(barrel, frozenset({"Button"}), corpus, set())

        assert sorted(os.path.basename(r.file) for r in results) == ["All.tsx", "Home.tsx"]

    def test_visited_barrel_returns_nothing(self, project, context):
        corpus = self._corpus(context, project)
        barrel = str(project / "src/components/index.ts")
        walker = ConsumerWalker(context)
        visited: set[str] = set()

        assert walker.find_consumers(barrel, frozenset({"Card"}), corpus, visited)
        assert walker.find_consumers(barrel, frozenset({"Card"}), corpus, visited) == []
