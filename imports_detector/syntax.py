"""Tree-sitter adapter producing a closed set of import/export syntax variants.

The rest of the package only sees the frozen dataclasses defined here, never
tree-sitter node shapes. One variant exists per import style and per export
form:

    StaticImport       import a, { b as c } from './x'
    DynamicImport      import('./x')
    LazyImport         React.lazy(() => import('./x')), dynamic(...), loadable(...)
    RequireCall        require('./x'), import x = require('./x')
    ReExport           export { a as b } from './x'
    ExportAll          export * from './x', export * as ns from './x'
    LocalExport        export { a as b }
    DeclarationExport  export const a = ..., export function f() {}
    DefaultExport      export default a
"""

from dataclasses import dataclass
from typing import Any, Union

from imports_detector.models import DEFAULT_BINDING, NAMESPACE_BINDING, ImportBinding

LAZY_WRAPPERS = frozenset({"lazy", "dynamic", "loadable"})

FUNCTION_NODES = frozenset({"arrow_function", "function_expression", "function"})


@dataclass(frozen=True)
class StaticImport:
    source: str
    line: int
    column: int
    bindings: tuple[ImportBinding, ...]
    text: str


@dataclass(frozen=True)
class DynamicImport:
    source: str
    line: int
    column: int
    text: str


@dataclass(frozen=True)
class LazyImport:
    source: str
    line: int
    column: int
    wrapper: str
    text: str


@dataclass(frozen=True)
class RequireCall:
    source: str
    line: int
    column: int
    bindings: tuple[ImportBinding, ...]
    text: str


@dataclass(frozen=True)
class ReExport:
    source: str
    line: int
    column: int
    specifiers: tuple[tuple[str, str], ...]  # (local, exported)
    text: str


@dataclass(frozen=True)
class ExportAll:
    source: str
    line: int
    column: int
    alias: str | None
    text: str


@dataclass(frozen=True)
class LocalExport:
    specifiers: tuple[tuple[str, str], ...]  # (local, exported)


@dataclass(frozen=True)
class DeclarationExport:
    names: tuple[str, ...]


@dataclass(frozen=True)
class DefaultExport:
    local_name: str


SyntaxNode = Union[
    StaticImport,
    DynamicImport,
    LazyImport,
    RequireCall,
    ReExport,
    ExportAll,
    LocalExport,
    DeclarationExport,
    DefaultExport,
]


def collect_syntax_nodes(tree: Any) -> list[SyntaxNode]:
    """Walk a tree-sitter tree in source order and emit syntax variants."""
    collected: list[SyntaxNode] = []
    consumed: set[tuple[int, int]] = set()

    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        kind = node.type

        if kind == "import_statement":
            collected.extend(_import_statement(node))
        elif kind == "export_statement":
            collected.extend(_export_statement(node))
        elif kind == "call_expression":
            variant = _call_expression(node, consumed)
            if variant is not None:
                collected.append(variant)

        stack.extend(reversed(node.children))

    return collected


def _text(node: Any) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def _position(node: Any) -> tuple[int, int]:
    return node.start_point[0] + 1, node.start_point[1]


def _span(node: Any) -> tuple[int, int]:
    return node.start_byte, node.end_byte


def _child_of_type(node: Any, node_type: str) -> Any | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _string_value(node: Any) -> str | None:
    """Literal value of a string or substitution-free template string."""
    if node is None:
        return None
    if node.type == "string":
        return _text(node)[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return None
        return _text(node)[1:-1]
    return None


def _name_value(node: Any) -> str:
    """Identifier text, or the literal value for string module export names."""
    value = _string_value(node)
    return value if value is not None else _text(node)


def _arguments(args: Any) -> list[Any]:
    if args is None or args.type != "arguments":
        return []
    return [child for child in args.named_children if child.type != "comment"]


def _first_string_arg(args: Any) -> str | None:
    values = _arguments(args)
    if not values:
        return None
    return _string_value(values[0])


def _import_statement(node: Any) -> list[SyntaxNode]:
    line, column = _position(node)

    require_clause = _child_of_type(node, "import_require_clause")
    if require_clause is not None:
        source_node = require_clause.child_by_field_name("source") or _child_of_type(require_clause, "string")
        source = _string_value(source_node)
        if source is None:
            return []
        name = _child_of_type(require_clause, "identifier")
        bindings = (ImportBinding(NAMESPACE_BINDING, _text(name)),) if name else ()
        return [RequireCall(source, line, column, bindings, _text(node))]

    source = _string_value(node.child_by_field_name("source"))
    if source is None:
        return []

    bindings: list[ImportBinding] = []
    clause = _child_of_type(node, "import_clause")
    if clause is not None:
        for child in clause.named_children:
            if child.type == "identifier":
                bindings.append(ImportBinding(DEFAULT_BINDING, _text(child)))
            elif child.type == "namespace_import":
                name = _child_of_type(child, "identifier")
                bindings.append(ImportBinding(NAMESPACE_BINDING, _text(name)))
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    imported = _name_value(spec.child_by_field_name("name"))
                    alias = spec.child_by_field_name("alias")
                    bindings.append(ImportBinding(imported, _text(alias) if alias else imported))

    return [StaticImport(source, line, column, tuple(bindings), _text(node))]


def _export_specifiers(clause: Any) -> tuple[tuple[str, str], ...]:
    specifiers = []
    for spec in clause.named_children:
        if spec.type != "export_specifier":
            continue
        local = _name_value(spec.child_by_field_name("name"))
        alias = spec.child_by_field_name("alias")
        specifiers.append((local, _name_value(alias) if alias else local))
    return tuple(specifiers)


def _declared_names(declaration: Any) -> list[str]:
    if declaration.type == "ambient_declaration":
        names = []
        for child in declaration.named_children:
            names.extend(_declared_names(child))
        return names

    if declaration.type in ("lexical_declaration", "variable_declaration"):
        names = []
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            target = declarator.child_by_field_name("name")
            if target is None:
                continue
            if target.type == "identifier":
                names.append(_text(target))
            else:
                names.extend(_pattern_names(target))
        return names

    name = declaration.child_by_field_name("name")
    if name is not None:
        return [_name_value(name)]
    return []


def _pattern_names(pattern: Any) -> list[str]:
    """Identifiers bound by a destructuring pattern."""
    names = []
    stack = [pattern]
    while stack:
        node = stack.pop()
        if node.type == "pair_pattern":
            value = node.child_by_field_name("value")
            if value is not None:
                stack.append(value)
            continue
        if node.type in ("identifier", "shorthand_property_identifier_pattern"):
            names.append(_text(node))
            continue
        stack.extend(reversed(node.named_children))
    return [name for name in names if name]


def _export_statement(node: Any) -> list[SyntaxNode]:
    line, column = _position(node)

    source_node = node.child_by_field_name("source")
    if source_node is not None:
        source = _string_value(source_node)
        if source is None:
            return []
        clause = _child_of_type(node, "export_clause")
        if clause is not None:
            return [ReExport(source, line, column, _export_specifiers(clause), _text(node))]
        namespace = _child_of_type(node, "namespace_export")
        alias = _name_value(namespace.named_children[-1]) if namespace and namespace.named_children else None
        return [ExportAll(source, line, column, alias, _text(node))]

    declaration = node.child_by_field_name("declaration")

    if any(child.type == "default" for child in node.children):
        local_name = DEFAULT_BINDING
        value = node.child_by_field_name("value")
        if value is not None and value.type == "identifier":
            local_name = _text(value)
        else:
            named = declaration if declaration is not None else value
            name = named.child_by_field_name("name") if named is not None else None
            if name is not None:
                local_name = _text(name)
        return [DefaultExport(local_name)]

    if declaration is not None:
        names = _declared_names(declaration)
        return [DeclarationExport(tuple(names))] if names else []

    clause = _child_of_type(node, "export_clause")
    if clause is not None:
        return [LocalExport(_export_specifiers(clause))]

    return []


def _is_import_call(node: Any) -> bool:
    if node is None or node.type != "call_expression":
        return False
    function = node.child_by_field_name("function")
    return function is not None and function.type == "import"


def _lazy_wrapper_name(function: Any) -> str | None:
    if function.type == "member_expression":
        prop = function.child_by_field_name("property")
        if _text(prop) == "lazy":
            return _text(function)
    elif function.type == "identifier" and _text(function) in LAZY_WRAPPERS:
        return _text(function)
    return None


def _wrapped_import(args: Any) -> Any | None:
    """The literal import() call a lazy wrapper loads, if any."""
    values = _arguments(args)
    if not values:
        return None
    first = values[0]

    if _is_import_call(first):
        return first if _first_string_arg(first.child_by_field_name("arguments")) is not None else None

    if first.type not in FUNCTION_NODES:
        return None

    stack = [first.child_by_field_name("body")]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        if _is_import_call(node) and _first_string_arg(node.child_by_field_name("arguments")) is not None:
            return node
        stack.extend(reversed(node.children))
    return None


def _require_bindings(call: Any) -> tuple[ImportBinding, ...]:
    parent = call.parent
    if parent is None or parent.type != "variable_declarator":
        return ()
    value = parent.child_by_field_name("value")
    if value is None or _span(value) != _span(call):
        return ()

    target = parent.child_by_field_name("name")
    if target is None:
        return ()
    if target.type == "identifier":
        return (ImportBinding(NAMESPACE_BINDING, _text(target)),)
    if target.type != "object_pattern":
        return ()

    bindings = []
    for child in target.named_children:
        if child.type == "shorthand_property_identifier_pattern":
            name = _text(child)
            bindings.append(ImportBinding(name, name))
        elif child.type == "object_assignment_pattern":
            left = child.child_by_field_name("left")
            if left is not None:
                name = _text(left)
                bindings.append(ImportBinding(name, name))
        elif child.type == "pair_pattern":
            key = _name_value(child.child_by_field_name("key"))
            value_node = child.child_by_field_name("value")
            local = _text(value_node) if value_node is not None and value_node.type == "identifier" else key
            bindings.append(ImportBinding(key, local))
    return tuple(bindings)


def _call_expression(node: Any, consumed: set[tuple[int, int]]) -> SyntaxNode | None:
    if _span(node) in consumed:
        return None

    function = node.child_by_field_name("function")
    if function is None:
        return None
    args = node.child_by_field_name("arguments")
    line, column = _position(node)

    if function.type == "import":
        source = _first_string_arg(args)
        return DynamicImport(source or "", line, column, _text(node))

    if function.type == "identifier" and _text(function) == "require":
        source = _first_string_arg(args)
        if source is None:
            return None
        return RequireCall(source, line, column, _require_bindings(node), _text(node))

    wrapper = _lazy_wrapper_name(function)
    if wrapper is not None:
        import_call = _wrapped_import(args)
        if import_call is not None:
            consumed.add(_span(import_call))
            source = _first_string_arg(import_call.child_by_field_name("arguments"))
            return LazyImport(source, line, column, wrapper, _text(node))

    return None
