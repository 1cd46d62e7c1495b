"""Go type resolution over tree-sitter syntax trees.

``TypeResolver`` answers two questions about an expression in a file:
which declared object it denotes, and what type it has. Identifiers are
resolved through local scopes, the file's imports, the package scope and
the universe, in that order. Types are type *expressions* (see
``gosym.types.objects.Type``), followed to their underlying form only when
a member lookup or an element type needs it.

Resolution is best effort. Anything it cannot determine (cgo, dot imports,
generic instantiation, unresolvable imports) yields None rather than an
error, and nested resolution is bounded so cyclic declarations terminate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

import structlog

from gosym.config.constants import CGO_PSEUDO_PACKAGE, MAX_EMBED_DEPTH, MAX_RESOLVE_DEPTH
from gosym.packages.models import ObjectKey, Package, object_key
from gosym.parsing.treesitter import (
    SourceFile,
    field_nodes,
    has_token,
    named_children,
    node_text,
    same_node,
)
from gosym.symbols.kinds import ObjectKind
from gosym.types import scope
from gosym.types.declare import (
    BLANK,
    declare_function,
    declare_type_specs,
    declare_value_specs,
    value_for,
)
from gosym.types.objects import SIGNATURE_NODE_TYPES, SLICE, Declaration, DeclForm, Object, Type
from gosym.types.universe import Universe, get_universe

logger = structlog.get_logger()

PackageLoader = Callable[[str], "Package | None"]

IDENTIFIER_TYPES = frozenset(
    {"identifier", "type_identifier", "field_identifier", "package_identifier"}
)
KEYWORD_VALUE_TYPES = frozenset({"true", "false", "nil", "iota"})

COMPARISON_OPERATORS = frozenset({"==", "!=", "<", "<=", ">", ">=", "&&", "||"})

_LITERAL_TYPES = {
    "int_literal": "int",
    "float_literal": "float64",
    "imaginary_literal": "complex128",
    "rune_literal": "rune",
    "interpreted_string_literal": "string",
    "raw_string_literal": "string",
}

# type nodes that only wrap a single inner type
_TRANSPARENT_TYPES = frozenset({"parenthesized_type", "type_constraint", "type_elem"})


def guess_package_name(import_path: str) -> str:
    """Package name to assume for an import that cannot be loaded."""
    return import_path.rstrip("/").rsplit("/", 1)[-1]


class TypeResolver:
    """Resolves identifiers and expression types for a set of packages.

    Args:
        load_package: Returns the package for an import path, or None if it
            cannot be loaded. Usually ``PackageCache.get``.
        universe: Predeclared scope. Defaults to the shared universe.

    Packages reach the resolver either through ``load_package`` or through
    ``bind``; only files of known packages can be resolved against a package
    scope.
    """

    def __init__(self, load_package: PackageLoader, universe: Universe | None = None) -> None:
        self._load_package = load_package
        self.universe = universe or get_universe()
        self._file_packages: dict[str, Package] = {}
        self._locals: dict[ObjectKey, Object] = {}
        self._case_objects: dict[tuple[ObjectKey, int], Object] = {}
        self._declared_constructs: set[ObjectKey] = set()
        self._imports: dict[ObjectKey, Object] = {}
        self._depth = 0
        self.bind(self.universe.package)

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    def bind(self, package: Package) -> None:
        """Make ``package``'s files resolvable against its scope."""
        for file in package.files:
            self._file_packages.setdefault(file.path, package)

    def package_of(self, file: SourceFile) -> Package | None:
        return self._file_packages.get(file.path)

    def load(self, import_path: str) -> Package | None:
        if import_path == CGO_PSEUDO_PACKAGE:
            return None
        package = self._load_package(import_path)
        if package is not None:
            self.bind(package)
        return package

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    def lookup(self, node: Any, file: SourceFile) -> Object | None:
        """The object an identifier node denotes, or None."""
        if node.type in KEYWORD_VALUE_TYPES:
            return self.universe.lookup(node.type)
        if node.type not in IDENTIFIER_TYPES:
            return None
        name = node_text(node)
        if name == BLANK:
            return None
        package = self.package_of(file)

        declared = self._declared_object(node, file, package)
        if declared is not None:
            return declared
        if node.type == "field_identifier":
            # fields and methods are only reachable through a selector
            return None
        if node.type != "package_identifier":
            for binding in scope.visible_bindings(node):
                if node_text(binding.name) != name:
                    continue
                if binding.clause is not None:
                    return self._case_object(binding.name, binding.clause, file, package)
                obj = self._declared_object(binding.name, file, package)
                if obj is not None:
                    return obj
        imported = self._import_object(name, file)
        if imported is not None or node.type == "package_identifier":
            return imported
        if package is not None:
            obj = package.lookup(name)
            if obj is not None:
                return obj
        return self.universe.lookup(name)

    def declare_init(self, decl: Any, file: SourceFile) -> Object | None:
        """Declare the object of an ``init`` function.

        ``init`` functions are never entered in the package scope, so their
        names resolve only after this call.
        """
        declared = declare_function(decl, file, self.package_of(file))
        if declared is None:
            return None
        name, obj = declared
        return self._locals.setdefault(object_key(file, name), obj)

    def _declared_object(self, node: Any, file: SourceFile, package: Package | None) -> Object | None:
        if package is not None:
            obj = package.object_at(file, node)
            if obj is not None:
                return obj
        key = object_key(file, node)
        if key in self._locals:
            return self._locals[key]
        construct = scope.declaring_construct(node)
        if construct is None:
            if node.type == "type_identifier":
                self._declare_receiver_type_params(node, file, package)
            return self._locals.get(key)
        if construct.type not in ("function_declaration", "method_declaration"):
            self._declare_construct(construct, file, package)
        return self._locals.get(key)

    def _declare_receiver_type_params(self, node: Any, file: SourceFile, package: Package | None) -> None:
        method = node.parent
        while method is not None and method.type != "method_declaration":
            if method.type in ("block", "source_file"):
                return
            method = method.parent
        if method is None:
            return
        receiver = method.child_by_field_name("receiver")
        if receiver is None:
            return
        for name in scope.receiver_type_parameters(method):
            self._register(
                file,
                name,
                Object(
                    name=node_text(name),
                    kind=ObjectKind.TYPE,
                    pos=file.position(name),
                    node=name,
                    decl=Declaration(DeclForm.TYPE_PARAM, file, receiver),
                    package=package,
                ),
            )

    def _register(self, file: SourceFile, name: Any, obj: Object) -> None:
        self._locals.setdefault(object_key(file, name), obj)

    def _declare_construct(self, construct: Any, file: SourceFile, package: Package | None) -> None:
        ckey = object_key(file, construct)
        if ckey in self._declared_constructs:
            return
        self._declared_constructs.add(ckey)
        t = construct.type

        if t in ("const_declaration", "var_declaration"):
            for name, obj in declare_value_specs(construct, file, package):
                self._register(file, name, obj)
        elif t == "type_declaration":
            for name, obj in declare_type_specs(construct, file, package):
                self._register(file, name, obj)
        elif t == "short_var_declaration":
            self._declare_short_vars(construct, file, package)
        elif t in ("range_clause", "receive_statement"):
            form = DeclForm.RANGE if t == "range_clause" else DeclForm.RECEIVE
            value = construct.child_by_field_name("right")
            for i, name in enumerate(scope.identifiers(construct.child_by_field_name("left"))):
                decl = Declaration(form, file, construct, value_node=value, index=i)
                self._register(file, name, self._new_object(name, ObjectKind.VAR, decl, file, package))
        elif t == "type_switch_statement":
            value = construct.child_by_field_name("value")
            for name in scope.identifiers(construct.child_by_field_name("alias")):
                decl = Declaration(DeclForm.TYPE_SWITCH, file, construct, value_node=value)
                self._register(file, name, self._new_object(name, ObjectKind.VAR, decl, file, package))
        elif t == "parameter_list":
            for param in named_children(construct):
                if param.type not in ("parameter_declaration", "variadic_parameter_declaration"):
                    continue
                form = DeclForm.VARIADIC if param.type.startswith("variadic") else DeclForm.PARAM
                type_node = param.child_by_field_name("type")
                for name in field_nodes(param, "name"):
                    decl = Declaration(form, file, param, type_node=type_node)
                    self._register(file, name, self._new_object(name, ObjectKind.VAR, decl, file, package))
        elif t == "type_parameter_list":
            for param in named_children(construct):
                if param.type != "type_parameter_declaration":
                    continue
                constraint = param.child_by_field_name("type")
                for name in field_nodes(param, "name"):
                    decl = Declaration(DeclForm.TYPE_PARAM, file, param, type_node=constraint)
                    self._register(file, name, self._new_object(name, ObjectKind.TYPE, decl, file, package))
        elif t == "field_declaration":
            type_node = construct.child_by_field_name("type")
            for name in field_nodes(construct, "name"):
                decl = Declaration(DeclForm.FIELD, file, construct, type_node=type_node)
                self._register(file, name, self._new_object(name, ObjectKind.VAR, decl, file, package))
        elif t in ("method_elem", "method_spec"):
            name = construct.child_by_field_name("name")
            if name is not None:
                decl = Declaration(DeclForm.METHOD_ELEM, file, construct)
                self._register(file, name, self._new_object(name, ObjectKind.FUNC, decl, file, package))

    def _declare_short_vars(self, stmt: Any, file: SourceFile, package: Package | None) -> None:
        right = stmt.child_by_field_name("right")
        values = named_children(right) if right is not None else []
        names = scope.identifiers(stmt.child_by_field_name("left"))
        for i, name in enumerate(names):
            text = node_text(name)
            if text == BLANK:
                continue
            earlier = self._earlier_binding(stmt, text, file, package)
            if earlier is not None:
                # redeclaration assigns to the existing variable
                self._locals[object_key(file, name)] = earlier
                continue
            value, index = value_for(values, len(names), i)
            decl = Declaration(DeclForm.VAR, file, stmt, value_node=value, index=index)
            self._register(file, name, self._new_object(name, ObjectKind.VAR, decl, file, package))

    def _earlier_binding(self, stmt: Any, name: str, file: SourceFile, package: Package | None) -> Object | None:
        """A variable of the same block that a short variable declaration redeclares."""
        block = stmt.parent
        if block is None or block.type not in scope.BLOCK_TYPES:
            return None
        for earlier in named_children(block):
            if earlier.end_byte > stmt.start_byte:
                break
            for candidate in scope.statement_names(earlier):
                if node_text(candidate) == name:
                    return self._declared_object(candidate, file, package)
        body = block.parent if block.type == "statement_list" else block
        fn = body.parent if body is not None else None
        if fn is not None and fn.type in scope.FUNCTION_TYPES and same_node(fn.child_by_field_name("body"), body):
            for candidate in scope.function_body_names(fn):
                if node_text(candidate) == name:
                    return self._declared_object(candidate, file, package)
        return None

    def _new_object(
        self, name: Any, kind: ObjectKind, decl: Declaration, file: SourceFile, package: Package | None
    ) -> Object:
        return Object(
            name=node_text(name),
            kind=kind,
            pos=file.position(name),
            node=name,
            decl=decl,
            package=package,
        )

    def _case_object(self, alias: Any, clause: Any, file: SourceFile, package: Package | None) -> Object:
        key = (object_key(file, alias), clause.start_byte)
        obj = self._case_objects.get(key)
        if obj is None:
            stmt = clause.parent
            types = field_nodes(clause, "type") if clause.type == "type_case" else []
            type_node = types[0] if len(types) == 1 and node_text(types[0]) != "nil" else None
            value = stmt.child_by_field_name("value") if stmt is not None else None
            decl = Declaration(DeclForm.TYPE_SWITCH, file, clause, type_node=type_node, value_node=value)
            obj = self._new_object(alias, ObjectKind.VAR, decl, file, package)
            self._case_objects[key] = obj
        return obj

    def _import_object(self, name: str, file: SourceFile) -> Object | None:
        unaliased = []
        for spec in file.imports:
            if spec.is_dot or spec.is_blank:
                continue
            if spec.name is None:
                unaliased.append(spec)
            elif spec.name == name:
                return self._package_object(spec, name, file)
        for spec in unaliased:
            package = self.load(spec.path)
            package_name = package.name if package is not None else guess_package_name(spec.path)
            if package_name == name:
                return self._package_object(spec, name, file)
        return None

    def _package_object(self, spec: Any, name: str, file: SourceFile) -> Object:
        key = object_key(file, spec.node)
        obj = self._imports.get(key)
        if obj is None:
            obj = Object(
                name=name,
                kind=ObjectKind.PACKAGE,
                pos=file.position(spec.node),
                node=spec.node,
                decl=Declaration(DeclForm.IMPORT, file, spec.node),
                package=self.package_of(file),
                import_path=spec.path,
            )
            self._imports[key] = obj
        return obj

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def expr_type(self, node: Any, file: SourceFile) -> tuple[Object | None, Type | None]:
        """Resolve an expression to the object it denotes (if any) and its type."""
        if node.type in IDENTIFIER_TYPES or node.type in KEYWORD_VALUE_TYPES:
            obj = self.lookup(node, file)
            return obj, self.type_of_object(obj) if obj is not None else None
        if node.type in ("selector_expression", "qualified_type"):
            return self._selector(node, file)
        return None, self.type_of(node, file)

    def _selector(self, node: Any, file: SourceFile) -> tuple[Object | None, Type | None]:
        if node.type == "qualified_type":
            operand, selected = node.child_by_field_name("package"), node.child_by_field_name("name")
        else:
            operand, selected = node.child_by_field_name("operand"), node.child_by_field_name("field")
        if operand is None or selected is None:
            return None, None
        base = self.type_of(operand, file)
        if base is None:
            return None, None
        name = node_text(selected)
        if base.kind is ObjectKind.PACKAGE:
            obj = base.package.lookup(name) if base.package is not None else None
            return obj, self.type_of_object(obj) if obj is not None else None
        member = self.lookup_member(base, name)
        if member is None:
            return None, None
        return member

    def type_of_object(self, obj: Object) -> Type | None:
        """Type of a declared object, or None when it cannot be determined."""
        decl = obj.decl
        if obj.kind is ObjectKind.PACKAGE:
            package = self.load(obj.import_path) if obj.import_path else None
            return Type(
                ObjectKind.PACKAGE,
                decl.node if decl is not None else None,
                decl.file if decl is not None else None,
                package=package,
            )
        if decl is None:
            return None
        if decl.form is DeclForm.PREDECLARED:
            return self.universe.keyword_type(obj.name)
        if obj.kind is ObjectKind.TYPE:
            return Type(ObjectKind.TYPE, obj.node, decl.file)
        if obj.kind is ObjectKind.FUNC:
            return Type(ObjectKind.FUNC, decl.node, decl.file)

        if decl.form is DeclForm.RANGE:
            t = self._range_type(decl.value_node, decl.file, decl.index)
        elif decl.type_node is not None:
            t = Type(obj.kind, decl.type_node, decl.file)
            if decl.form is DeclForm.VARIADIC:
                t = t.slice_of()
            elif decl.form is DeclForm.FIELD and is_embedded_pointer(decl.node):
                t = t.pointer_to()
        elif decl.value_node is not None:
            t = self.type_of(decl.value_node, decl.file, decl.index)
        else:
            t = None
        return t.with_kind(obj.kind) if t is not None else None

    def type_of(self, node: Any, file: SourceFile, index: int = 0) -> Type | None:
        """Type of an expression; ``index`` selects a value of a multi-value expression."""
        if node is None:
            return None
        if self._depth >= MAX_RESOLVE_DEPTH:
            logger.debug("resolve.depth_exceeded", file=file.path, node=node.type)
            return None
        self._depth += 1
        try:
            return self._infer(node, file, index)
        finally:
            self._depth -= 1

    def _infer(self, node: Any, file: SourceFile, index: int) -> Type | None:
        t = node.type
        if t in ("parenthesized_expression", "literal_element"):
            inner = named_children(node)
            return self.type_of(inner[0], file, index) if inner else None
        if t in IDENTIFIER_TYPES or t in KEYWORD_VALUE_TYPES or t in ("selector_expression", "qualified_type"):
            _, typ = self.expr_type(node, file)
            return typ
        if t in _LITERAL_TYPES:
            return self.universe.type_named(_LITERAL_TYPES[t])
        if t == "call_expression":
            return self._call_type(node, file, index)
        if t == "composite_literal":
            type_node = node.child_by_field_name("type")
            return Type(ObjectKind.VAR, type_node, file) if type_node is not None else None
        if t == "func_literal":
            return Type(ObjectKind.VAR, node, file)
        if t in ("type_conversion_expression", "type_assertion_expression"):
            if t == "type_assertion_expression" and index == 1:
                return self.universe.type_named("bool")
            type_node = node.child_by_field_name("type")
            return Type(ObjectKind.VAR, type_node, file) if type_node is not None else None
        if t == "unary_expression":
            return self._unary_type(node, file, index)
        if t == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is not None and node_text(operator) in COMPARISON_OPERATORS:
                return self.universe.type_named("bool")
            left = self.type_of(node.child_by_field_name("left"), file)
            return left if left is not None else self.type_of(node.child_by_field_name("right"), file)
        if t == "index_expression":
            if index == 1:
                return self.universe.type_named("bool")
            operand = self.type_of(node.child_by_field_name("operand"), file)
            return self._element_type(operand) if operand is not None else None
        if t == "slice_expression":
            operand = self.type_of(node.child_by_field_name("operand"), file)
            if operand is not None and self._is_predeclared(self.underlying(operand), "string"):
                return operand
            return self._slice_of_array(operand) if operand is not None else None
        return None

    def _unary_type(self, node: Any, file: SourceFile, index: int) -> Type | None:
        operator = node.child_by_field_name("operator")
        op = node_text(operator) if operator is not None else ""
        operand = self.type_of(node.child_by_field_name("operand"), file)
        if op == "!":
            return self.universe.type_named("bool")
        if operand is None:
            return None
        if op == "&":
            return operand.pointer_to()
        if op == "*":
            if operand.kind is ObjectKind.TYPE:
                # (*T) in a method expression
                return operand.pointer_to()
            return self._dereference(operand)
        if op == "<-":
            if index == 1:
                return self.universe.type_named("bool")
            return self._channel_element(operand)
        return operand

    def _call_type(self, call: Any, file: SourceFile, index: int) -> Type | None:
        fn = call.child_by_field_name("function")
        if fn is None:
            return None
        arguments = call.child_by_field_name("arguments")
        args = named_children(arguments) if arguments is not None else []
        while fn.type == "parenthesized_expression" and named_children(fn):
            fn = named_children(fn)[0]

        if fn.type in IDENTIFIER_TYPES:
            obj = self.lookup(fn, file)
            if obj is not None and self.universe.contains(obj):
                builtin = self._builtin_call_type(obj.name, args, file)
                if builtin is not None:
                    return builtin
        callee = self.type_of(fn, file)
        if callee is None:
            return None
        if callee.kind is ObjectKind.TYPE:
            # conversion T(x)
            return replace(callee, kind=ObjectKind.VAR)
        signature = self._signature(callee)
        if signature is None:
            return None
        results = self._results(signature)
        return results[index] if index < len(results) else None

    def _builtin_call_type(self, name: str, args: list[Any], file: SourceFile) -> Type | None:
        if not args:
            return None
        if name == "new":
            return Type(ObjectKind.VAR, args[0], file).pointer_to()
        if name == "make":
            return Type(ObjectKind.VAR, args[0], file)
        if name in ("append", "min", "max"):
            return self.type_of(args[0], file)
        if name == "complex":
            return self.universe.type_named("complex128")
        if name in ("real", "imag"):
            return self.universe.type_named("float64")
        return None

    def _signature(self, t: Type) -> Type | None:
        if t.wrappers or t.node is None:
            return None
        if t.node.type in SIGNATURE_NODE_TYPES:
            return t
        under = self.underlying(t)
        if not under.wrappers and under.node is not None and under.node.type == "function_type":
            return under
        return None

    def _results(self, signature: Type) -> list[Type]:
        result = signature.node.child_by_field_name("result")
        if result is None:
            return []
        if result.type != "parameter_list":
            return [Type(ObjectKind.VAR, result, signature.file)]
        results: list[Type] = []
        for param in named_children(result):
            type_node = param.child_by_field_name("type")
            if type_node is None:
                continue
            count = max(1, len(field_nodes(param, "name")))
            results.extend([Type(ObjectKind.VAR, type_node, signature.file)] * count)
        return results

    # -------------------------------------------------------------------------
    # Underlying types and members
    # -------------------------------------------------------------------------

    def underlying(self, t: Type) -> Type:
        """Follow named types to the type literal they are defined by.

        Types with wrappers are already literal. Stops at predeclared types,
        type parameters without a constraint, and anything unresolvable.
        """
        current = t
        for _ in range(MAX_RESOLVE_DEPTH):
            node = current.node
            if current.wrappers or node is None or current.file is None:
                return current
            if node.type in _TRANSPARENT_TYPES:
                inner = named_children(node)
                if len(inner) != 1:
                    return current
                current = replace(current, node=inner[0])
                continue
            if node.type == "generic_type":
                base = node.child_by_field_name("type")
                if base is None:
                    return current
                current = replace(current, node=base)
                continue
            obj = self._type_name_object(node, current.file)
            if obj is None or obj.decl is None or obj.decl.type_node is None:
                return current
            following = obj.decl.type_node
            if obj.decl.file.path == current.file.path and same_node(following, node):
                return current
            current = Type(current.kind, following, obj.decl.file)
        return current

    def _type_name_object(self, node: Any, file: SourceFile) -> Object | None:
        if node.type in ("type_identifier", "identifier"):
            obj = self.lookup(node, file)
        elif node.type == "qualified_type":
            obj, _ = self.expr_type(node, file)
        else:
            return None
        return obj if obj is not None and obj.kind is ObjectKind.TYPE else None

    def _named_type(self, t: Type) -> Object | None:
        """The defined type a type expression names, looking through aliases."""
        if t.wrappers or t.file is None:
            return None
        node, file = t.node, t.file
        for _ in range(MAX_EMBED_DEPTH):
            if node is None:
                return None
            if node.type in _TRANSPARENT_TYPES:
                inner = named_children(node)
                node = inner[0] if len(inner) == 1 else None
                continue
            if node.type == "generic_type":
                node = node.child_by_field_name("type")
                continue
            obj = self._type_name_object(node, file)
            if obj is None or obj.decl is None:
                return None
            if obj.decl.node.type == "type_alias" and obj.decl.type_node is not None:
                node, file = obj.decl.type_node, obj.decl.file
                continue
            return obj
        return None

    def lookup_member(self, t: Type, name: str) -> tuple[Object, Type | None] | None:
        """Find a method, field or interface method ``name`` of a type.

        One level of pointer indirection is stripped first. Fields and
        methods of embedded types are promoted, shallowest first.
        """
        return self._member(t.depointer(), name, 0)

    def _member(self, t: Type, name: str, depth: int) -> tuple[Object, Type | None] | None:
        if depth > MAX_EMBED_DEPTH:
            return None
        named = self._named_type(t)
        if named is not None and self._is_package_level(named):
            method = named.package.method(named.name, name)
            if method is not None:
                return method, self.type_of_object(method)

        under = self.underlying(t)
        node = under.node
        if under.wrappers or node is None or under.file is None:
            return None
        if node.type == "struct_type":
            return self._struct_member(under, name, depth)
        if node.type == "interface_type":
            return self._interface_member(under, name, depth)
        return None

    def _is_package_level(self, obj: Object) -> bool:
        package = obj.package
        return (
            package is not None
            and obj.decl is not None
            and obj.decl.form is DeclForm.TYPE
            and package.object_at(obj.decl.file, obj.node) is obj
        )

    def _struct_member(self, struct: Type, name: str, depth: int) -> tuple[Object, Type | None] | None:
        file = struct.file
        package = self.package_of(file)
        embedded: list[tuple[Any, Type]] = []
        for field in self._struct_fields(struct.node):
            names = field_nodes(field, "name")
            type_node = field.child_by_field_name("type")
            if names:
                for field_name in names:
                    if node_text(field_name) == name:
                        obj = self._declared_object(field_name, file, package)
                        if obj is not None:
                            return obj, self.type_of_object(obj)
                continue
            if type_node is None:
                continue
            embedded_type = Type(ObjectKind.VAR, type_node, file)
            if has_token(field, "*"):
                embedded_type = embedded_type.pointer_to()
            if embedded_name(type_node) == name:
                obj = self._embedded_field(field, type_node, name, file, package)
                return obj, self.type_of_object(obj)
            embedded.append((field, embedded_type))
        for _, embedded_type in embedded:
            found = self._member(embedded_type.depointer(), name, depth + 1)
            if found is not None:
                return found
        return None

    def _struct_fields(self, struct_node: Any) -> list[Any]:
        for child in named_children(struct_node):
            if child.type == "field_declaration_list":
                return [f for f in named_children(child) if f.type == "field_declaration"]
        return []

    def _embedded_field(self, field: Any, type_node: Any, name: str, file: SourceFile, package: Package | None) -> Object:
        key = object_key(file, field)
        obj = self._locals.get(key)
        if obj is None:
            decl = Declaration(DeclForm.FIELD, file, field, type_node=type_node)
            obj = Object(
                name=name,
                kind=ObjectKind.VAR,
                pos=file.position(type_node),
                node=type_node,
                decl=decl,
                package=package,
            )
            self._locals[key] = obj
        return obj

    def _interface_member(self, iface: Type, name: str, depth: int) -> tuple[Object, Type | None] | None:
        file = iface.file
        package = self.package_of(file)
        embedded: list[Any] = []
        for elem in named_children(iface.node):
            if elem.type in ("method_elem", "method_spec"):
                elem_name = elem.child_by_field_name("name")
                if elem_name is not None and node_text(elem_name) == name:
                    obj = self._declared_object(elem_name, file, package)
                    if obj is not None:
                        return obj, self.type_of_object(obj)
            elif elem.type in ("type_elem", "constraint_elem", "interface_type_name"):
                embedded.extend(named_children(elem))
            elif elem.type in ("type_identifier", "qualified_type"):
                embedded.append(elem)
        for type_node in embedded:
            found = self._member(Type(ObjectKind.VAR, type_node, file), name, depth + 1)
            if found is not None:
                return found
        return None

    # -------------------------------------------------------------------------
    # Element types
    # -------------------------------------------------------------------------

    def _is_predeclared(self, t: Type, name: str) -> bool:
        return (
            not t.wrappers
            and t.node is not None
            and t.file is self.universe.file
            and node_text(t.node) == name
        )

    def _dereference(self, t: Type) -> Type | None:
        stripped = t.depointer()
        if stripped is not t:
            return stripped
        under = self.underlying(t)
        stripped = under.depointer()
        return stripped if stripped is not under else None

    def _channel_element(self, t: Type) -> Type | None:
        under = self.underlying(t)
        if under.wrappers or under.node is None or under.node.type != "channel_type":
            return None
        value = under.node.child_by_field_name("value")
        return Type(ObjectKind.VAR, value, under.file) if value is not None else None

    def _container(self, t: Type) -> Type:
        under = self.underlying(t)
        stripped = under.depointer()
        # pointers to arrays index and range like arrays
        if stripped is not under:
            array = self.underlying(stripped)
            if not array.wrappers and array.node is not None and array.node.type == "array_type":
                return array
        return under

    def _element_type(self, t: Type) -> Type | None:
        """Type of ``x[i]``."""
        under = self._container(t)
        if under.wrappers:
            return replace(under, wrappers=under.wrappers[1:]) if under.wrappers[0] == SLICE else None
        node = under.node
        if node is None:
            return None
        if node.type in ("slice_type", "array_type", "implicit_length_array_type"):
            element = node.child_by_field_name("element")
            return Type(ObjectKind.VAR, element, under.file) if element is not None else None
        if node.type == "map_type":
            value = node.child_by_field_name("value")
            return Type(ObjectKind.VAR, value, under.file) if value is not None else None
        if self._is_predeclared(under, "string"):
            return self.universe.type_named("byte")
        return None

    def _slice_of_array(self, t: Type) -> Type | None:
        under = self._container(t)
        if not under.wrappers and under.node is not None and under.node.type == "array_type":
            element = under.node.child_by_field_name("element")
            if element is not None:
                return Type(ObjectKind.VAR, element, under.file).slice_of()
        return t

    def _range_type(self, value: Any, file: SourceFile, index: int) -> Type | None:
        """Type of the ``index``-th iteration variable of ``range value``."""
        if value is None:
            return None
        t = self.type_of(value, file)
        if t is None:
            return None
        under = self._container(t)
        node = under.node
        int_type = self.universe.type_named("int")
        if under.wrappers:
            return int_type if index == 0 else self._element_type(under)
        if node is None:
            return None
        if node.type == "map_type":
            key = node.child_by_field_name("key" if index == 0 else "value")
            return Type(ObjectKind.VAR, key, under.file) if key is not None else None
        if node.type == "channel_type":
            return self._channel_element(under) if index == 0 else None
        if self._is_predeclared(under, "string"):
            return int_type if index == 0 else self.universe.type_named("rune")
        if node.type in ("slice_type", "array_type", "implicit_length_array_type"):
            return int_type if index == 0 else self._element_type(under)
        if index == 0:
            # range over an integer
            return t
        return None


def embedded_name(type_node: Any) -> str:
    """Field name an embedded type declares: the unqualified type name."""
    node = type_node
    while node is not None:
        if node.type in ("type_identifier", "identifier"):
            return node_text(node)
        if node.type == "qualified_type":
            name = node.child_by_field_name("name")
            return node_text(name) if name is not None else ""
        if node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type in ("pointer_type", "parenthesized_type"):
            inner = named_children(node)
            node = inner[0] if inner else None
        else:
            return ""
    return ""


def is_embedded_pointer(field: Any) -> bool:
    """Whether a field declaration embeds a pointer type (``*T``)."""
    return not field_nodes(field, "name") and has_token(field, "*")
