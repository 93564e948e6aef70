from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from interfacery.domain.models import InterfaceSignatures, MethodSignature, Parameter, ReturnValue
from interfacery.errors import MalformedMember, SignatureProviderError

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# interface members; older grammars call them method_spec
_METHOD_NODES = {"method_elem", "method_spec"}
_PARAM_NODES = {"parameter_declaration", "variadic_parameter_declaration"}


@dataclass(frozen=True)
class InterfaceDecl:
    signatures: InterfaceSignatures
    line: int
    skipped: Tuple[MalformedMember, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.signatures.interface_name


def _parse(source: bytes) -> Node:
    return Parser(GO_LANGUAGE).parse(source).root_node


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _field_list(node: Node) -> List[Tuple[str, str]]:
    """
    parameter_list -> [(name, type)].

    Either every entry is named (`a, b string, c int`) or none is
    (`context.Context, string`); unnamed entries get positional names.
    """
    entries: List[Tuple[List[str], str]] = []
    for child in node.named_children:
        if child.type == "comment":
            continue
        if child.type not in _PARAM_NODES:
            raise ValueError(f"unexpected {child.type} in parameter list: {_text(child)!r}")

        type_node = child.child_by_field_name("type")
        if type_node is None:
            raise ValueError(f"parameter without a type: {_text(child)!r}")
        typ = _text(type_node)
        if child.type == "variadic_parameter_declaration":
            typ = "..." + typ
        names = [_text(n) for n in child.children_by_field_name("name")]
        entries.append((names, typ))

    named = [bool(names) for names, _ in entries]
    if any(named) and not all(named):
        raise ValueError("mixed named and unnamed parameters")

    out: List[Tuple[str, str]] = []
    for names, typ in entries:
        if not names:
            out.append((f"arg{len(out)}", typ))
        for n in names:
            out.append((n, typ))
    return out


def _results(node: Optional[Node]) -> List[str]:
    if node is None:
        return []
    if node.type == "parameter_list":
        return [typ for _, typ in _field_list(node)]
    return [_text(node)]


def _method_from_node(node: Node) -> MethodSignature:
    name_node = node.child_by_field_name("name")
    name = _text(name_node) if name_node is not None else None
    if node.has_error or name is None:
        raise MalformedMember(f"not a method signature: {_text(node)!r}", method_name=name)

    params_node = node.child_by_field_name("parameters")
    try:
        params = _field_list(params_node) if params_node is not None else []
        results = _results(node.child_by_field_name("result"))
    except ValueError as e:
        raise MalformedMember(str(e), method_name=name) from e

    has_ctx = any("".join(t.split()) == "context.Context" for _, t in params)
    return MethodSignature(
        name=name,
        parameters=tuple(Parameter(name=n, type_expr=t) for n, t in params),
        returns=tuple(ReturnValue(type_expr=t) for t in results),
        has_context_parameter=has_ctx,
    )


def _interface_members(iface: Node) -> Iterable[Node]:
    for child in iface.named_children:
        if child.type != "comment":
            yield child


def parse_method(member: str) -> MethodSignature:
    """Parse one interface member; raises MalformedMember if it is not a method."""
    root = _parse(f"package p\ntype _ interface {{\n{member}\n}}\n".encode("utf-8"))
    members: List[Node] = []
    for _, iface in _iter_interface_types(root):
        members.extend(_interface_members(iface))

    if len(members) != 1 or members[0].type not in _METHOD_NODES:
        raise MalformedMember(f"not a method signature: {member!r}")
    return _method_from_node(members[0])


def _iter_interface_types(root: Node) -> Iterable[Tuple[Node, Node]]:
    """Yield (type_spec, interface_type) for every top-level interface declaration."""
    for decl in root.named_children:
        if decl.type != "type_declaration":
            continue
        for spec in decl.named_children:
            if spec.type != "type_spec":
                continue
            typ = spec.child_by_field_name("type")
            if typ is not None and typ.type == "interface_type":
                yield spec, typ


def _package_name(root: Node) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return _text(ident)
    return ""


def extract_interfaces_from_source(
    source: str,
    interface_name: Optional[str] = None,
    import_identity: str = "",
    file_path: str = "",
) -> List[InterfaceDecl]:
    """
    Extract interface method signatures from Go source text.

    Parsed with tree-sitter; no Go toolchain is invoked. Members that are not
    methods (embedded interfaces, type-set constraints, unparseable lines)
    are skipped and recorded on the declaration.
    """
    root = _parse(source.encode("utf-8"))
    if root.has_error:
        logger.warning("%s: syntax errors, extraction is best-effort", file_path or "<source>")
    package_name = _package_name(root)

    decls: List[InterfaceDecl] = []
    for spec, iface in _iter_interface_types(root):
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            continue
        name = _text(name_node)
        if interface_name and name != interface_name:
            continue

        methods: List[MethodSignature] = []
        skipped: List[MalformedMember] = []
        for member in _interface_members(iface):
            try:
                if member.type not in _METHOD_NODES:
                    raise MalformedMember(f"not a method signature: {_text(member)!r}")
                methods.append(_method_from_node(member))
            except MalformedMember as e:
                err = e.with_context(interface_name=name)
                logger.warning("skipping member: %s", err)
                skipped.append(err)

        decls.append(
            InterfaceDecl(
                signatures=InterfaceSignatures(
                    interface_name=name,
                    import_identity=import_identity,
                    package_name=package_name,
                    file_path=file_path,
                    methods=tuple(methods),
                ),
                line=spec.start_point[0] + 1,
                skipped=tuple(skipped),
            )
        )

    # stable ordering: by declaration line
    decls.sort(key=lambda d: (d.line, d.name))
    return decls


def extract_interfaces_from_file(
    path: Path,
    interface_name: Optional[str] = None,
    import_identity: str = "",
    file_path: str = "",
    max_bytes: int = 2_000_000,
) -> List[InterfaceDecl]:
    try:
        data = path.read_bytes()[:max_bytes]
    except OSError as e:
        raise SignatureProviderError(f"cannot read {path}: {e}") from e
    source = data.decode("utf-8", errors="ignore")
    return extract_interfaces_from_source(
        source,
        interface_name=interface_name,
        import_identity=import_identity,
        file_path=file_path or str(path),
    )
