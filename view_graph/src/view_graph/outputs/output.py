import json
from typing import Any, Union

from view_graph.models.class_models import ClassDescriptor, MethodDescriptor
from view_graph.models.view_models import ViewDependencyTree, ViewReference


# --- Plain-data export ---------------------------------------------------------

def method_to_dict(m: MethodDescriptor) -> dict[str, Any]:
    return {
        "name": m.name,
        "line": m.line,
        "visibility": m.visibility,
        "visibilityText": m.visibility_text,
        "isStatic": m.is_static,
        "isAbstract": m.is_abstract,
        "nullableReturnType": m.nullable_return_type,
        "returnType": m.return_type,
        "signature": m.signature_texts,
        "parameters": [
            {
                "name": p.name,
                "type": p.type,
                "nullable": p.nullable,
                "variadic": p.variadic,
                "byReference": p.by_reference,
                "default": p.default,
            } for p in m.parameters
        ],
    }


def class_to_dict(ci: ClassDescriptor) -> dict[str, Any]:
    return {
        "name": ci.name,
        "offset": ci.offset,
        "line": ci.line,
        "kind": ci.kind.value if ci.kind else None,
        "isAbstract": ci.is_abstract,
        "methods": [method_to_dict(m) for m in ci.methods],
    }


def reference_to_dict(ref: ViewReference) -> dict[str, Any]:
    out = {
        "name": ref.name,
        "file": ref.file,
        "lineNumber": ref.line_number,
        "directive": ref.directive,
        "line": ref.line.rstrip("\r\n"),
        "literal": ref.literal,
        "cycle": ref.cycle,
        "truncated": ref.truncated,
        "children": None,
    }
    if ref.children is not None:
        out["children"] = {name: reference_to_dict(child) for name, child in ref.children.items()}
    return out


def tree_to_dict(tree: ViewDependencyTree) -> dict[str, Any]:
    return {
        "views": {name: reference_to_dict(ref) for name, ref in tree.roots.items()},
        "names": tree.names,
    }


def to_json(item: Union[ClassDescriptor, ViewDependencyTree]) -> str:
    """
    Serializes a class descriptor or a view tree to JSON for the reporting side.
    """
    if isinstance(item, ClassDescriptor):
        out = class_to_dict(item)
    else:
        out = tree_to_dict(item)
    return json.dumps(out, indent=2)
