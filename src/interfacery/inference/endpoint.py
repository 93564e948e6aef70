from __future__ import annotations

from typing import AbstractSet, Dict, Optional

from interfacery.domain.models import (
    EndpointDescriptor,
    InferenceConfig,
    MethodBinding,
    MethodSignature,
    ResolvedTypes,
)
from interfacery.inference.actions import infer_http_method
from interfacery.inference.paths import infer_path
from interfacery.types.resolver import resolve_types


def handler_name_for(method_name: str) -> str:
    return f"{method_name}Handler"


def unique_var_name(base: str, reserved: AbstractSet[str]) -> str:
    """First of base, base1, base2, ... not in reserved. Pure; caller tracks names."""
    name = base
    i = 1
    while name in reserved:
        name = f"{base}{i}"
        i += 1
    return name


def describe_endpoint(
    signature: MethodSignature,
    types: ResolvedTypes,
    config: InferenceConfig,
) -> EndpointDescriptor:
    param_names = [p.name for p in types.parameters]
    path = infer_path(signature.name, param_names, prefix=config.route_prefix)

    in_path = set(path.path_params)
    query = tuple(p.name for p in types.parameters if p.name.lower() not in in_path)

    return EndpointDescriptor(
        http_method=infer_http_method(signature.name, default=config.default_http_method),
        url_path=path.url_path,
        path_params=path.path_params,
        query_params=query,
        request_type=types.request_type,
        response_type=types.response_type,
        handler_name=handler_name_for(signature.name),
        unresolved_tokens=path.unresolved_tokens,
    )


def infer_endpoint(
    signature: MethodSignature,
    config: Optional[InferenceConfig] = None,
) -> EndpointDescriptor:
    """MethodSignature -> EndpointDescriptor. Raises UnsupportedTypeExpression."""
    config = config or InferenceConfig()
    return describe_endpoint(signature, resolve_types(signature, config), config)


def bind_method(
    signature: MethodSignature,
    config: Optional[InferenceConfig] = None,
) -> MethodBinding:
    config = config or InferenceConfig()
    types = resolve_types(signature, config)
    descriptor = describe_endpoint(signature, types, config)

    taken = frozenset(config.reserved_names)
    variables: Dict[str, str] = {}
    for p in types.parameters:
        var = unique_var_name(p.name or "arg", taken)
        taken = taken | {var}
        variables[p.name] = var

    return MethodBinding(
        signature=signature,
        descriptor=descriptor,
        types=types,
        variables=variables,
    )
