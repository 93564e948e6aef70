from __future__ import annotations

from typing import Iterable, List, Optional

from interfacery.domain.models import (
    InferenceConfig,
    MethodSignature,
    Parameter,
    ResolvedTypes,
    ReturnValue,
)
from interfacery.errors import UnsupportedTypeExpression
from interfacery.types.expr import canonicalize

_DEFAULT_CONFIG = InferenceConfig()


def is_context_type(canonical: str, config: InferenceConfig = _DEFAULT_CONFIG) -> bool:
    return canonical in config.context_types


def is_error_type(canonical: str, config: InferenceConfig = _DEFAULT_CONFIG) -> bool:
    return canonical in config.error_types


def request_type_for(method_name: str, parameters: List[Parameter]) -> str:
    if not parameters:
        return ""
    if len(parameters) == 1:
        return parameters[0].type_expr
    return f"{method_name}Request"


def response_type_for(
    returns: Iterable[ReturnValue], config: InferenceConfig = _DEFAULT_CONFIG
) -> str:
    for r in returns:
        if not is_error_type(r.type_expr, config):
            return r.type_expr
    return ""


def resolve_types(
    signature: MethodSignature,
    config: Optional[InferenceConfig] = None,
) -> ResolvedTypes:
    """
    Canonicalize parameter/return types, split off context parameters and
    pick the request/response payload types.

    Raises UnsupportedTypeExpression (with the method name attached) when a
    type cannot be canonicalized.
    """
    config = config or _DEFAULT_CONFIG

    try:
        params: List[Parameter] = []
        has_context = signature.has_context_parameter
        for p in signature.parameters:
            t = canonicalize(p.type_expr)
            if is_context_type(t, config):
                has_context = True
                continue
            params.append(Parameter(name=p.name, type_expr=t))

        returns = [ReturnValue(type_expr=canonicalize(r.type_expr)) for r in signature.returns]
    except UnsupportedTypeExpression as e:
        raise e.with_context(method_name=signature.name) from e

    return ResolvedTypes(
        parameters=tuple(params),
        returns=tuple(returns),
        has_context=has_context,
        request_type=request_type_for(signature.name, params),
        response_type=response_type_for(returns, config),
    )
