from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# input records also accept camelCase keys (interfaceName, typeExpr, ...)
_INPUT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Parameter(BaseModel):
    model_config = _INPUT_CONFIG

    name: str
    type_expr: str


class ReturnValue(BaseModel):
    model_config = _INPUT_CONFIG

    type_expr: str


class MethodSignature(BaseModel):
    """One interface method as handed over by a signature provider. Never mutated."""

    model_config = _INPUT_CONFIG

    name: str
    parameters: tuple[Parameter, ...] = ()
    returns: tuple[ReturnValue, ...] = ()
    has_context_parameter: bool = False


class InterfaceSignatures(BaseModel):
    """Input contract record: one interface and its methods, in declaration order."""

    model_config = _INPUT_CONFIG

    interface_name: str
    import_identity: str = ""
    package_name: str = ""
    file_path: str = ""
    methods: tuple[MethodSignature, ...] = ()


class EndpointDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    http_method: HttpMethod
    url_path: str                            # always starts with "/"
    path_params: tuple[str, ...] = ()        # order of occurrence in url_path
    query_params: tuple[str, ...] = ()
    request_type: str = ""
    response_type: str = ""
    handler_name: str = ""
    unresolved_tokens: tuple[str, ...] = ()  # "By" tokens emitted as literal segments


class ResolvedTypes(BaseModel):
    """Type resolver output: canonical types with context params split off."""

    model_config = ConfigDict(frozen=True)

    parameters: tuple[Parameter, ...] = ()   # non-context, canonical types
    returns: tuple[ReturnValue, ...] = ()    # canonical types
    has_context: bool = False
    request_type: str = ""
    response_type: str = ""


class MethodBinding(BaseModel):
    """
    One element of the template's `Methods`: a descriptor together with the
    signature it came from. Attribute shortcuts keep templates short.
    """

    model_config = ConfigDict(frozen=True)

    signature: MethodSignature
    descriptor: EndpointDescriptor
    types: ResolvedTypes
    variables: dict[str, str] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.signature.name

    @property
    def http_method(self) -> str:
        return self.descriptor.http_method

    @property
    def url_path(self) -> str:
        return self.descriptor.url_path

    @property
    def handler_name(self) -> str:
        return self.descriptor.handler_name

    @property
    def path_params(self) -> tuple[str, ...]:
        return self.descriptor.path_params

    @property
    def query_params(self) -> tuple[str, ...]:
        return self.descriptor.query_params

    @property
    def request_type(self) -> str:
        return self.descriptor.request_type

    @property
    def response_type(self) -> str:
        return self.descriptor.response_type

    @property
    def has_context(self) -> bool:
        return self.types.has_context

    @property
    def params(self) -> tuple[Parameter, ...]:
        return self.types.parameters

    @property
    def returns(self) -> tuple[ReturnValue, ...]:
        return self.types.returns

    @property
    def non_path_params(self) -> tuple[Parameter, ...]:
        in_path = set(self.descriptor.path_params)
        return tuple(p for p in self.types.parameters if p.name.lower() not in in_path)

    def param_for(self, path_param: str) -> Optional[Parameter]:
        # path params are lower-cased name combinations
        for p in self.types.parameters:
            if p.name.lower() == path_param:
                return p
        return None

    def var(self, param_name: str) -> str:
        return self.variables.get(param_name, param_name)


@dataclass(frozen=True)
class InferenceConfig:
    """Immutable knobs for the inference core; built from Settings."""

    route_prefix: str = ""
    default_http_method: str = "GET"
    context_types: frozenset[str] = field(default_factory=lambda: frozenset({"context.Context"}))
    error_types: frozenset[str] = field(default_factory=lambda: frozenset({"error"}))
    reserved_names: frozenset[str] = field(
        default_factory=lambda: frozenset({"r", "w", "ctx", "h", "err", "req"})
    )
