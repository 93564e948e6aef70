from __future__ import annotations

from typing import Optional


class InterfaceryError(Exception):
    """Base class for all interfacery errors."""

    def __init__(
        self,
        message: str,
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> None:
        self.message = message
        self.interface_name = interface_name
        self.method_name = method_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        where = ".".join(p for p in (self.interface_name, self.method_name) if p)
        if where:
            return f"{where}: {self.message}"
        return self.message

    def with_context(
        self,
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> "InterfaceryError":
        """Return a copy of this error with the interface/method filled in."""
        return type(self)(
            self.message,
            interface_name=interface_name or self.interface_name,
            method_name=method_name or self.method_name,
        )


class MalformedMember(InterfaceryError):
    """An interface member that is not a method signature (e.g. embedded interface)."""


class UnsupportedTypeExpression(InterfaceryError):
    """A type expression the resolver cannot canonicalize."""

    def __init__(
        self,
        message: str,
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
        type_text: str = "",
    ) -> None:
        self.type_text = type_text
        super().__init__(message, interface_name=interface_name, method_name=method_name)

    def with_context(
        self,
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> "UnsupportedTypeExpression":
        return UnsupportedTypeExpression(
            self.message,
            interface_name=interface_name or self.interface_name,
            method_name=method_name or self.method_name,
            type_text=self.type_text,
        )


class TemplateRenderError(InterfaceryError):
    """
    Raised when a template references an undefined binding or helper,
    or cannot be compiled. Fatal for the whole generation run.
    """

    def __init__(
        self,
        message: str,
        template_name: str = "",
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> None:
        self.template_name = template_name
        super().__init__(message, interface_name=interface_name, method_name=method_name)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.template_name:
            return f"template {self.template_name!r}: {base}"
        return base

    def with_context(
        self,
        interface_name: Optional[str] = None,
        method_name: Optional[str] = None,
    ) -> "TemplateRenderError":
        return TemplateRenderError(
            self.message,
            template_name=self.template_name,
            interface_name=interface_name or self.interface_name,
            method_name=method_name or self.method_name,
        )


class SignatureProviderError(InterfaceryError):
    """Signature source could not be read or validated. Fatal for the run."""


class ConfigurationError(InterfaceryError):
    """Settings from the environment or .env failed validation."""
