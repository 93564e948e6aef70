from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from jinja2 import Environment, StrictUndefined, TemplateError

from interfacery.domain.models import MethodBinding
from interfacery.errors import TemplateRenderError
from interfacery.render.helpers import DEFAULT_HELPERS, TemplateHelpers

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE_NAME = "handler.go.j2"


@dataclass(frozen=True)
class RenderContext:
    """Everything a template can bind to, besides the helpers."""

    package_name: str
    interface_name: str
    methods: Sequence[MethodBinding]
    import_name: str = ""
    output_dir_name: str = ""

    def bindings(self) -> Dict[str, Any]:
        return {
            "PackageName": self.package_name,
            "InterfaceName": self.interface_name,
            "Methods": list(self.methods),
            "ImportName": self.import_name,
            "OutputDirName": self.output_dir_name,
        }


def default_template_text() -> str:
    return (TEMPLATES_DIR / DEFAULT_TEMPLATE_NAME).read_text(encoding="utf-8")


def load_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateRenderError(f"cannot read template: {e}", template_name=str(path)) from e


def _environment(helpers: TemplateHelpers) -> Environment:
    # fresh environment per render: helper registries are never shared between runs
    env = Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    mapping = helpers.as_mapping()
    env.globals.update(mapping)
    env.filters.update(mapping)
    return env


def render(
    context: RenderContext,
    template_text: Optional[str] = None,
    helpers: TemplateHelpers = DEFAULT_HELPERS,
    template_name: Optional[str] = None,
) -> str:
    """
    Render one interface's handler skeleton.

    Pure text substitution. An undefined binding or helper (or a template
    that does not compile) raises TemplateRenderError naming the template.
    """
    if template_text is None:
        template_text = default_template_text()
        template_name = template_name or DEFAULT_TEMPLATE_NAME
    name = template_name or "<template>"

    env = _environment(helpers)
    try:
        template = env.from_string(template_text)
        return template.render(**context.bindings())
    except TemplateError as e:
        raise TemplateRenderError(
            str(e.message or e), template_name=name, interface_name=context.interface_name
        ) from e
