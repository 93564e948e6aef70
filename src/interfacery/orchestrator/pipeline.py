from __future__ import annotations

import hashlib
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from interfacery.config import Settings
from interfacery.domain.models import InferenceConfig, InterfaceSignatures, MethodBinding
from interfacery.errors import MalformedMember, UnsupportedTypeExpression
from interfacery.extractors.document import load_signature_document
from interfacery.extractors.golang.interfaces import extract_interfaces_from_file
from interfacery.inference.endpoint import bind_method
from interfacery.render.helpers import make_helpers, snake_case
from interfacery.render.renderer import RenderContext, load_template, render
from interfacery.repo.gomod import import_path_for
from interfacery.repo.scanner import file_declares_interface, scan_go_files

logger = logging.getLogger(__name__)

_NOT_IDENT = re.compile(r"[^a-z0-9_]+")


@dataclass(frozen=True)
class MethodFailure:
    interface_name: str
    method_name: str
    reason: str


@dataclass(frozen=True)
class CollectResult:
    interfaces: List[InterfaceSignatures]
    skipped_members: List[MalformedMember]
    files_scanned: int


@dataclass(frozen=True)
class InterfaceOutput:
    interface: InterfaceSignatures
    methods: Tuple[MethodBinding, ...]
    text: str
    output_path: str = ""  # empty on dry runs


@dataclass(frozen=True)
class GenerateResult:
    outputs: List[InterfaceOutput]
    failures: List[MethodFailure]
    skipped_members: List[MalformedMember] = field(default_factory=list)
    files_scanned: int = 0
    dest_dir: str = ""

    @property
    def endpoint_count(self) -> int:
        return sum(len(o.methods) for o in self.outputs)


def _sha1_short(text: str, n: int = 6) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()[:n]


def go_package_name(directory: Path) -> str:
    # dest dir name doubles as the generated Go package name
    name = _NOT_IDENT.sub("_", directory.name.lower()).strip("_")
    return name or "handlers"


def collect_interfaces(
    src: Path,
    interface_name: Optional[str] = None,
    ignore_dirs: Iterable[str] = (),
    max_files: int | None = None,
) -> CollectResult:
    """
    Signature provider over a Go source tree (or a single .go file).
    Members that are not methods are skipped and reported, never fatal.
    """
    src = src.resolve()
    root = src.parent if src.is_file() else src
    files = [str(src)] if src.is_file() else scan_go_files(src, ignore_dirs, max_files=max_files)

    interfaces: List[InterfaceSignatures] = []
    skipped: List[MalformedMember] = []
    for p in files:
        if not file_declares_interface(p):
            continue
        fpath = Path(p)
        rel_path = os.path.relpath(p, str(root)).replace(os.sep, "/")
        decls = extract_interfaces_from_file(
            fpath,
            interface_name=interface_name,
            import_identity=import_path_for(fpath.parent, root),
            file_path=rel_path,
        )
        for d in decls:
            interfaces.append(d.signatures)
            skipped.extend(d.skipped)

    logger.info("found %d interface(s) in %d Go file(s)", len(interfaces), len(files))
    return CollectResult(interfaces=interfaces, skipped_members=skipped, files_scanned=len(files))


def bind_interface(
    interface: InterfaceSignatures,
    config: InferenceConfig,
) -> Tuple[List[MethodBinding], List[MethodFailure]]:
    """Run inference for every method; per-method failures are recorded, not raised."""
    bindings: List[MethodBinding] = []
    failures: List[MethodFailure] = []

    for sig in interface.methods:
        try:
            binding = bind_method(sig, config)
        except UnsupportedTypeExpression as e:
            err = e.with_context(interface_name=interface.interface_name, method_name=sig.name)
            logger.warning("skipping method: %s", err)
            failures.append(MethodFailure(interface.interface_name, sig.name, str(err)))
            continue

        if binding.descriptor.unresolved_tokens:
            logger.warning(
                "%s.%s: unresolved path tokens %s emitted as literal segments",
                interface.interface_name,
                sig.name,
                list(binding.descriptor.unresolved_tokens),
            )
        bindings.append(binding)

    return bindings, failures


def render_interface(
    interface: InterfaceSignatures,
    bindings: Sequence[MethodBinding],
    config: InferenceConfig,
    output_dir_name: str,
    template_text: Optional[str] = None,
    template_name: Optional[str] = None,
) -> str:
    context = RenderContext(
        package_name=interface.package_name,
        interface_name=interface.interface_name,
        methods=tuple(bindings),
        import_name=interface.import_identity,
        output_dir_name=output_dir_name,
    )
    return render(
        context,
        template_text=template_text,
        helpers=make_helpers(config.error_types),
        template_name=template_name,
    )


def run_generate(
    interfaces: Sequence[InterfaceSignatures],
    dest_dir: Path,
    settings: Optional[Settings] = None,
    route_prefix: Optional[str] = None,
    template_path: Optional[Path] = None,
    dry_run: bool = False,
) -> GenerateResult:
    """
    Infer, render and (unless dry_run) write one handler file per interface.

    TemplateRenderError aborts the run; method-level failures do not.
    """
    settings = settings or Settings()
    config = settings.inference_config(route_prefix=route_prefix)

    template_text = load_template(template_path) if template_path else None
    template_name = str(template_path) if template_path else None
    output_dir_name = go_package_name(dest_dir)

    outputs: List[InterfaceOutput] = []
    failures: List[MethodFailure] = []
    used_filenames: dict[str, str] = {}

    for iface in interfaces:
        bindings, failed = bind_interface(iface, config)
        failures.extend(failed)
        if not bindings:
            logger.warning("%s: no methods to generate, skipping", iface.interface_name)
            continue

        text = render_interface(
            iface, bindings, config, output_dir_name,
            template_text=template_text, template_name=template_name,
        )

        stem = snake_case(iface.interface_name)
        filename = f"{stem}{settings.output_suffix}"
        owner = f"{iface.import_identity}:{iface.interface_name}"
        # collision-safe filenames
        if filename in used_filenames and used_filenames[filename] != owner:
            filename = f"{stem}__{_sha1_short(owner)}{settings.output_suffix}"
        used_filenames[filename] = owner

        out_path = ""
        if not dry_run:
            target = dest_dir / filename
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
            out_path = str(target)
            logger.info("wrote %s (%d endpoints)", target, len(bindings))

        outputs.append(
            InterfaceOutput(interface=iface, methods=tuple(bindings), text=text, output_path=out_path)
        )

    return GenerateResult(outputs=outputs, failures=failures, dest_dir=str(dest_dir))


def run_generate_from_source(
    src: Path,
    dest_dir: Path,
    settings: Optional[Settings] = None,
    interface_name: Optional[str] = None,
    route_prefix: Optional[str] = None,
    template_path: Optional[Path] = None,
    signatures_path: Optional[Path] = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Collect signatures (Go tree or signature document), then run_generate."""
    settings = settings or Settings()

    if signatures_path is not None:
        interfaces = load_signature_document(signatures_path)
        if interface_name:
            interfaces = [i for i in interfaces if i.interface_name == interface_name]
        skipped: List[MalformedMember] = []
        files_scanned = 0
    else:
        # never read back our own output
        ignore = [*settings.ignore_dirs, dest_dir.name]
        collected = collect_interfaces(src, interface_name=interface_name, ignore_dirs=ignore)
        interfaces = collected.interfaces
        skipped = collected.skipped_members
        files_scanned = collected.files_scanned

    result = run_generate(
        interfaces,
        dest_dir,
        settings=settings,
        route_prefix=route_prefix,
        template_path=template_path,
        dry_run=dry_run,
    )
    return GenerateResult(
        outputs=result.outputs,
        failures=result.failures,
        skipped_members=skipped,
        files_scanned=files_scanned,
        dest_dir=result.dest_dir,
    )
