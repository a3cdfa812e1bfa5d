import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from c2cs import logging as c2cs_logging, utils
from c2cs.c_model import CAbstractSyntaxTree, load_abstract_syntax_tree
from c2cs.csharp import (CodeGenerator, CSharpMapper, EmitResult,
                         MapperOptions, MappingFailure, MappingResult)
from c2cs.csharp.code_generator import DEFAULT_USINGS

logger = c2cs_logging.get_logger(__name__)

ON_ERROR_POLICIES = ("abort", "skip")


class BindgenError(RuntimeError):
    def __init__(self, message: str, failures: tuple[MappingFailure, ...] = ()):
        super().__init__(message)
        self.failures = failures


@dataclass(frozen=True)
class BindgenRequest:
    input_file: str
    output_file: str
    library_name: Optional[str] = None
    class_name: Optional[str] = None
    namespace: Optional[str] = None
    manifest_file: Optional[str] = None


@dataclass(frozen=True)
class BindgenResponse:
    output_file_path: str
    manifest_file_path: Optional[str]
    declared_names: tuple[str, ...]
    failures: tuple[MappingFailure, ...] = ()


def _on_error_policy(config: dict) -> str:
    policy = config.get("bindgen", {}).get("on_error", "abort")
    if policy not in ON_ERROR_POLICIES:
        raise ValueError(f"Invalid bindgen.on_error value: {policy!r}, expected one of {ON_ERROR_POLICIES}")
    return policy


def check_config(config: dict) -> None:
    """Raise ValueError/TypeError for config values the bindgen step cannot use."""
    _on_error_policy(config)
    MapperOptions.from_config(config)
    if not isinstance(config.get("bindgen", {}).get("usings", []), list):
        raise TypeError("bindgen.usings must be a list of namespaces")


def generate_bindings(
    tree: CAbstractSyntaxTree,
    config: dict,
    *,
    library_name: str,
    class_name: Optional[str] = None,
    namespace: Optional[str] = None,
) -> tuple[MappingResult, EmitResult]:
    """Map and render one compilation unit without touching the file system."""
    bindgen_cfg = config.get("bindgen", {}) if config else {}
    options = MapperOptions.from_config(config)

    result = CSharpMapper(options).map(tree)
    generator = CodeGenerator(
        library_name=library_name,
        class_name=class_name or bindgen_cfg.get("class_name") or None,
        namespace=namespace or bindgen_cfg.get("namespace") or None,
        usings=bindgen_cfg.get("usings", DEFAULT_USINGS),
        fixed_buffer_types=options.fixed_buffer_types,
    )
    return result, generator.generate(result.tree)


def write_manifest(path: str, library_name: str, class_name: str, declared_names: tuple[str, ...]) -> None:
    manifest = {
        "library": library_name,
        "class": class_name,
        "declarations": list(declared_names),
    }
    utils.save_code(path, json.dumps(manifest, indent=2) + "\n")


def manifest_path_for(request: BindgenRequest, config: dict) -> Optional[str]:
    """Explicit manifest path, or ``<output stem>.manifest.json`` when ``bindgen.manifest`` is on."""
    if request.manifest_file is not None:
        return request.manifest_file
    bindgen_cfg = config.get("bindgen", {}) if config else {}
    if not bindgen_cfg.get("manifest", False):
        return None
    output = Path(request.output_file)
    return str(output.with_name(f"{output.stem}.manifest.json"))


def _check_output_paths(request: BindgenRequest, manifest_path: Optional[str]) -> None:
    input_path = Path(request.input_file).resolve()
    output_path = Path(request.output_file).resolve()
    if output_path == input_path:
        raise BindgenError(f"output file {request.output_file} would overwrite the input model")
    if manifest_path is None:
        return
    resolved = Path(manifest_path).resolve()
    if resolved == input_path:
        raise BindgenError(f"manifest {manifest_path} would overwrite the input model")
    if resolved == output_path:
        raise BindgenError(f"manifest {manifest_path} would overwrite the output file")


def run_bindgen(request: BindgenRequest, config: dict) -> BindgenResponse:
    bindgen_cfg = config.get("bindgen", {}) if config else {}
    policy = _on_error_policy(config)
    manifest_path = manifest_path_for(request, config)
    _check_output_paths(request, manifest_path)

    tree = load_abstract_syntax_tree(request.input_file)
    library_name = request.library_name or bindgen_cfg.get("library_name") or Path(request.input_file).stem
    class_name = request.class_name or bindgen_cfg.get("class_name") or library_name
    logger.info("Generating C# bindings for %s (%d declarations)", library_name, len(tree))

    result, emitted = generate_bindings(
        tree,
        config,
        library_name=library_name,
        class_name=class_name,
        namespace=request.namespace,
    )

    if result.any_failed:
        for failure in result.failures:
            logger.warning("Could not map %s", failure)
        if policy == "abort":
            raise BindgenError(
                f"{len(result.failures)} declaration(s) of {request.input_file} could not be mapped",
                result.failures,
            )
        logger.warning("Skipped %d declaration(s) that could not be mapped", len(result.failures))

    utils.save_code(request.output_file, emitted.source)
    logger.info("Wrote %s", request.output_file)

    if manifest_path is not None:
        write_manifest(manifest_path, library_name, class_name, emitted.declared_names)
        logger.info("Wrote manifest %s", manifest_path)

    return BindgenResponse(
        output_file_path=request.output_file,
        manifest_file_path=manifest_path,
        declared_names=emitted.declared_names,
        failures=result.failures,
    )
