"""Transformation engine: role-specific ordered rule pipelines.

Each rule receives the content produced by the rule before it, so the
records of one pass chain: ``records[i].after == records[i + 1].before``.
Every rule returns None when it has nothing to do, which keeps the whole
pipeline idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ngmodernize.config.schema import ModernizeConfig
from ngmodernize.files.models import AnalyzedFile, FileType
from ngmodernize.findings.models import TransformationRecord
from ngmodernize.log import ComponentLogger, get_logger
from ngmodernize.transformer.base import RuleFn, TransformContext
from ngmodernize.transformer.component import add_form_generics, add_standalone_marker
from ngmodernize.transformer.control_flow import migrate_control_flow
from ngmodernize.transformer.imports import update_import_paths
from ngmodernize.transformer.injection import replace_constructor_injection
from ngmodernize.transformer.manifest import update_dependencies
from ngmodernize.transformer.module import flag_module_wrapper
from ngmodernize.transformer.service import provide_in_root

PIPELINES: Dict[FileType, Tuple[RuleFn, ...]] = {
    FileType.UI_COMPONENT: (
        add_standalone_marker,
        replace_constructor_injection,
        add_form_generics,
        update_import_paths,
    ),
    FileType.SERVICE: (
        replace_constructor_injection,
        provide_in_root,
        update_import_paths,
    ),
    FileType.ROUTING_DESCRIPTOR: (update_import_paths,),
    FileType.OTHER: (update_import_paths,),
    FileType.TEMPLATE: (migrate_control_flow,),
    FileType.DEPENDENCY_MANIFEST: (update_dependencies,),
    FileType.MODULE_DESCRIPTOR: (flag_module_wrapper,),
}


@dataclass
class TransformResult:
    records: List[TransformationRecord] = field(default_factory=list)
    error: Optional[str] = None  # set when a rule raised; records stop there


def run_pipeline(
    file: AnalyzedFile,
    config: Optional[ModernizeConfig] = None,
    log: Optional[ComponentLogger] = None,
) -> TransformResult:
    """Run the pipeline for ``file.type`` over ``file.content``.

    A rule that raises ends the pass: the records produced before it are
    kept, and the error is logged and returned rather than propagated.
    """
    config = config or ModernizeConfig()
    log = log or get_logger("transformer")
    ctx = TransformContext(file=file, config=config, log=log)

    content = file.content
    records: List[TransformationRecord] = []
    for rule in PIPELINES.get(file.type, ()):
        try:
            record = rule(content, ctx)
        except Exception as exc:
            message = f"{rule.__name__} failed: {exc}"
            log.warning(
                "%s: %s",
                file.path,
                message,
                payload={"path": file.path, "rule": rule.__name__, "kept": len(records)},
            )
            return TransformResult(records=records, error=message)
        if record is None:
            continue
        records.append(record)
        content = record.after

    log.debug(
        "%s: %d transformation(s)",
        file.path,
        len(records),
        payload={"path": file.path, "type": file.type.value, "records": len(records)},
    )
    return TransformResult(records=records)


def transform(
    file: AnalyzedFile,
    config: Optional[ModernizeConfig] = None,
    log: Optional[ComponentLogger] = None,
) -> List[TransformationRecord]:
    """Records for one pass over *file*; errors are logged, never raised."""
    return run_pipeline(file, config, log).records
