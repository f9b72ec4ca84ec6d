"""Glue helpers exposed for CLI and integration harnesses."""

from .io import (
    load_config,
    load_instance,
    load_nodes,
    validate_instance,
)
from .pipeline import (
    assemble_instance,
    build_arg_parser,
    build_params,
    load_and_run,
    main,
    run_pipeline,
)

__all__ = [
    "assemble_instance",
    "build_arg_parser",
    "build_params",
    "load_and_run",
    "load_config",
    "load_instance",
    "load_nodes",
    "main",
    "run_pipeline",
    "validate_instance",
]
