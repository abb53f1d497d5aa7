"""CLI module for edge-addon-action.

This module provides the command-line interface for the action.
It supports both CLI arguments and environment variables for configuration.
"""

from .main import (
    PublishConfig,
    build_config,
    cli,
    evaluate_boolean,
    main,
    run_pipeline,
)

__all__ = [
    "cli",
    "main",
    "PublishConfig",
    "build_config",
    "run_pipeline",
    "evaluate_boolean",
]
