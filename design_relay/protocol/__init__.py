from .parser import parse_frame
from .envelope import (
    dumps,
    build_join_ack,
    build_error_notice,
    build_join_envelope,
    build_error_envelope,
    build_result_envelope,
    build_system_envelope,
    build_command_envelope,
    build_progress_envelope,
)

__all__ = [
    "build_command_envelope",
    "build_error_envelope",
    "build_error_notice",
    "build_join_ack",
    "build_join_envelope",
    "build_progress_envelope",
    "build_result_envelope",
    "build_system_envelope",
    "dumps",
    "parse_frame",
]
