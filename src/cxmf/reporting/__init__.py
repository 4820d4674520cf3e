from .base import (
    DecodeStage,
    Reporter,
    get_reporter,
    get_verbosity,
    section,
    set_reporter,
    set_verbosity,
)
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

__all__ = [
    "DecodeStage",
    "Reporter",
    "get_reporter",
    "set_reporter",
    "section",
    "set_verbosity",
    "get_verbosity",
    "PlainReporter",
    "SilentReporter",
    "RichReporter",
]
