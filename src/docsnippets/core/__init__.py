"""Core models and helpers exposed at the package level."""
from .classifier import parse_info_string
from .extractor import clean_code_line, extract_cases, extract_cases_from_file
from .models import FAILED, IGNORED, OUTCOMES, PASSED, CodeBlockFlags, TestCase
from .naming import base_name, derive_name, sanitize
from .project import ScratchProject
from .results import CaseResult, RunReport, RunSummary

__all__ = [
    "FAILED",
    "IGNORED",
    "OUTCOMES",
    "PASSED",
    "CaseResult",
    "CodeBlockFlags",
    "RunReport",
    "RunSummary",
    "ScratchProject",
    "TestCase",
    "base_name",
    "clean_code_line",
    "derive_name",
    "extract_cases",
    "extract_cases_from_file",
    "parse_info_string",
    "sanitize",
]
