"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "docsnippets report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "ignored", "duration_s"],
            "properties": {
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "failed": {"type": "integer"},
                "ignored": {"type": "integer"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "path", "line", "mode", "expect_panic", "status", "duration_ms"],
                "properties": {
                    "name": {"type": "string"},
                    "path": {"type": "string"},
                    "section": {"type": ["string", "null"]},
                    "line": {"type": "integer", "minimum": 0},
                    "mode": {"enum": ["run", "check", "skip"]},
                    "expect_panic": {"type": "boolean"},
                    "status": {"enum": ["passed", "failed", "ignored"]},
                    "duration_ms": {"type": "number"},
                    "error": {"type": "string"},
                    "stdout": {"type": "string"},
                    "stderr": {"type": "string"},
                },
            },
        },
    },
}
