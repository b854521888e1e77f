# app_export/core/validation_engine.py
"""Validation of raw application descriptors"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import jsonschema

_IMAGE_INFO_SCHEMA = {
    "type": "object",
    "properties": {
        "hub_url": {"type": "string"},
        "hub_user": {"type": "string"},
        "hub_password": {"type": "string"},
        "namespace": {"type": "string"},
        "is_trust": {"type": "boolean"},
    },
}

DESCRIPTOR_SCHEMA = {
    "type": "object",
    "required": ["app_name", "app_version"],
    "properties": {
        "app_id": {"type": "string"},
        "app_name": {"type": "string", "minLength": 1},
        "app_version": {"type": ["string", "number"]},
        "description": {"type": "string"},
        "annotations": {"type": "object"},
        "components": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["component_id"],
                "properties": {
                    "component_id": {"type": "string", "minLength": 1},
                    "display_name": {"type": "string"},
                    "share_image": {"type": "string"},
                    "image_info": _IMAGE_INFO_SCHEMA,
                    "cpu": {"type": ["integer", "null"], "minimum": 0},
                    "memory": {"type": ["integer", "null"], "minimum": 0},
                    "ports": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["container_port"],
                            "properties": {
                                "container_port": {"type": "integer", "minimum": 1, "maximum": 65535},
                                "protocol": {"type": "string"},
                            },
                        },
                    },
                    "volumes": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["mount_path"],
                            "properties": {"mount_path": {"type": "string"}},
                        },
                    },
                    "envs": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["name"],
                            "properties": {"name": {"type": "string"}},
                        },
                    },
                    "probes": {"type": "array", "items": {"type": "object"}},
                    "labels": {"type": "object"},
                    "replicas": {"type": "integer", "minimum": 0},
                },
            },
        },
        "plugins": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["plugin_id"],
                "properties": {
                    "plugin_id": {"type": "string", "minLength": 1},
                    "share_image": {"type": "string"},
                    "image_info": _IMAGE_INFO_SCHEMA,
                },
            },
        },
    },
}


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)

    def __str__(self) -> str:
        lines = []

        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  ✗ {error}")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  ⚠ {warning}")

        if self.is_valid and not self.warnings:
            lines.append("✓ All validations passed")

        return '\n'.join(lines)


class ValidationEngine:
    """Execute descriptor validation"""

    def validate_descriptor(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate a raw descriptor mapping

        Args:
            data: Descriptor as loaded from JSON/YAML

        Returns:
            ValidationResult
        """
        result = ValidationResult()

        validator = jsonschema.Draft7Validator(DESCRIPTOR_SCHEMA)
        for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
            location = "/".join(str(p) for p in error.path) or "<root>"
            result.add_error(f"{location}: {error.message}")

        if not result.is_valid:
            return result

        components = data.get("components") or []
        if not components:
            result.add_warning("Descriptor has no components")

        seen = set()
        for component in components:
            component_id = component["component_id"]
            if component_id in seen:
                result.add_error(f"Duplicate component_id: {component_id}")
            seen.add(component_id)
            if not component.get("share_image"):
                result.add_warning(f"Component {component_id} has no image")

        return result
