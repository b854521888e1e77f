"""Tests for descriptor validation"""

from app_export.core.validation_engine import ValidationEngine


def _validate(data):
    return ValidationEngine().validate_descriptor(data)


def test_valid_descriptor(descriptor):
    result = _validate(descriptor.to_dict())

    assert result.is_valid
    assert result.errors == []
    assert "All validations passed" in str(result)


def test_missing_required_fields():
    result = _validate({"components": []})

    assert not result.is_valid
    assert any("app_name" in error for error in result.errors)
    assert any("app_version" in error for error in result.errors)


def test_error_location_points_into_components():
    result = _validate({
        "app_name": "x",
        "app_version": "1",
        "components": [{"component_id": "web", "ports": [{"container_port": 70000}]}],
    })

    assert not result.is_valid
    assert result.errors[0].startswith("components/0/ports/0/container_port")


def test_duplicate_component_ids():
    result = _validate({
        "app_name": "x",
        "app_version": "1",
        "components": [
            {"component_id": "web", "share_image": "a"},
            {"component_id": "web", "share_image": "b"},
        ],
    })

    assert result.errors == ["Duplicate component_id: web"]


def test_empty_app_and_missing_image_are_warnings():
    assert _validate({"app_name": "x", "app_version": "1"}).warnings == [
        "Descriptor has no components"
    ]

    result = _validate({
        "app_name": "x",
        "app_version": "1",
        "components": [{"component_id": "web"}],
    })
    assert result.is_valid
    assert result.warnings == ["Component web has no image"]
