from plantprop.utils.validation import (
    normalize_environment,
    normalize_zone,
    soft_sanitize,
    validate_propagation_form,
)

VALID = {"plant_id": "snake-plant", "zone": "9a", "maturity": "young", "environment": "inside"}


def test_valid_form():
    payload, errors = validate_propagation_form(VALID)
    assert errors == {}
    assert payload == VALID


def test_missing_fields_are_reported_per_field():
    payload, errors = validate_propagation_form({})
    assert payload == {}
    assert set(errors) == {"plant_id", "zone", "maturity", "environment"}
    assert errors["zone"] == "Growing zone is required."


def test_environment_synonyms():
    assert normalize_environment("Indoors") == "inside"
    assert normalize_environment("outdoor") == "outside"
    assert normalize_environment("GREENHOUSE") == "greenhouse"
    assert normalize_environment("moon") == ""

    payload, errors = validate_propagation_form({**VALID, "environment": "outdoors"})
    assert errors == {}
    assert payload["environment"] == "outside"


def test_zone_normalization_and_validation():
    assert normalize_zone(" Zone 9A ") == "9a"
    payload, errors = validate_propagation_form({**VALID, "zone": "10B"})
    assert payload["zone"] == "10b"

    _, errors = validate_propagation_form({**VALID, "zone": "14c"})
    assert "zone" in errors


def test_invalid_maturity_and_plant_id():
    _, errors = validate_propagation_form({**VALID, "maturity": "ancient", "plant_id": "<script>"})
    assert set(errors) == {"maturity", "plant_id"}


def test_soft_sanitize():
    assert soft_sanitize("  pothos<>  golden ") == "pothos golden"
    assert soft_sanitize(None) == ""
    assert len(soft_sanitize("a" * 500)) == 80
