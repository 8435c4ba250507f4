"""JSON schema definitions for level and manifest files.

Schemas check document shape and value ranges only. Cross-document rules
(matrix dimensions, unique numbers, profile resolution) are enforced by
LevelValidator on the typed model.
"""

_COLOR = {
    "type": "array",
    "items": {"type": "number", "minimum": 0.0, "maximum": 1.0},
    "minItems": 3,
    "maxItems": 4,
}

_OPTIONAL_REF = {"type": ["string", "null"], "minLength": 1}

PRESENTATION_SCHEMA = {
    "type": "object",
    "required": ["level_number"],
    "properties": {
        "level_number": {"type": "integer", "minimum": 1},
        "ground_profile": _OPTIONAL_REF,
        "background_profile": _OPTIONAL_REF,
        "sidewall_profile": _OPTIONAL_REF,
        "tint": {"anyOf": [_COLOR, {"type": "null"}]},
        "notes": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

LEVEL_SCHEMA = {
    "type": "object",
    "required": ["number", "matrix"],
    "properties": {
        "number": {"type": "integer", "minimum": 1},
        # Row/column counts are a validator concern, not a schema one
        "matrix": {
            "type": "array",
            "items": {"type": "array", "items": {"type": "integer", "minimum": 0, "maximum": 255}},
        },
        "gravity": {
            "anyOf": [
                {"type": "array", "items": {"type": "number"}, "minItems": 3, "maxItems": 3},
                {"type": "null"},
            ]
        },
        "presentation": {"anyOf": [PRESENTATION_SCHEMA, {"type": "null"}]},
    },
    "additionalProperties": False,
}

_PAIR = {"type": "array", "items": {"type": "number"}, "minItems": 2, "maxItems": 2}

PROFILE_SCHEMA = {
    "type": "object",
    "required": ["id", "albedo_path"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "albedo_path": {"type": "string"},
        "normal_path": {"type": ["string", "null"]},
        "roughness": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.5},
        "metallic": {"type": "number", "minimum": 0.0, "maximum": 1.0, "default": 0.0},
        "uv_scale": {
            "type": "array",
            "items": {"type": "number", "exclusiveMinimum": 0.0},
            "minItems": 2,
            "maxItems": 2,
        },
        "uv_offset": _PAIR,
        "fallback_chain": {"type": "array", "items": {"type": "string", "minLength": 1}},
    },
    "additionalProperties": False,
}

TYPE_VARIANT_SCHEMA = {
    "type": "object",
    "required": ["object_class", "type_id", "profile_id"],
    "properties": {
        "object_class": {"type": "string", "enum": ["Ball", "Brick"]},
        "type_id": {"type": "integer", "minimum": 0, "maximum": 255},
        "profile_id": {"type": "string", "minLength": 1},
        "emissive_color": {"anyOf": [_COLOR, {"type": "null"}]},
        "animation": {
            "anyOf": [
                {
                    "type": "object",
                    "required": ["kind"],
                    "properties": {
                        "kind": {"type": "string", "minLength": 1},
                        "params": {"type": "object"},
                    },
                    "additionalProperties": False,
                },
                {"type": "null"},
            ]
        },
    },
    "additionalProperties": False,
}

MANIFEST_SCHEMA = {
    "type": "object",
    "required": ["profiles"],
    "properties": {
        "profiles": {"type": "array", "items": PROFILE_SCHEMA},
        "type_variants": {"type": "array", "items": TYPE_VARIANT_SCHEMA},
        "level_overrides": {"type": "array", "items": PRESENTATION_SCHEMA},
        "level_switch": {
            "anyOf": [
                {
                    "type": "object",
                    "properties": {
                        "ordered_levels": {"type": "array", "items": {"type": "integer", "minimum": 1}},
                    },
                    "additionalProperties": False,
                },
                {"type": "null"},
            ]
        },
    },
    "additionalProperties": False,
}
