# python/oceanforge/shading.py
# Reflectance, Fresnel and foam parameters shared by every water method
# Exists so each material embeds its own copy of one well-known shading bundle
# RELEVANT FILES: python/oceanforge/uniforms.py, python/oceanforge/surface.py, tests/test_shading.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from . import _validate
from .colors import WHITE, Rgba, rgba_u8, to_rgba

DEEP_OCEAN: Rgba = rgba_u8(0, 43, 77, 255)

_COLOR_FIELDS = ("ambient", "diffuse_reflectance", "specular_reflectance", "tip_color")


@dataclass
class Fresnel:
    """Fresnel rim term: color, bias, strength and falloff exponent."""

    color: Rgba = WHITE
    bias: float = 0.24
    strength: float = 0.12
    shininess: float = 6.7

    def __post_init__(self) -> None:
        self.color = to_rgba(self.color, "fresnel.color")

    def validate(self) -> None:
        _validate.color4("fresnel.color", self.color)
        _validate.unit_interval("fresnel.bias", self.bias)
        _validate.unit_interval("fresnel.strength", self.strength)
        _validate.non_negative("fresnel.shininess", self.shininess)

    def to_dict(self) -> dict:
        return {
            "color": list(self.color),
            "bias": self.bias,
            "strength": self.strength,
            "shininess": self.shininess,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["Fresnel"] = None) -> "Fresnel":
        base = copy.deepcopy(default) if default is not None else cls()
        for key, value in data.items():
            if key == "color":
                base.color = to_rgba(value, "fresnel.color")
            elif key in {"bias", "strength", "shininess"}:
                setattr(base, key, _validate.as_float(f"fresnel.{key}", value))
            else:
                raise ValueError(f"Unknown fresnel parameter: {key!r}")
        return base


@dataclass
class ShadingModel:
    """Surface shading coefficients consumed by every water shader.

    Colors are sRGB-encoded RGBA in [0, 1]; the packing layer converts them
    to linear space. Fields are mutated in place and only checked when
    :meth:`validate` is called.
    """

    ambient: Rgba = DEEP_OCEAN
    diffuse_reflectance: Rgba = DEEP_OCEAN
    specular_reflectance: Rgba = WHITE
    shininess: float = 2.0
    fresnel: Fresnel = field(default_factory=Fresnel)
    tip_color: Rgba = WHITE
    tip_attenuation: float = 6.0

    def __post_init__(self) -> None:
        for name in _COLOR_FIELDS:
            setattr(self, name, to_rgba(getattr(self, name), name))

    def validate(self) -> None:
        for name in _COLOR_FIELDS:
            _validate.color4(name, getattr(self, name))
        _validate.non_negative("shininess", self.shininess)
        _validate.non_negative("tip_attenuation", self.tip_attenuation)
        self.fresnel.validate()

    def copy(self) -> "ShadingModel":
        return copy.deepcopy(self)

    def set_color(self, name: str, value: Any) -> None:
        """Assign one of the color fields from hex, RGB or RGBA input."""
        if name == "fresnel_color":
            self.fresnel.color = to_rgba(value, name)
            return
        if name not in _COLOR_FIELDS:
            raise ValueError(f"Unknown shading color: {name!r}")
        setattr(self, name, to_rgba(value, name))

    def set_colors_rgb8(self, **colors: Any) -> None:
        """Commit 8-bit RGB colors as picked in a color editor; alpha becomes opaque."""
        for name, rgb in colors.items():
            if len(rgb) != 3:
                raise ValueError(f"{name} must be an (R, G, B) triple of 8-bit values")
            self.set_color(name, rgba_u8(rgb[0], rgb[1], rgb[2], 255))

    def to_dict(self) -> dict:
        return {
            "ambient": list(self.ambient),
            "diffuse_reflectance": list(self.diffuse_reflectance),
            "specular_reflectance": list(self.specular_reflectance),
            "shininess": self.shininess,
            "fresnel": self.fresnel.to_dict(),
            "tip_color": list(self.tip_color),
            "tip_attenuation": self.tip_attenuation,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["ShadingModel"] = None) -> "ShadingModel":
        base = copy.deepcopy(default) if default is not None else cls()
        for key, value in data.items():
            if key in _COLOR_FIELDS:
                base.set_color(key, value)
            elif key in {"shininess", "tip_attenuation"}:
                setattr(base, key, _validate.as_float(key, value))
            elif key == "fresnel":
                if not isinstance(value, Mapping):
                    raise TypeError("shading.fresnel must be a mapping")
                base.fresnel = Fresnel.from_mapping(value, base.fresnel)
            else:
                raise ValueError(f"Unknown shading parameter: {key!r}")
        return base

    def flatten(self) -> Dict[str, Any]:
        """Shading values keyed by uniform field name, in packing order."""
        return {
            "ambient": self.ambient,
            "diffuse_reflectance": self.diffuse_reflectance,
            "specular_reflectance": self.specular_reflectance,
            "shininess": self.shininess,
            "fresnel_color": self.fresnel.color,
            "fresnel_bias": self.fresnel.bias,
            "fresnel_strength": self.fresnel.strength,
            "fresnel_shininess": self.fresnel.shininess,
            "tip_attenuation": self.tip_attenuation,
            "tip_color": self.tip_color,
        }
