# python/oceanforge/uniforms.py
# Fixed-layout uniform records for the sum-of-sines, FBM and spectrum water shaders
# Exists as the single place where field order and scalar widths match the WGSL structs
# RELEVANT FILES: python/oceanforge/sum_waves.py, python/oceanforge/fbm_waves.py, python/oceanforge/spectrum.py, tests/test_uniforms.py
"""Uniform packing.

Records follow WGSL uniform address-space layout rules:

- ``f32`` / ``u32``: size 4, align 4
- ``vec4<f32>``: size 16, align 16
- ``mat3x3<f32>``: three 16-byte columns, size 48, align 16
- arrays: element stride rounded up to 16
- struct size rounded up to the largest member alignment

Reordering a field here is a breaking change for every shader reading the
record. Colors are packed in linear space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np

from . import _validate
from .colors import srgb_to_linear
from .fbm_waves import FBM_DOMAINS, FBM_PARAMETERS, FbmWaterMaterial
from .shading import ShadingModel
from .spectrum import FftWaterMaterial, SpectrumSettings, SpectrumUniform, derive
from .sum_waves import SumWaterMaterial

# kind -> (numpy base type, element shape, size, align, WGSL type)
_KINDS: Dict[str, Tuple[str, Tuple[int, ...], int, int, str]] = {
    "f32": ("<f4", (), 4, 4, "f32"),
    "u32": ("<u4", (), 4, 4, "u32"),
    "vec4": ("<f4", (4,), 16, 16, "vec4<f32>"),
    "mat3x3": ("<f4", (3, 4), 48, 16, "mat3x3<f32>"),
}

_COLOR_FIELDS = frozenset({"ambient", "diffuse_reflectance", "specular_reflectance", "fresnel_color", "tip_color"})

SHADING_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("ambient", "vec4"),
    ("diffuse_reflectance", "vec4"),
    ("specular_reflectance", "vec4"),
    ("shininess", "f32"),
    ("fresnel_color", "vec4"),
    ("fresnel_bias", "f32"),
    ("fresnel_strength", "f32"),
    ("fresnel_shininess", "f32"),
    ("tip_attenuation", "f32"),
    ("tip_color", "vec4"),
)

SPECTRUM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("scale", "f32"),
    ("angle", "f32"),
    ("spread_blend", "f32"),
    ("swell", "f32"),
    ("alpha", "f32"),
    ("peak_omega", "f32"),
    ("gamma", "f32"),
    ("short_waves_fade", "f32"),
)


def _round_up(value: int, align: int) -> int:
    return (value + align - 1) // align * align


@dataclass(frozen=True)
class UniformField:
    """One member of a uniform struct."""

    name: str
    kind: str
    offset: int
    count: Optional[int] = None

    @property
    def wgsl_type(self) -> str:
        base = _KINDS[self.kind][4]
        return base if self.count is None else f"array<{base}, {self.count}>"

    @property
    def size(self) -> int:
        _, _, size, align, _ = _KINDS[self.kind]
        if self.count is None:
            return size
        return _round_up(size, 16) * self.count


class UniformLayout:
    """Builder computing WGSL offsets for an ordered list of members."""

    def __init__(self, name: str):
        self.name = name
        self._fields: List[UniformField] = []
        self._cursor = 0
        self._align = 4

    def add(self, name: str, kind: str, count: Optional[int] = None) -> "UniformLayout":
        if kind not in _KINDS:
            raise ValueError(f"Unsupported uniform member type: {kind!r}")
        if any(f.name == name for f in self._fields):
            raise ValueError(f"Duplicate uniform member: {name!r}")
        _, _, _, align, _ = _KINDS[kind]
        if count is not None:
            if count <= 0:
                raise ValueError("array length must be > 0")
            if align < 16:
                raise ValueError(f"arrays of {kind} are not supported in uniform records")
        offset = _round_up(self._cursor, align)
        member = UniformField(name, kind, offset, count)
        self._fields.append(member)
        self._cursor = offset + member.size
        self._align = max(self._align, align)
        return self

    def extend(self, members: Tuple[Tuple[str, str], ...]) -> "UniformLayout":
        for name, kind in members:
            self.add(name, kind)
        return self

    @property
    def fields(self) -> Tuple[UniformField, ...]:
        return tuple(self._fields)

    @property
    def size(self) -> int:
        return _round_up(self._cursor, self._align)

    def dtype(self) -> np.dtype:
        formats = []
        for f in self._fields:
            base, shape, _, _, _ = _KINDS[f.kind]
            if f.count is not None:
                shape = (f.count,) + shape
            formats.append((base, shape) if shape else base)
        return np.dtype(
            {
                "names": [f.name for f in self._fields],
                "formats": formats,
                "offsets": [f.offset for f in self._fields],
                "itemsize": self.size,
            }
        )

    def wgsl(self) -> str:
        """WGSL struct declaration matching this layout."""
        lines = [f"struct {self.name} {{"]
        lines.extend(f"    {f.name}: {f.wgsl_type}," for f in self._fields)
        lines.append("};")
        return "\n".join(lines)


@dataclass(frozen=True)
class UniformRecord:
    """Packed bytes plus the layout needed to read them back."""

    name: str
    data: bytes
    dtype: np.dtype
    fields: Tuple[UniformField, ...]

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def layout(self) -> List[Tuple[str, int, str]]:
        return [(f.name, f.offset, f.wgsl_type) for f in self.fields]

    def as_array(self) -> np.ndarray:
        """Raw float32 view; u32 members appear as their bit patterns."""
        return np.frombuffer(self.data, dtype=np.float32)

    def field(self, name: str) -> Union[np.ndarray, np.generic]:
        if name not in self.dtype.names:
            raise KeyError(name)
        value = np.frombuffer(self.data, dtype=self.dtype)[0][name]
        for f in self.fields:
            if f.name == name and f.kind == "mat3x3":
                return np.array(value)[..., :3]
        return value

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in self.fields:
            value = self.field(f.name)
            out[f.name] = value.tolist() if isinstance(value, np.ndarray) else value.item()
        return out

    def hex(self) -> str:
        return self.data.hex()


def _pack(layout: UniformLayout, values: Mapping[str, Any]) -> UniformRecord:
    dtype = layout.dtype()
    missing = [f.name for f in layout.fields if f.name not in values]
    if missing:
        raise ValueError(f"{layout.name}: missing values for {', '.join(missing)}")
    record = np.zeros(1, dtype=dtype)
    for f in layout.fields:
        value = values[f.name]
        if f.kind == "u32":
            record[f.name] = np.uint32(_validate.u32(f"{layout.name}.{f.name}", value))
            continue
        if f.kind == "mat3x3":
            mats = np.asarray(value, dtype=np.float32).reshape(((f.count,) if f.count else ()) + (3, 3))
            padded = np.zeros(mats.shape[:-1] + (4,), dtype=np.float32)
            padded[..., :3] = mats
            value = padded
        arr = np.asarray(value, dtype=np.float32)
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"{layout.name}.{f.name} is not finite: {value!r}")
        record[f.name] = arr
    return UniformRecord(layout.name, record.tobytes(), dtype, layout.fields)


def _shading_values(shading: ShadingModel) -> Dict[str, Any]:
    values = shading.flatten()
    for name in _COLOR_FIELDS:
        values[name] = srgb_to_linear(values[name])
    return values


def sum_layout(wave_count: int) -> UniformLayout:
    layout = UniformLayout("SumWaterMaterial")
    layout.add("time", "f32")
    layout.add("waves", "mat3x3", count=wave_count)
    return layout.extend(SHADING_FIELDS)


def fbm_layout() -> UniformLayout:
    layout = UniformLayout("FbmWaterMaterial").add("time", "f32").extend(SHADING_FIELDS)
    for domain in FBM_DOMAINS:
        for param in FBM_PARAMETERS:
            layout.add(f"{domain}_{param}", "u32" if param == "wave_count" else "f32")
    return layout


def spectrum_layout() -> UniformLayout:
    return UniformLayout("SpectrumParameters").extend(SPECTRUM_FIELDS)


def fft_layout() -> UniformLayout:
    return UniformLayout("FftWaterMaterial").add("time", "f32").extend(SHADING_FIELDS).extend(SPECTRUM_FIELDS)


def pack_sum(material: SumWaterMaterial) -> UniformRecord:
    values = _shading_values(material.shading)
    values["time"] = material.time
    values["waves"] = material.waves.as_matrices()
    return _pack(sum_layout(len(material.waves)), values)


def pack_fbm(material: FbmWaterMaterial) -> UniformRecord:
    values = _shading_values(material.shading)
    values["time"] = material.time
    values.update(material.fbm_config.to_dict())
    return _pack(fbm_layout(), values)


def pack_spectrum(spectrum: Union[SpectrumSettings, SpectrumUniform]) -> UniformRecord:
    derived = derive(spectrum) if isinstance(spectrum, SpectrumSettings) else spectrum
    return _pack(spectrum_layout(), derived.to_dict())


def pack_fft(material: FftWaterMaterial) -> UniformRecord:
    values = _shading_values(material.shading)
    values["time"] = material.time
    values.update(material.spectrum_uniform().to_dict())
    return _pack(fft_layout(), values)


def pack(record: Any) -> UniformRecord:
    """Pack any water material or spectrum record into its uniform layout."""
    if isinstance(record, SumWaterMaterial):
        return pack_sum(record)
    if isinstance(record, FbmWaterMaterial):
        return pack_fbm(record)
    if isinstance(record, FftWaterMaterial):
        return pack_fft(record)
    if isinstance(record, (SpectrumSettings, SpectrumUniform)):
        return pack_spectrum(record)
    raise TypeError(f"Cannot pack {type(record).__name__} into a uniform record")
