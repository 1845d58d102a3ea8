"""Identify a C compiler and its version from its predefined macros.

The macros are given as a mapping from name to value. A name that is
present counts as defined. Its value may be an int, a bool, a C integer
literal such as ``"0x5100"`` or ``"201710L"``, or a plain string for the
few macros that carry text. Version numbers are encoded the way the
identification binary lays them out: eight digit characters per
component.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_DIGITS = 8


def encode_dec(n: int) -> str:
    """Encode ``n`` as eight decimal digit characters (lowest eight digits)."""
    if n < 0:
        raise ValueError(f"cannot encode a negative number: {n}")
    return "".join(str((n // 10**power) % 10) for power in reversed(range(_DIGITS)))


def encode_hex(n: int) -> str:
    """Encode ``n`` as eight characters, one per nibble, offset from ``'0'``.

    Nibbles above 9 map past ``'9'`` (10 becomes ``':'``), exactly as the
    identification binary writes them.
    """
    if n < 0:
        raise ValueError(f"cannot encode a negative number: {n}")
    return "".join(
        chr(ord("0") + ((n >> shift) & 0xF)) for shift in range(28, -1, -4)
    )


@dataclass(frozen=True)
class CompilerId:
    """A detected compiler: its name, encoded version parts and what it simulates."""

    id: str = ""
    version: str | None = None
    major: str | None = None
    minor: str | None = None
    patch: str | None = None
    tweak: str | None = None
    internal: str | None = None
    internal_str: str | None = None
    simulate_id: str | None = None
    simulate_major: str | None = None
    simulate_minor: str | None = None
    simulate_patch: str | None = None
    simulate_tweak: str | None = None

    def version_string(self) -> str | None:
        """The ``INFO:compiler_version[...]`` record, or None without a version."""
        if self.version is not None:
            return f"INFO:compiler_version[{self.version}]"
        if self.major is None:
            return None
        body = _join_parts(self.major, self.minor, self.patch, self.tweak)
        return f"INFO:compiler_version[{body}]"

    def simulate_version_string(self) -> str | None:
        """The ``INFO:simulate_version[...]`` record, or None if nothing is simulated."""
        if self.simulate_major is None:
            return None
        body = _join_parts(
            self.simulate_major,
            self.simulate_minor,
            self.simulate_patch,
            self.simulate_tweak,
        )
        return f"INFO:simulate_version[{body}]"


def _join_parts(
    major: str, minor: str | None, patch: str | None, tweak: str | None
) -> str:
    # Each later part only counts when all earlier ones are present.
    parts = [major]
    for part in (minor, patch, tweak):
        if part is None:
            break
        parts.append(part)
    return ".".join(parts)


class _Macros:
    """Preprocessor-style view of a macro mapping."""

    def __init__(self, macros: Mapping[str, Any]) -> None:
        self._macros = dict(macros)

    def defined(self, *names: str) -> bool:
        return any(name in self._macros for name in names)

    def __call__(self, name: str) -> int:
        """The integer value of a macro; undefined macros are 0."""
        if name not in self._macros:
            return 0
        return _to_int(name, self._macros[name])

    def text(self, name: str) -> str:
        value = self._macros[name]
        if isinstance(value, str):
            stripped = value.strip()
            if len(stripped) >= 2 and stripped[0] == stripped[-1] == '"':
                return stripped[1:-1]
            return stripped
        return str(value)


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        literal = value.strip().rstrip("uUlL")
        if literal == "":
            return 0
        try:
            if len(literal) > 1 and literal[0] == "0" and literal.isdigit():
                return int(literal, 8)
            return int(literal, 0)
        except ValueError as exc:
            raise ValueError(f"macro {name} is not an integer: {value!r}") from exc
    raise ValueError(f"macro {name} has unsupported value: {value!r}")


def _intel_style_simulate(m: _Macros, found: dict[str, Any]) -> None:
    if m.defined("_MSC_VER"):
        found["simulate_major"] = encode_dec(m("_MSC_VER") // 100)
        found["simulate_minor"] = encode_dec(m("_MSC_VER") % 100)
    if m.defined("__GNUC__"):
        found["simulate_major"] = encode_dec(m("__GNUC__"))
    elif m.defined("__GNUG__"):
        found["simulate_major"] = encode_dec(m("__GNUG__"))
    if m.defined("__GNUC_MINOR__"):
        found["simulate_minor"] = encode_dec(m("__GNUC_MINOR__"))
    if m.defined("__GNUC_PATCHLEVEL__"):
        found["simulate_patch"] = encode_dec(m("__GNUC_PATCHLEVEL__"))


def _intel_style_simulate_id(m: _Macros, found: dict[str, Any]) -> None:
    if m.defined("_MSC_VER"):
        found["simulate_id"] = "MSVC"
    if m.defined("__GNUC__"):
        found["simulate_id"] = "GNU"


def _msvc_simulate(m: _Macros, found: dict[str, Any]) -> None:
    if m.defined("_MSC_VER"):
        found["simulate_id"] = "MSVC"
        found["simulate_major"] = encode_dec(m("_MSC_VER") // 100)
        found["simulate_minor"] = encode_dec(m("_MSC_VER") % 100)


def _vrp(found: dict[str, Any], value: int) -> None:
    found["major"] = encode_dec(value // 100)
    found["minor"] = encode_dec(value // 10 % 10)
    found["patch"] = encode_dec(value % 10)


def _clang_version(m: _Macros, found: dict[str, Any]) -> None:
    found["major"] = encode_dec(m("__clang_major__"))
    found["minor"] = encode_dec(m("__clang_minor__"))
    found["patch"] = encode_dec(m("__clang_patchlevel__"))


_IAR_SMALL_TARGETS = (
    "__ICCAVR__",
    "__ICCRX__",
    "__ICCRH850__",
    "__ICCRL78__",
    "__ICC430__",
    "__ICCRISCV__",
    "__ICCV850__",
    "__ICC8051__",
    "__ICCSTM8__",
)


def detect_c_compiler(macros: Mapping[str, Any]) -> CompilerId:
    """Identify the C compiler that predefines ``macros``."""
    m = _Macros(macros)
    found: dict[str, Any] = {}

    if m.defined("__INTEL_COMPILER", "__ICC"):
        found["id"] = "Intel"
        _intel_style_simulate_id(m, found)
        ic = m("__INTEL_COMPILER")
        if ic < 2021 or ic in (202110, 202111):
            found["major"] = encode_dec(ic // 100)
            found["minor"] = encode_dec(ic // 10 % 10)
            if m.defined("__INTEL_COMPILER_UPDATE"):
                found["patch"] = encode_dec(m("__INTEL_COMPILER_UPDATE"))
            else:
                found["patch"] = encode_dec(ic % 10)
        else:
            found["major"] = encode_dec(ic)
            found["minor"] = encode_dec(m("__INTEL_COMPILER_UPDATE"))
            found["patch"] = encode_dec(0)
        if m.defined("__INTEL_COMPILER_BUILD_DATE"):
            found["tweak"] = encode_dec(m("__INTEL_COMPILER_BUILD_DATE"))
        _intel_style_simulate(m, found)

    elif (m.defined("__clang__") and m.defined("__INTEL_CLANG_COMPILER")) or m.defined(
        "__INTEL_LLVM_COMPILER"
    ):
        found["id"] = "IntelLLVM"
        _intel_style_simulate_id(m, found)
        v = m("__INTEL_LLVM_COMPILER")
        if v < 1000000:
            _vrp(found, v)
        else:
            found["major"] = encode_dec(v // 10000)
            found["minor"] = encode_dec(v // 100 % 100)
            found["patch"] = encode_dec(v % 100)
        _intel_style_simulate(m, found)

    elif m.defined("__PATHCC__"):
        found["id"] = "PathScale"
        found["major"] = encode_dec(m("__PATHCC__"))
        found["minor"] = encode_dec(m("__PATHCC_MINOR__"))
        if m.defined("__PATHCC_PATCHLEVEL__"):
            found["patch"] = encode_dec(m("__PATHCC_PATCHLEVEL__"))

    elif m.defined("__BORLANDC__") and m.defined("__CODEGEARC_VERSION__"):
        found["id"] = "Embarcadero"
        v = m("__CODEGEARC_VERSION__")
        found["major"] = encode_hex(v >> 24 & 0x00FF)
        found["minor"] = encode_hex(v >> 16 & 0x00FF)
        found["patch"] = encode_dec(v & 0xFFFF)

    elif m.defined("__BORLANDC__"):
        found["id"] = "Borland"
        v = m("__BORLANDC__")
        found["major"] = encode_hex(v >> 8)
        found["minor"] = encode_hex(v & 0xFF)

    elif m.defined("__WATCOMC__") and m("__WATCOMC__") < 1200:
        found["id"] = "Watcom"
        w = m("__WATCOMC__")
        found["major"] = encode_dec(w // 100)
        found["minor"] = encode_dec((w // 10) % 10)
        if w % 10 > 0:
            found["patch"] = encode_dec(w % 10)

    elif m.defined("__WATCOMC__"):
        found["id"] = "OpenWatcom"
        w = m("__WATCOMC__")
        found["major"] = encode_dec((w - 1100) // 100)
        found["minor"] = encode_dec((w // 10) % 10)
        if w % 10 > 0:
            found["patch"] = encode_dec(w % 10)

    elif m.defined("__SUNPRO_C"):
        found["id"] = "SunPro"
        s = m("__SUNPRO_C")
        if s >= 0x5100:
            found["major"] = encode_hex(s >> 12)
            found["minor"] = encode_hex(s >> 4 & 0xFF)
        else:
            found["major"] = encode_hex(s >> 8)
            found["minor"] = encode_hex(s >> 4 & 0xF)
        found["patch"] = encode_hex(s & 0xF)

    elif m.defined("__HP_cc"):
        found["id"] = "HP"
        v = m("__HP_cc")
        found["major"] = encode_dec(v // 10000)
        found["minor"] = encode_dec(v // 100 % 100)
        found["patch"] = encode_dec(v % 100)

    elif m.defined("__DECC"):
        found["id"] = "Compaq"
        v = m("__DECC_VER")
        found["major"] = encode_dec(v // 10000000)
        found["minor"] = encode_dec(v // 100000 % 100)
        found["patch"] = encode_dec(v % 10000)

    elif m.defined("__IBMC__") and m.defined("__COMPILER_VER__"):
        found["id"] = "zOS"
        _vrp(found, m("__IBMC__"))

    elif m.defined("__ibmxl__") and m.defined("__clang__"):
        found["id"] = "XLClang"
        found["major"] = encode_dec(m("__ibmxl_version__"))
        found["minor"] = encode_dec(m("__ibmxl_release__"))
        found["patch"] = encode_dec(m("__ibmxl_modification__"))
        found["tweak"] = encode_dec(m("__ibmxl_ptf_fix_level__"))

    elif m.defined("__IBMC__") and not m.defined("__COMPILER_VER__") and m("__IBMC__") >= 800:
        found["id"] = "XL"
        _vrp(found, m("__IBMC__"))

    elif m.defined("__IBMC__") and not m.defined("__COMPILER_VER__") and m("__IBMC__") < 800:
        found["id"] = "VisualAge"
        _vrp(found, m("__IBMC__"))

    elif m.defined("__NVCOMPILER"):
        found["id"] = "NVHPC"
        found["major"] = encode_dec(m("__NVCOMPILER_MAJOR__"))
        found["minor"] = encode_dec(m("__NVCOMPILER_MINOR__"))
        if m.defined("__NVCOMPILER_PATCHLEVEL__"):
            found["patch"] = encode_dec(m("__NVCOMPILER_PATCHLEVEL__"))

    elif m.defined("__PGI"):
        found["id"] = "PGI"
        found["major"] = encode_dec(m("__PGIC__"))
        found["minor"] = encode_dec(m("__PGIC_MINOR__"))
        if m.defined("__PGIC_PATCHLEVEL__"):
            found["patch"] = encode_dec(m("__PGIC_PATCHLEVEL__"))

    elif m.defined("_CRAYC"):
        found["id"] = "Cray"
        found["major"] = encode_dec(m("_RELEASE_MAJOR"))
        found["minor"] = encode_dec(m("_RELEASE_MINOR"))

    elif m.defined("__TI_COMPILER_VERSION__"):
        found["id"] = "TI"
        v = m("__TI_COMPILER_VERSION__")
        found["major"] = encode_dec(v // 1000000)
        found["minor"] = encode_dec(v // 1000 % 1000)
        found["patch"] = encode_dec(v % 1000)

    elif m.defined("__CLANG_FUJITSU"):
        found["id"] = "FujitsuClang"
        found["major"] = encode_dec(m("__FCC_major__"))
        found["minor"] = encode_dec(m("__FCC_minor__"))
        found["patch"] = encode_dec(m("__FCC_patchlevel__"))
        if m.defined("__clang_version__"):
            found["internal_str"] = m.text("__clang_version__")

    elif m.defined("__FUJITSU"):
        found["id"] = "Fujitsu"
        if m.defined("__FCC_version__"):
            found["version"] = m.text("__FCC_version__")
        elif m.defined("__FCC_major__"):
            found["major"] = encode_dec(m("__FCC_major__"))
            found["minor"] = encode_dec(m("__FCC_minor__"))
            found["patch"] = encode_dec(m("__FCC_patchlevel__"))
        if m.defined("__fcc_version"):
            found["internal"] = encode_dec(m("__fcc_version"))
        elif m.defined("__FCC_VERSION"):
            found["internal"] = encode_dec(m("__FCC_VERSION"))

    elif m.defined("__ghs__"):
        found["id"] = "GHS"
        if m.defined("__GHS_VERSION_NUMBER"):
            _vrp(found, m("__GHS_VERSION_NUMBER"))

    elif m.defined("__TINYC__"):
        found["id"] = "TinyCC"

    elif m.defined("__BCC__"):
        found["id"] = "Bruce"

    elif m.defined("__SCO_VERSION__"):
        found["id"] = "SCO"

    elif m.defined("__ARMCC_VERSION") and not m.defined("__clang__"):
        found["id"] = "ARMCC"
        v = m("__ARMCC_VERSION")
        if v >= 1000000:
            found["major"] = encode_dec(v // 1000000)
            found["minor"] = encode_dec(v // 10000 % 100)
        else:
            found["major"] = encode_dec(v // 100000)
            found["minor"] = encode_dec(v // 10000 % 10)
        found["patch"] = encode_dec(v % 10000)

    elif m.defined("__clang__") and m.defined("__apple_build_version__"):
        found["id"] = "AppleClang"
        _clang_version(m, found)
        _msvc_simulate(m, found)
        found["tweak"] = encode_dec(m("__apple_build_version__"))

    elif m.defined("__clang__") and m.defined("__ARMCOMPILER_VERSION"):
        found["id"] = "ARMClang"
        v = m("__ARMCOMPILER_VERSION")
        found["major"] = encode_dec(v // 1000000)
        found["minor"] = encode_dec(v // 10000 % 100)
        found["patch"] = encode_dec(v % 10000)
        found["internal"] = encode_dec(v)

    elif m.defined("__clang__"):
        found["id"] = "Clang"
        _clang_version(m, found)
        _msvc_simulate(m, found)

    elif m.defined("__GNUC__"):
        found["id"] = "GNU"
        found["major"] = encode_dec(m("__GNUC__"))
        if m.defined("__GNUC_MINOR__"):
            found["minor"] = encode_dec(m("__GNUC_MINOR__"))
        if m.defined("__GNUC_PATCHLEVEL__"):
            found["patch"] = encode_dec(m("__GNUC_PATCHLEVEL__"))

    elif m.defined("_MSC_VER"):
        found["id"] = "MSVC"
        msc = m("_MSC_VER")
        found["major"] = encode_dec(msc // 100)
        found["minor"] = encode_dec(msc % 100)
        if m.defined("_MSC_FULL_VER"):
            full = m("_MSC_FULL_VER")
            found["patch"] = encode_dec(full % 100000 if msc >= 1400 else full % 10000)
        if m.defined("_MSC_BUILD"):
            found["tweak"] = encode_dec(m("_MSC_BUILD"))

    elif m.defined("__VISUALDSPVERSION__", "__ADSPBLACKFIN__", "__ADSPTS__", "__ADSP21000__"):
        found["id"] = "ADSP"
        if m.defined("__VISUALDSPVERSION__"):
            v = m("__VISUALDSPVERSION__")
            found["major"] = encode_hex(v >> 24)
            found["minor"] = encode_hex(v >> 16 & 0xFF)
            found["patch"] = encode_hex(v >> 8 & 0xFF)

    elif m.defined("__IAR_SYSTEMS_ICC__", "__IAR_SYSTEMS_ICC"):
        found["id"] = "IAR"
        ver = m("__VER__")
        if m.defined("__VER__") and m.defined("__ICCARM__"):
            found["major"] = encode_dec(ver // 1000000)
            found["minor"] = encode_dec((ver // 1000) % 1000)
            found["patch"] = encode_dec(ver % 1000)
            found["internal"] = encode_dec(m("__IAR_SYSTEMS_ICC__"))
        elif m.defined("__VER__") and m.defined(*_IAR_SMALL_TARGETS):
            found["major"] = encode_dec(ver // 100)
            found["minor"] = encode_dec(ver - (ver // 100) * 100)
            found["patch"] = encode_dec(m("__SUBVERSION__"))
            found["internal"] = encode_dec(m("__IAR_SYSTEMS_ICC__"))

    elif m.defined("__SDCC_VERSION_MAJOR", "SDCC"):
        found["id"] = "SDCC"
        if m.defined("__SDCC_VERSION_MAJOR"):
            found["major"] = encode_dec(m("__SDCC_VERSION_MAJOR"))
            found["minor"] = encode_dec(m("__SDCC_VERSION_MINOR"))
            found["patch"] = encode_dec(m("__SDCC_VERSION_PATCH"))
        else:
            _vrp(found, m("SDCC"))

    elif m.defined("__hpux", "__hpua"):
        found["id"] = "HP"

    else:
        found["id"] = ""

    return CompilerId(**found)