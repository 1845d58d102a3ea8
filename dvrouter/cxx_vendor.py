"""Identify a C++ compiler and its version from its predefined macros.

The macro mapping and the encoded version parts follow the same rules as
:mod:`dvrouter.vendor`. The C++ chain checks different macros for some
vendors and knows a few compilers the C chain does not.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dvrouter.vendor import (
    _IAR_SMALL_TARGETS,
    CompilerId,
    _clang_version,
    _intel_style_simulate,
    _intel_style_simulate_id,
    _Macros,
    _msvc_simulate,
    _vrp,
    encode_dec,
    encode_hex,
)


def _detect_intel(m: _Macros, found: dict[str, Any]) -> None:
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


def _detect_intel_llvm(m: _Macros, found: dict[str, Any]) -> None:
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


def _detect_watcom(m: _Macros, found: dict[str, Any], name: str, base: int) -> None:
    found["id"] = name
    w = m("__WATCOMC__")
    found["major"] = encode_dec((w - base) // 100)
    found["minor"] = encode_dec((w // 10) % 10)
    if w % 10 > 0:
        found["patch"] = encode_dec(w % 10)


def _detect_fujitsu(m: _Macros, found: dict[str, Any]) -> None:
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


def _detect_iar(m: _Macros, found: dict[str, Any]) -> None:
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


def detect_cxx_compiler(macros: Mapping[str, Any]) -> CompilerId:
    """Identify the C++ compiler that predefines ``macros``."""
    m = _Macros(macros)
    found: dict[str, Any] = {}

    if m.defined("__COMO__"):
        found["id"] = "Comeau"
        v = m("__COMO_VERSION__")
        found["major"] = encode_dec(v // 100)
        found["minor"] = encode_dec(v % 100)

    elif m.defined("__INTEL_COMPILER", "__ICC"):
        _detect_intel(m, found)

    elif (m.defined("__clang__") and m.defined("__INTEL_CLANG_COMPILER")) or m.defined(
        "__INTEL_LLVM_COMPILER"
    ):
        _detect_intel_llvm(m, found)

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
        _detect_watcom(m, found, "Watcom", 0)

    elif m.defined("__WATCOMC__"):
        _detect_watcom(m, found, "OpenWatcom", 1100)

    elif m.defined("__SUNPRO_CC"):
        found["id"] = "SunPro"
        s = m("__SUNPRO_CC")
        if s >= 0x5100:
            found["major"] = encode_hex(s >> 12)
            found["minor"] = encode_hex(s >> 4 & 0xFF)
        else:
            found["major"] = encode_hex(s >> 8)
            found["minor"] = encode_hex(s >> 4 & 0xF)
        found["patch"] = encode_hex(s & 0xF)

    elif m.defined("__HP_aCC"):
        found["id"] = "HP"
        v = m("__HP_aCC")
        found["major"] = encode_dec(v // 10000)
        found["minor"] = encode_dec(v // 100 % 100)
        found["patch"] = encode_dec(v % 100)

    elif m.defined("__DECCXX"):
        found["id"] = "Compaq"
        v = m("__DECCXX_VER")
        found["major"] = encode_dec(v // 10000000)
        found["minor"] = encode_dec(v // 100000 % 100)
        found["patch"] = encode_dec(v % 10000)

    elif m.defined("__IBMCPP__") and m.defined("__COMPILER_VER__"):
        found["id"] = "zOS"
        _vrp(found, m("__IBMCPP__"))

    elif m.defined("__ibmxl__") and m.defined("__clang__"):
        found["id"] = "XLClang"
        found["major"] = encode_dec(m("__ibmxl_version__"))
        found["minor"] = encode_dec(m("__ibmxl_release__"))
        found["patch"] = encode_dec(m("__ibmxl_modification__"))
        found["tweak"] = encode_dec(m("__ibmxl_ptf_fix_level__"))

    elif (
        m.defined("__IBMCPP__")
        and not m.defined("__COMPILER_VER__")
        and m("__IBMCPP__") >= 800
    ):
        found["id"] = "XL"
        _vrp(found, m("__IBMCPP__"))

    elif (
        m.defined("__IBMCPP__")
        and not m.defined("__COMPILER_VER__")
        and m("__IBMCPP__") < 800
    ):
        found["id"] = "VisualAge"
        _vrp(found, m("__IBMCPP__"))

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
        _detect_fujitsu(m, found)

    elif m.defined("__ghs__"):
        found["id"] = "GHS"
        if m.defined("__GHS_VERSION_NUMBER"):
            _vrp(found, m("__GHS_VERSION_NUMBER"))

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

    elif m.defined("__GNUC__", "__GNUG__"):
        found["id"] = "GNU"
        if m.defined("__GNUC__"):
            found["major"] = encode_dec(m("__GNUC__"))
        else:
            found["major"] = encode_dec(m("__GNUG__"))
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
        _detect_iar(m, found)

    elif m.defined("__hpux", "__hpua"):
        found["id"] = "HP"

    else:
        found["id"] = ""

    return CompilerId(**found)