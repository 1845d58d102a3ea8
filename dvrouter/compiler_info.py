"""Put the full set of compiler identification records together.

The identification binary holds a fixed list of ``INFO:...`` strings.
They name the compiler, the platform, the architecture, the default
language standard and whether extensions are on by default.
:func:`identify` works them all out from a macro mapping. The mapping
follows the same rules as :mod:`dvrouter.vendor`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dvrouter.cxx_vendor import detect_cxx_compiler
from dvrouter.platform_id import detect_architecture, detect_platform
from dvrouter.vendor import CompilerId, _Macros, detect_c_compiler

_LANGUAGES = {"C": "C", "CXX": "CXX", "C++": "CXX"}


def c_standard_default(macros: Mapping[str, Any]) -> str:
    """The default C standard ("90", "99", "11", "17", "23"), or "" if unknown."""
    m = _Macros(macros)
    if not m.defined("__STDC__") and not m.defined("__clang__"):
        if m.defined("_MSC_VER", "__ibmxl__", "__IBMC__"):
            return "90"
        return ""
    version = m("__STDC_VERSION__")
    if version > 201710:
        return "23"
    if version >= 201710:
        return "17"
    if version >= 201000:
        return "11"
    if version >= 199901:
        return "99"
    return "90"


def _cxx_std(m: _Macros) -> int:
    if (
        m.defined("__INTEL_COMPILER")
        and m.defined("_MSVC_LANG")
        and m("_MSVC_LANG") < 201403
    ):
        if m.defined("__INTEL_CXX11_MODE__"):
            return 201402 if m.defined("__cpp_aggregate_nsdmi") else 201103
        return 199711
    if m.defined("_MSC_VER") and m.defined("_MSVC_LANG"):
        return m("_MSVC_LANG")
    return m("__cplusplus")


def cxx_standard_default(macros: Mapping[str, Any]) -> str:
    """The default C++ standard ("98", "11", "14", "17", "20" or "23")."""
    std = _cxx_std(_Macros(macros))
    if std > 202002:
        return "23"
    if std > 201703:
        return "20"
    if std >= 201703:
        return "17"
    if std >= 201402:
        return "14"
    if std >= 201103:
        return "11"
    return "98"


def extensions_default(macros: Mapping[str, Any]) -> str:
    """Return "ON" when the compiler enables its language extensions by default."""
    m = _Macros(macros)
    if (
        m.defined("__clang__", "__GNUC__", "__TI_COMPILER_VERSION__")
        and not m.defined("__STRICT_ANSI__")
        and not m.defined("_MSC_VER")
    ):
        return "ON"
    return "OFF"


@dataclass(frozen=True)
class CompilerInfo:
    """Everything the identification binary records about one compiler."""

    language: str
    compiler: CompilerId
    platform: str
    architecture: str
    standard_default: str
    extensions_default: str
    qnxnto: bool = False
    cray: bool = False

    def info_strings(self) -> list[str]:
        """The ``INFO:...`` records, in the order the binary lays them out."""
        records = [f"INFO:compiler[{self.compiler.id}]"]
        if self.compiler.simulate_id is not None:
            records.append(f"INFO:simulate[{self.compiler.simulate_id}]")
        if self.qnxnto:
            records.append("INFO:qnxnto[]")
        if self.cray:
            records.append("INFO:compiler_wrapper[CrayPrgEnv]")
        version = self.compiler.version_string()
        if version is not None:
            records.append(version)
        if self.compiler.internal is not None:
            records.append(f"INFO:compiler_version_internal[{self.compiler.internal}]")
        elif self.compiler.internal_str is not None:
            records.append(
                f"INFO:compiler_version_internal[{self.compiler.internal_str}]"
            )
        simulate_version = self.compiler.simulate_version_string()
        if simulate_version is not None:
            records.append(simulate_version)
        records.append(f"INFO:platform[{self.platform}]")
        records.append(f"INFO:arch[{self.architecture}]")
        records.append(f"INFO:standard_default[{self.standard_default}]")
        records.append(f"INFO:extensions_default[{self.extensions_default}]")
        return records


def identify(macros: Mapping[str, Any], language: str = "C") -> CompilerInfo:
    """Identify the compiler for ``language`` ("C" or "CXX") from its macros."""
    key = _LANGUAGES.get(language.strip().upper())
    if key is None:
        raise ValueError(f"unsupported language: {language!r}")
    m = _Macros(macros)
    if key == "C":
        compiler = detect_c_compiler(macros)
        standard = c_standard_default(macros)
    else:
        compiler = detect_cxx_compiler(macros)
        standard = cxx_standard_default(macros)
    return CompilerInfo(
        language=key,
        compiler=compiler,
        platform=detect_platform(macros),
        architecture=detect_architecture(macros),
        standard_default=standard,
        extensions_default=extensions_default(macros),
        qnxnto=m.defined("__QNXNTO__"),
        cray=m.defined("__CRAYXT_COMPUTE_LINUX_TARGET"),
    )