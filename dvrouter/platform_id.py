"""Identify the target platform and architecture from predefined macros.

The macro mapping follows the same rules as :mod:`dvrouter.vendor`: a
name that is present counts as defined, and its value may be an int, a
bool or a C integer literal. An unknown platform or architecture is
reported as an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dvrouter.vendor import _Macros

_PLATFORMS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("__linux", "__linux__", "linux"), "Linux"),
    (("__MSYS__",), "MSYS"),
    (("__CYGWIN__",), "Cygwin"),
    (("__MINGW32__",), "MinGW"),
    (("__APPLE__",), "Darwin"),
    (("_WIN32", "__WIN32__", "WIN32"), "Windows"),
    (("__FreeBSD__", "__FreeBSD"), "FreeBSD"),
    (("__NetBSD__", "__NetBSD"), "NetBSD"),
    (("__OpenBSD__", "__OPENBSD"), "OpenBSD"),
    (("__sun", "sun"), "SunOS"),
    (("_AIX", "__AIX", "__AIX__", "__aix", "__aix__"), "AIX"),
    (("__hpux", "__hpux__"), "HP-UX"),
    (("__HAIKU__",), "Haiku"),
    (("__BeOS", "__BEOS__", "_BEOS"), "BeOS"),
    (("__QNX__", "__QNXNTO__"), "QNX"),
    (("__tru64", "_tru64", "__TRU64__"), "Tru64"),
    (("__riscos", "__riscos__"), "RISCos"),
    (("__sinix", "__sinix__", "__SINIX__"), "SINIX"),
    (("__UNIX_SV__",), "UNIX_SV"),
    (("__bsdos__",), "BSDOS"),
    (("_MPRAS", "MPRAS"), "MP-RAS"),
    (("__osf", "__osf__"), "OSF1"),
    (("_SCO_SV", "SCO_SV", "sco_sv"), "SCO_SV"),
    (("__ultrix", "__ultrix__", "_ULTRIX"), "ULTRIX"),
    (("__XENIX__", "_XENIX", "XENIX"), "Xenix"),
)

_WATCOM_PLATFORMS: tuple[tuple[str, str], ...] = (
    ("__LINUX__", "Linux"),
    ("__DOS__", "DOS"),
    ("__OS2__", "OS2"),
    ("__WINDOWS__", "Windows3x"),
    ("__VXWORKS__", "VxWorks"),
)

_MSVC_ARCHES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("_M_IA64",), "IA64"),
    (("_M_ARM64EC",), "ARM64EC"),
    (("_M_X64", "_M_AMD64"), "x64"),
    (("_M_IX86",), "X86"),
    (("_M_ARM64",), "ARM64"),
)

_IAR_ARCHES: tuple[tuple[str, str], ...] = (
    ("__ICCARM__", "ARM"),
    ("__ICCRX__", "RX"),
    ("__ICCRH850__", "RH850"),
    ("__ICCRL78__", "RL78"),
    ("__ICCRISCV__", "RISCV"),
    ("__ICCAVR__", "AVR"),
    ("__ICC430__", "MSP430"),
    ("__ICCV850__", "V850"),
    ("__ICC8051__", "8051"),
    ("__ICCSTM8__", "STM8"),
)

_GHS_ARCHES: tuple[tuple[str, str], ...] = (
    ("__PPC64__", "PPC64"),
    ("__ppc__", "PPC"),
    ("__ARM__", "ARM"),
    ("__x86_64__", "x64"),
    ("__i386__", "X86"),
)

_TI_ARCHES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("__TI_ARM__",), "ARM"),
    (("__MSP430__",), "MSP430"),
    (("__TMS320C28XX__",), "TMS320C28x"),
    (("__TMS320C6X__", "_TMS320C6X"), "TMS320C6x"),
)


def _first(m: _Macros, table: tuple[tuple[str, str], ...]) -> str:
    return next((name for macro, name in table if m.defined(macro)), "")


def _first_any(m: _Macros, table: tuple[tuple[tuple[str, ...], str], ...]) -> str | None:
    return next((name for macros, name in table if m.defined(*macros)), None)


def detect_platform(macros: Mapping[str, Any]) -> str:
    """Name the target platform, or return an empty string if it is unknown."""
    m = _Macros(macros)
    known = _first_any(m, _PLATFORMS)
    if known is not None:
        return known
    if m.defined("__WATCOMC__"):
        return _first(m, _WATCOM_PLATFORMS)
    if m.defined("__INTEGRITY"):
        return "Integrity178" if m.defined("INT_178B") else "Integrity"
    return ""


def _msvc_architecture(m: _Macros) -> str:
    known = _first_any(m, _MSVC_ARCHES)
    if known is not None:
        return known
    if m.defined("_M_ARM"):
        arm = m("_M_ARM")
        if arm == 4:
            return "ARMV4I"
        if arm == 5:
            return "ARMV5I"
        return "ARMV" + m.text("_M_ARM")
    if m.defined("_M_MIPS"):
        return "MIPS"
    if m.defined("_M_SH"):
        return "SHx"
    return ""


def detect_architecture(macros: Mapping[str, Any]) -> str:
    """Name the target architecture for the compilers that reveal it, else ``""``."""
    m = _Macros(macros)
    if m.defined("_WIN32") and m.defined("_MSC_VER"):
        return _msvc_architecture(m)
    if m.defined("__WATCOMC__"):
        if m.defined("_M_I86"):
            return "I86"
        if m.defined("_M_IX86"):
            return "X86"
        return ""
    if m.defined("__IAR_SYSTEMS_ICC__", "__IAR_SYSTEMS_ICC"):
        return _first(m, _IAR_ARCHES)
    if m.defined("__ghs__"):
        return _first(m, _GHS_ARCHES)
    if m.defined("__TI_COMPILER_VERSION__"):
        return _first_any(m, _TI_ARCHES) or ""
    return ""