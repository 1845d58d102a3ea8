import pytest

from dvrouter.platform_id import detect_architecture, detect_platform


@pytest.mark.parametrize(
    "macros, expected",
    [
        ({"__linux__": 1}, "Linux"),
        ({"linux": 1}, "Linux"),
        ({"__APPLE__": 1}, "Darwin"),
        ({"_WIN32": 1}, "Windows"),
        ({"__FreeBSD__": 13}, "FreeBSD"),
        ({"__hpux": 1}, "HP-UX"),
        ({"__QNXNTO__": 1}, "QNX"),
        ({"_MPRAS": 1}, "MP-RAS"),
        ({"sco_sv": 1}, "SCO_SV"),
    ],
)
def test_known_platforms(macros, expected):
    assert detect_platform(macros) == expected


def test_platform_order_linux_before_windows():
    assert detect_platform({"_WIN32": 1, "__linux__": 1}) == "Linux"


def test_mingw_wins_over_windows():
    assert detect_platform({"__MINGW32__": 1, "_WIN32": 1}) == "MinGW"


@pytest.mark.parametrize(
    "macros, expected",
    [
        ({"__WATCOMC__": 1290, "__DOS__": 1}, "DOS"),
        ({"__WATCOMC__": 1290, "__OS2__": 1}, "OS2"),
        ({"__WATCOMC__": 1290, "__WINDOWS__": 1}, "Windows3x"),
        ({"__WATCOMC__": 1290}, ""),
    ],
)
def test_watcom_platforms(macros, expected):
    assert detect_platform(macros) == expected


def test_integrity_platforms():
    assert detect_platform({"__INTEGRITY": 1}) == "Integrity"
    assert detect_platform({"__INTEGRITY": 1, "INT_178B": 1}) == "Integrity178"


def test_unknown_platform_is_empty():
    assert detect_platform({}) == ""


@pytest.mark.parametrize(
    "macros, expected",
    [
        ({"_M_X64": 100}, "x64"),
        ({"_M_AMD64": 100}, "x64"),
        ({"_M_IX86": 600}, "X86"),
        ({"_M_ARM64": 1}, "ARM64"),
        ({"_M_ARM64EC": 1, "_M_X64": 100}, "ARM64EC"),
        ({"_M_IA64": 1}, "IA64"),
        ({"_M_ARM": 4}, "ARMV4I"),
        ({"_M_ARM": 5}, "ARMV5I"),
        ({"_M_MIPS": 1}, "MIPS"),
        ({"_M_SH": 1}, "SHx"),
        ({}, ""),
    ],
)
def test_msvc_architectures(macros, expected):
    assert detect_architecture({"_WIN32": 1, "_MSC_VER": 1930, **macros}) == expected


def test_msvc_arm_other_version_is_stringified():
    result = detect_architecture({"_WIN32": 1, "_MSC_VER": 1930, "_M_ARM": 7})
    assert result.startswith("ARMV")
    assert result[len("ARMV"):] == "7"


def test_msvc_arch_needs_win32():
    assert detect_architecture({"_MSC_VER": 1930, "_M_X64": 100}) == ""


def test_watcom_architectures():
    assert detect_architecture({"__WATCOMC__": 1290, "_M_I86": 1}) == "I86"
    assert detect_architecture({"__WATCOMC__": 1290, "_M_IX86": 1}) == "X86"
    assert detect_architecture({"__WATCOMC__": 1290}) == ""


@pytest.mark.parametrize(
    "target, expected",
    [
        ("__ICCARM__", "ARM"),
        ("__ICCRX__", "RX"),
        ("__ICCAVR__", "AVR"),
        ("__ICC430__", "MSP430"),
        ("__ICC8051__", "8051"),
        ("__ICCSTM8__", "STM8"),
    ],
)
def test_iar_architectures(target, expected):
    assert detect_architecture({"__IAR_SYSTEMS_ICC__": 9, target: 1}) == expected


def test_iar_unknown_target():
    assert detect_architecture({"__IAR_SYSTEMS_ICC": 9}) == ""


def test_ghs_architectures():
    assert detect_architecture({"__ghs__": 1, "__PPC64__": 1, "__ppc__": 1}) == "PPC64"
    assert detect_architecture({"__ghs__": 1, "__x86_64__": 1}) == "x64"
    assert detect_architecture({"__ghs__": 1}) == ""


def test_ti_architectures():
    assert detect_architecture({"__TI_COMPILER_VERSION__": 1, "__TI_ARM__": 1}) == "ARM"
    assert detect_architecture({"__TI_COMPILER_VERSION__": 1, "_TMS320C6X": 1}) == "TMS320C6x"
    assert detect_architecture({"__TI_COMPILER_VERSION__": 1}) == ""


def test_gnu_on_linux_has_no_architecture():
    macros = {"__GNUC__": 11, "__linux__": 1, "__x86_64__": 1}
    assert detect_platform(macros) == "Linux"
    assert detect_architecture(macros) == ""


def test_invalid_macro_value_raises():
    with pytest.raises(ValueError):
        detect_architecture({"_WIN32": 1, "_MSC_VER": 1930, "_M_ARM": "bogus"})