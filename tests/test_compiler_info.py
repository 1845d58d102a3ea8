import pytest

from dvrouter.compiler_info import (
    CompilerInfo,
    c_standard_default,
    cxx_standard_default,
    extensions_default,
    identify,
)

GCC_C = {
    "__GNUC__": 11,
    "__GNUC_MINOR__": 4,
    "__GNUC_PATCHLEVEL__": 0,
    "__linux__": 1,
    "__STDC__": 1,
    "__STDC_VERSION__": "201710L",
}

GCC_CXX = {
    "__GNUC__": 11,
    "__GNUG__": 11,
    "__GNUC_MINOR__": 4,
    "__GNUC_PATCHLEVEL__": 0,
    "__linux__": 1,
    "__cplusplus": "201703L",
}


@pytest.mark.parametrize(
    "version, expected",
    [
        ("202000L", "23"),
        ("201710L", "17"),
        ("201112L", "11"),
        ("199901L", "99"),
        ("199409L", "90"),
    ],
)
def test_c_standard_from_stdc_version(version, expected):
    assert c_standard_default({"__STDC__": 1, "__STDC_VERSION__": version}) == expected


def test_c_standard_without_version_is_90():
    assert c_standard_default({"__STDC__": 1}) == "90"


def test_c_standard_non_stdc_msvc_is_90():
    assert c_standard_default({"_MSC_VER": 1930}) == "90"


def test_c_standard_unknown_is_empty():
    assert c_standard_default({}) == ""


def test_c_standard_clang_without_stdc_uses_version():
    assert c_standard_default({"__clang__": 1, "__STDC_VERSION__": "201710L"}) == "17"


@pytest.mark.parametrize(
    "cplusplus, expected",
    [
        ("202100L", "23"),
        ("202002L", "20"),
        ("201703L", "17"),
        ("201402L", "14"),
        ("201103L", "11"),
        ("199711L", "98"),
    ],
)
def test_cxx_standard_from_cplusplus(cplusplus, expected):
    assert cxx_standard_default({"__cplusplus": cplusplus}) == expected


def test_cxx_standard_msvc_uses_msvc_lang():
    macros = {"_MSC_VER": 1930, "_MSVC_LANG": "201402L", "__cplusplus": "199711L"}
    assert cxx_standard_default(macros) == "14"


def test_cxx_standard_intel_cxx11_mode_with_nsdmi():
    macros = {
        "__INTEL_COMPILER": 1900,
        "_MSVC_LANG": "201103L",
        "__INTEL_CXX11_MODE__": 1,
        "__cpp_aggregate_nsdmi": 1,
    }
    assert cxx_standard_default(macros) == "14"


def test_cxx_standard_intel_cxx11_mode_without_nsdmi():
    macros = {"__INTEL_COMPILER": 1900, "_MSVC_LANG": "201103L", "__INTEL_CXX11_MODE__": 1}
    assert cxx_standard_default(macros) == "11"


def test_cxx_standard_intel_old_mode():
    macros = {"__INTEL_COMPILER": 1900, "_MSVC_LANG": "201103L"}
    assert cxx_standard_default(macros) == "98"


def test_extensions_on_for_gnu():
    assert extensions_default({"__GNUC__": 11}) == "ON"


def test_extensions_off_for_strict_ansi():
    assert extensions_default({"__GNUC__": 11, "__STRICT_ANSI__": 1}) == "OFF"


def test_extensions_off_for_clang_in_msvc_mode():
    assert extensions_default({"__clang__": 1, "_MSC_VER": 1930}) == "OFF"


def test_extensions_off_when_unknown():
    assert extensions_default({}) == "OFF"


def test_identify_gcc_c():
    info = identify(GCC_C, "C")
    assert info.language == "C"
    assert info.compiler.id == "GNU"
    assert info.platform == "Linux"
    assert info.architecture == ""
    assert info.standard_default == "17"
    assert info.extensions_default == "ON"


def test_identify_gcc_c_info_strings_layout():
    info = identify(GCC_C, "C")
    records = info.info_strings()
    assert records[0] == "INFO:compiler[GNU]"
    assert records[-1] == "INFO:extensions_default[ON]"
    assert records[-2] == "INFO:standard_default[17]"
    assert "INFO:platform[Linux]" in records
    assert "INFO:arch[]" in records
    assert info.compiler.version_string() in records
    assert all(record.startswith("INFO:") for record in records)


def test_identify_gcc_cxx():
    info = identify(GCC_CXX, "CXX")
    assert info.language == "CXX"
    assert info.compiler.id == "GNU"
    assert info.standard_default == "17"


def test_identify_accepts_cplusplus_spelling():
    assert identify(GCC_CXX, "c++").language == "CXX"


def test_identify_rejects_unknown_language():
    with pytest.raises(ValueError):
        identify(GCC_C, "Fortran")


def test_identify_unknown_compiler():
    records = identify({}, "C").info_strings()
    assert records[0] == "INFO:compiler[]"
    assert "INFO:platform[]" in records
    assert not any(r.startswith("INFO:compiler_version[") for r in records)


def test_simulate_records_for_clang_cl():
    info = identify({"__clang__": 1, "__clang_major__": 15, "_MSC_VER": 1930}, "CXX")
    records = info.info_strings()
    assert "INFO:simulate[MSVC]" in records
    assert info.compiler.simulate_version_string() in records
    assert records.index("INFO:simulate[MSVC]") == 1


def test_qnx_and_cray_records():
    info = identify(
        {"__GNUC__": 8, "__QNXNTO__": 1, "__CRAYXT_COMPUTE_LINUX_TARGET": 1}, "C"
    )
    records = info.info_strings()
    assert info.qnxnto and info.cray
    assert "INFO:qnxnto[]" in records
    assert "INFO:compiler_wrapper[CrayPrgEnv]" in records
    assert records.index("INFO:qnxnto[]") < records.index("INFO:compiler_wrapper[CrayPrgEnv]")


def test_internal_string_version_record():
    macros = {
        "__CLANG_FUJITSU": 1,
        "__FCC_major__": 4,
        "__FCC_minor__": 5,
        "__FCC_patchlevel__": 0,
        "__clang_version__": '"7.1.0"',
    }
    records = identify(macros, "C").info_strings()
    assert "INFO:compiler_version_internal[7.1.0]" in records


def test_compiler_info_is_immutable():
    info = identify(GCC_C, "C")
    assert isinstance(info, CompilerInfo)
    with pytest.raises(AttributeError):
        info.platform = "Windows"
    assert info.platform == "Linux"