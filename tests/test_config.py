import pytest

from dvrouter.addressing import NetworkAddress, format_ip, parse_ip
from dvrouter.config import ConfigError, Interface, load_config, parse_config

SAMPLE = "2\n10.0.1.1/8 distance 2\n192.168.5.43/24 distance 4\n"


def test_parse_sample():
    interfaces = parse_config(SAMPLE)
    assert len(interfaces) == 2
    first, second = interfaces
    assert first.ip == parse_ip("10.0.1.1")
    assert first.prefix == 8
    assert first.distance == 2
    assert second.ip == parse_ip("192.168.5.43")
    assert second.distance == 4


def test_network_and_broadcast():
    first = parse_config(SAMPLE)[0]
    assert first.network == NetworkAddress(parse_ip("10.0.0.0"), 8)
    assert format_ip(first.broadcast) == "10.255.255.255"


def test_interface_invariants():
    for iface in parse_config(SAMPLE):
        assert iface.network.contains(iface.ip)
        assert iface.network.contains(iface.broadcast)
        assert iface.network.mask == iface.prefix


def test_zero_interfaces():
    assert parse_config("0\n") == []


def test_extra_text_after_entries_ignored():
    assert len(parse_config(SAMPLE + "junk")) == 2


@pytest.mark.parametrize(
    "text",
    [
        "",
        "x",
        "-1",
        "2\n10.0.1.1/8 distance 2\n",
        "1\n10.0.1.1/8 distance far\n",
        "1\n10.0.1.1 distance 2\n",
        "1\n10.0.1.1/99 distance 2\n",
        "1\n10.0.1/8 distance 2\n",
    ],
)
def test_invalid_configs(text):
    with pytest.raises(ConfigError):
        parse_config(text)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        parse_config("1\n")


def test_load_config(tmp_path):
    path = tmp_path / "router.conf"
    path.write_text(SAMPLE)
    assert load_config(path) == parse_config(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot open config file"):
        load_config(tmp_path / "absent.conf")


def test_interface_equality():
    assert Interface(parse_ip("10.0.1.1"), 8, 2) == parse_config(SAMPLE)[0]