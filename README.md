# dvrouter

Building blocks for a distance-vector router: IPv4 addresses and network
prefixes as plain integers, and parsing of the router's interface
configuration. Alongside them sits a small library that works out which C or
C++ compiler, platform and architecture a set of predefined preprocessor
macros describes.

The package has no dependencies beyond the standard library.

## Addressing: `dvrouter.addressing`

- `prefix_mask(prefix)` returns the netmask for a prefix length (0 to 32) as a
  32-bit integer. Other lengths raise `ValueError`.
- `parse_ip(text)` turns dotted-quad text into an integer, and `format_ip(ip)`
  turns it back. Invalid addresses raise `ValueError`.
- `parse_cidr(text)` splits `a.b.c.d/n` into `(address, prefix)`.
- `NetworkAddress(ip, mask)` is a frozen, ordered dataclass for a network base
  address and prefix length. `contains(ip)` tells whether a host lies in the
  network, and `broadcast_for(ip)` gives the broadcast address for a host in
  it. `str()` gives `a.b.c.d/n`.

```python
from dvrouter.addressing import NetworkAddress, format_ip, parse_cidr, prefix_mask

ip, prefix = parse_cidr("192.168.1.1/24")
net = NetworkAddress(ip & prefix_mask(prefix), prefix)
print(net)                            # 192.168.1.0/24
print(format_ip(net.broadcast_for(ip)))  # 192.168.1.255
print(net.contains(ip))               # True
```

## Configuration: `dvrouter.config`

A configuration gives the number of interfaces first. Then, for each
interface, it gives an address with its prefix length, a keyword (by
convention `distance`) and the cost of that link. The text is read as
whitespace-separated tokens:

```
3
192.168.1.1/24 distance 2
10.0.0.1/8 distance 3
172.16.5.1/16 distance 1
```

- `parse_config(text)` returns a list of `Interface` objects.
- `load_config(path)` reads a file and parses it.
- `Interface` holds `ip`, `prefix` and `distance`, and it derives `network`
  (a `NetworkAddress`) and `broadcast`.
- `ConfigError`, a subclass of `ValueError`, is raised for an unreadable
  file, missing tokens, negative or non-numeric numbers, or bad addresses.

```python
from dvrouter.config import load_config

for iface in load_config("router.conf"):
    print(iface.network, iface.distance)
```

## Compiler identification

The functions here take a mapping from macro name to value. A name that is
present counts as defined. A value may be an int, a bool, or a C integer
literal such as `"0x5100"` or `"201710L"`.

- `dvrouter.vendor`: `detect_c_compiler(macros)` returns a `CompilerId`. It
  holds the compiler name, its encoded version parts and anything it
  simulates. `version_string()` and `simulate_version_string()` give the
  `INFO:compiler_version[...]` and `INFO:simulate_version[...]` records.
  `encode_dec(n)` and `encode_hex(n)` encode a number as eight digit
  characters.
- `dvrouter.cxx_vendor`: `detect_cxx_compiler(macros)` does the same for C++
  compilers.
- `dvrouter.platform_id`: `detect_platform(macros)` and
  `detect_architecture(macros)` return a name, or `""` when it is unknown.
- `dvrouter.compiler_info`: `c_standard_default`, `cxx_standard_default` and
  `extensions_default` each take a macro mapping. `identify(macros,
  language)` combines everything into a `CompilerInfo`, with `language` set to
  `"C"` or `"CXX"`. `CompilerInfo.info_strings()` lists the `INFO:...`
  records in order.

```python
from dvrouter.compiler_info import identify

info = identify(
    {
        "__GNUC__": 11,
        "__GNUC_MINOR__": 4,
        "__GNUC_PATCHLEVEL__": 0,
        "__linux__": 1,
        "__STDC__": 1,
        "__STDC_VERSION__": "201710L",
    },
    "C",
)
for record in info.info_strings():
    print(record)
# INFO:compiler[GNU]
# INFO:compiler_version[00000011.00000004.00000000]
# INFO:platform[Linux]
# INFO:arch[]
# INFO:standard_default[17]
# INFO:extensions_default[ON]
```

## What the package does not do

It does not route. It keeps no routing table and has no wire format for route
entries. It opens no sockets and sends or receives no updates. It has no
command-line program. It provides the addressing and configuration pieces
such a router is built on, and nothing that runs one.

## Tests

```
pip install .[test]
pytest
```