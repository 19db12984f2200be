# millipede

Building blocks for an NTRIP caster, in plain Python.

## Installation

```
pip install millipede
```

## What is inside

- `millipede.bitfield`: read and write big-endian bit fields in a
  `bytearray` (`getbits`, `setbits`), single bits counted from the least
  significant bit of each byte (`getbit`, `setbit`), and `copybits`, which
  copies a run of bits and returns the updated `(pos_dst, pos_src)`.
- `millipede.http`: `basic_auth_header` builds a `Basic` Authorization value;
  `decode_auth` parses a `Basic` or `internal` value into an `Authorization`
  (`scheme_basic`, `user`, `password`) or raises `AuthError`.
- `millipede.gelf`: `GelfEntry`, a log record whose `to_json()` returns a
  GELF 1.1 object.
- `millipede.endpoints`: `Endpoint` (host, port, tls) with
  `endpoints_from_json` and `endpoints_to_json`.
- `millipede.ip`: address parsing (`ip_convert`, `ip_prefix_parse`,
  `ip_str_port`), `Prefix.contains`, `PrefixQuota.parse`, and `PrefixTable`,
  which reads `prefix quota` lines from a file and returns the quota of the
  longest matching prefix (`-1` when none matches).
- `millipede.auth`: `auth_parse` reads `key:user:password` files into
  `AuthEntry` records.
- `millipede.settings`: the caster configuration as dataclasses (`Config`,
  `BindConfig`, `ProxyConfig`, `NodeConfig`, `GraylogConfig`, ...), with
  `LogLevel` and `RtcmConversion` enums and built-in defaults.
- `millipede.config`: `parse_config` loads a YAML file into a `Config`,
  `config_from_mapping` does the same for an already parsed document; both
  raise `ConfigError` on invalid input.
- `millipede.filesrv`: `serve_file` returns the bytes of a file below a
  configured web root, rejecting `./` and `../` segments; failures raise
  `FileServeError` with an HTTP `status`.

## Examples

```python
from millipede.http import basic_auth_header, decode_auth

header = basic_auth_header("user", "password")
auth = decode_auth(header)
assert auth.user == "user"
```

```python
from millipede.ip import PrefixTable

table = PrefixTable()
added = table.read("blocklist.txt")     # lines of "prefix quota"
quota = table.get_quota("192.0.2.10")   # -1 means no quota
```

```python
from millipede.config import parse_config

config = parse_config("caster.yaml")
print(config.admin_user, [b.port for b in config.bind])
```

## What this package does not do

It is a library of parts, not a running caster. It opens no listening
sockets, serves no NTRIP or HTTP connections, fetches or synchronises no
sourcetables, sends nothing to Graylog, processes no RTCM streams, and has no
command-line program. It also has no decoder for URL-encoded form data.