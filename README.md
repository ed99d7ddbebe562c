# egtsproto

A library for EGTS, the telematics protocol that navigation terminals use
to report positions, sensor readings and counters to a monitoring platform.

It provides:

- **Packet framing**: `egtsproto.packet.Package` encodes and decodes the
  transport layer. That covers the header, the optional routing fields
  (peer address, recipient address, TTL), the CRC-8 header checksum and the
  CRC-16 checksum of the frame data. For encrypted frames you supply an
  object that implements the abstract `egtsproto.packet.SecretKey`, which
  has `decode(data)` and `encode(data)`.
- **Transport responses**: `egtsproto.response.PtResponse` is the
  `EGTS_PT_RESPONSE` frame body. It holds the confirmed packet id, the
  processing result and an optional `sdr` section.
- **Subrecords**: each subrecord class has `decode(content)`, `encode()` and
  `length()`.
  - `egtsproto.sensors` has `SrAbsAnSensData`, `SrAbsCntrData`,
    `SrAbsDigSensData` and `SrAbsLoopinData`.
  - `egtsproto.identity` has `SrAuthInfo` and `SrDispatcherIdentity`.
  - `egtsproto.counters` has `SrCountersData`.
  - `egtsproto.ad_sensors` has `SrAdSensorsData`.
- **Checksums**: `egtsproto.crc.crc8` and `egtsproto.crc.crc16`.
- **Protocol codes**: `egtsproto.codes` holds the following.
  - The `SubrecordType`, `PacketType` and `ServiceType` enums.
  - The processing result codes, such as `PC_OK`, `PC_HEADERCRC_ERROR` and
    `PC_UNS_TYPE`.
  - The abstract `BinaryData` base class that every section implements.
- **Receiver support**:
  - YAML settings, loaded with `egtsproto.config.load_settings`.
  - The exported navigation record, `egtsproto.storage.records.NavRecord`.
  - A repository of storages in `egtsproto.storage.repository`. It offers
    Redis, MySQL and RabbitMQ connectors, plus a logging storage.

## Checksums

```python
from egtsproto.crc import crc8, crc16

assert crc8(b"123456789") == 0xF7
assert crc16(b"123456789") == 0x29B1
```

## Decoding and encoding a packet

```python
from egtsproto.packet import Package, EgtsError

raw = bytes([
    0x01, 0x00, 0x03, 0x0B, 0x00, 0x03, 0x00, 0x89,
    0x00, 0x00, 0x4A, 0x15, 0x38, 0x00, 0x33, 0xE8,
])

pkg = Package()
try:
    pkg.decode(raw)
except EgtsError as exc:
    print("rejected with code", exc.code, exc)
else:
    print(pkg.packet_identifier)                        # 137
    print(pkg.services_frame_data.response_packet_id)   # 14357
    print(pkg.to_json())
    assert pkg.encode() == raw
```

### Decoding results and errors

`Package.decode` returns `PC_OK` on success. On failure it raises
`EgtsError`, a `ValueError`, and the exception's `code` attribute holds the
processing result code:

- a truncated header gives `PC_INC_HEADERFORM`;
- a bad checksum gives `PC_HEADERCRC_ERROR`;
- an unknown packet type gives `PC_UNS_TYPE`;
- missing frame data gives `PC_INC_DATAFORM`;
- a decryption or frame decoding failure gives `PC_DECRYPT_ERROR`.

### Encoding

`Package.encode` does the following:

- builds the flags byte from the bit-string fields `prefix`, `route`,
  `encryption_alg`, `compression` and `priority`;
- fills in the header length when it is 0. It uses 11, or 16 when
  `route == "1"`;
- sets `frame_data_length` and computes both checksums.

It raises `ValueError` when a field is out of range, or when the packet is
encrypted and no `secret_key` is given.

### Frame types

By default, `decode` handles the frame data by packet type:

- `PacketType.RESPONSE` frames are decoded into `PtResponse`;
- `PacketType.APPDATA` frames are kept as raw bytes.

To change that, pass `frame_types`, which maps each packet type to a factory
returning a `BinaryData` section. In the same way, `PtResponse.sdr_type`
chooses the section used for the response's trailing records. Without it,
those records are also kept as raw bytes.

## Subrecords

```python
from egtsproto.sensors import SrAbsCntrData

counter = SrAbsCntrData(counter_number=6, counter_value=7347573)
data = counter.encode()            # b"\x06\x75\x1d\x70"

decoded = SrAbsCntrData()
decoded.decode(data)
assert decoded == counter
```

Presence flags in `SrCountersData` and `SrAdSensorsData` are the strings
`"0"` and `"1"`, as in the packet's flag fields.

## Receiver settings

```yaml
host: "127.0.0.1"
port: "5020"
conn_ttl: 10
log_level: "DEBUG"
log_file_path: "logs/receiver.log"
log_max_age_days: 30

storage:
  redis:
    server: "localhost:6379"
    queue: "egts"
    db: 0
  rabbitmq:
    host: "localhost"
    port: "5672"
    user: "user"
    password: "password"
    exchange: "receiver"
    key: "points"
```

```python
from egtsproto.config import load_settings

settings = load_settings("receiver.yaml")
print(settings.listen_address())   # "127.0.0.1:5020"
print(settings.empty_conn_ttl())   # datetime.timedelta(seconds=10)
print(settings.log_level_value())  # logging.DEBUG
```

`load_settings` ignores unknown keys. Values in the `storage` section are
turned into strings. `log_level_value` maps `DEBUG`, `INFO`, `WARN` and
`ERROR` to their logging levels, and any other name to `logging.INFO`.

## Storages

`Repository.load_storages` builds one connector for each entry of the
`storage` section.

| Storage    | Settings                                                                |
|------------|-------------------------------------------------------------------------|
| `redis`    | `server`, `queue`, `db` and `password`; publishes to the channel.       |
| `mysql`    | `uri` in the form `user:password@tcp(host:port)/dbname`, and `table`; inserts into the `point` column. |
| `rabbitmq` | `host`, `port`, `user`, `password`, `exchange` and `key`; publishes to the exchange. |

`load_storages` raises these errors:

- `InvalidStorageError` when the section is empty;
- `UnknownStorageError` for any other storage name.

`Repository.save` writes a record to every store in turn and stops at the
first error. `LogConnector` logs each record as indented JSON and serves as
a fallback.

```python
from egtsproto.storage.repository import (
    InvalidStorageError,
    LogConnector,
    Repository,
    UnknownStorageError,
)
from egtsproto.storage.records import NavRecord

repo = Repository()
try:
    repo.load_storages(settings.store)
except (InvalidStorageError, UnknownStorageError):
    fallback = LogConnector()
    fallback.init(None)
    repo.add_store(fallback)

repo.save(NavRecord(client=1, packet_id=1))
```

## What the package does not do

- **No receiver server.** There is no network server, no command-line tool
  and no packet generator. The package gives you the codec, the settings
  and the storages to build one.
- **No application-data record decoding.** The service data records and
  subrecord lists inside application-data frames are not decoded. This
  includes position data, extended position data, liquid level sensors and
  state data. Such frames stay as raw bytes unless you supply your own
  frame types.
- **No other storage back ends.** PostgreSQL, NATS and Tarantool are not
  available.

## Running the tests

Install the package with the `test` extra, then run `pytest` from the
project root.