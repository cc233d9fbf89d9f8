# upfkit

Building blocks for user-plane network functions: PLMN identifiers, log
levels and statuses, microsecond time helpers, fixed-capacity pools,
growable byte buffers, timer lists, a chained hash table, absolute path
resolution, a cursor over YAML documents, IPv4/UDP/GTPv1 header encoding
and PFCP information elements.

## Installation

```
pip install upfkit
```

The only runtime dependency is PyYAML (used by `upfkit.yamliter`).
Running the tests needs the `test` extra:

```
pip install "upfkit[test]"
pytest
```

## Examples

PLMN identifiers, packed as three BCD octets:

```python
from upfkit.plmn import PlmnId

plmn = PlmnId.from_mcc_mnc(208, 93, 2)
assert plmn.mcc() == 208
assert plmn.mnc() == 93
assert bytes(plmn) == b"\x02\xf8\x39"
```

`PlmnId.mnc_len()` returns 2 only when the second octet is exactly `0xF0`,
and 3 otherwise.

Logging with levels, printf-style formatting and optional caller reporting:

```python
from upfkit.log import LogLevel, set_log_level, log_print, str_status, Status

set_log_level("debug")
assert log_print(LogLevel.INFO, "sent %d bytes", 12) == "sent 12 bytes"
assert str_status(Status.EAGAIN) == "status eagain"
```

Messages go to the standard `logging` logger named `upfkit`. Unknown level
names and out-of-range flags raise `UtltError`.

Time in microseconds and its calendar fields:

```python
from upfkit.clock import time_now, time_convert

tt = time_convert(1566455087445585)          # GMT; use_local=True for local time
assert (tt.tm.tm_year, tt.tm.tm_hour, tt.usec) == (2019, 6, 445585)
now = time_now()
```

Fixed-capacity pools (`PoolError` when empty on alloc or full on free):

```python
from upfkit.pool import Pool, IndexPool

pool = Pool(dict, 4)
item = pool.alloc()
assert pool.used() == 1
pool.free(item)
assert pool.available()

class Slot:
    index = -1

slots = IndexPool(Slot, 8)
slot = slots.alloc()
assert slots.find(slot.index) is slot
```

Growable buffers whose capacity comes from fixed size classes (64 up to
65536 bytes):

```python
from upfkit.buffer import Bufblk

buf = Bufblk(1, 10)
assert buf.size == 64
buf.append_str("hello ")
buf.append_fmt("%s-%d", "id", 7)
assert buf.data() == b"hello id-7"
```

Timers kept in expiry order and polled with `expire_check`:

```python
import time
from upfkit.timer import TimerList, TimerType

timers = TimerList()
fired = []
timer = timers.create(TimerType.ONCE, 1, lambda data, params: fired.append(data))
timer.start()
time.sleep(0.005)
timers.expire_check("tick")
assert fired == ["tick"] and not timer.running()
```

A `PERIOD` timer is put back on the active list each time it fires.

Hash table keyed by `str` or `bytes`; setting `None` removes a key:

```python
from upfkit.hashtable import HashTable

table = HashTable(None)
table.set("key", "value")
assert table.get("key") == "value"
assert table.get_or_set("key", "other") == "value"
table.set("key", None)
assert table.count() == 0
```

Walking a YAML document:

```python
from upfkit.yamliter import YamlIter

it = YamlIter.load("name: upf\nport: 8805\n")
assert [(i.key(), i.value()) for i in it] == [("name", "upf"), ("port", "8805")]
```

Packet headers:

```python
from upfkit.netheader import Gtpv1Header, GtpMessageType

raw = Gtpv1Header(flags=0x30, msg_type=GtpMessageType.T_PDU, length=0, teid=1).pack()
assert Gtpv1Header.unpack(raw).teid == 1
```

PFCP information elements:

```python
from upfkit.pfcp_types import FSeid, NodeId, NodeIdType

fseid = FSeid(seid=1, ipv4="10.0.0.1")
assert FSeid.unpack(fseid.pack()) == fseid
assert NodeId("upf.example.com").type == NodeIdType.FQDN
```

## Modules

- `upfkit.plmn` – `PlmnId`
- `upfkit.log` – `LogLevel`, `Status`, `UtltError`, `set_log_level`, `set_report_caller`, `log_print`, `str_status`
- `upfkit.clock` – `time_now`, `time_convert`, `TimeTM`
- `upfkit.pool` – `Pool`, `IndexPool`, `PoolError`
- `upfkit.buffer` – `Bufblk`, `select_capacity`
- `upfkit.timer` – `TimerList`, `Timer`, `TimerType`
- `upfkit.hashtable` – `HashTable`, `default_hash`
- `upfkit.paths` – `get_abs_path`
- `upfkit.yamliter` – `YamlIter`, `NodeType`
- `upfkit.netheader` – `IPv4Header`, `UDPHeader`, `Gtpv1Header`, `Gtpv1OptHeader`, `GtpMessageType`
- `upfkit.pfcp_types` – `Cause`, `ApplyAction`, interface and PDN enums, `FSeid`, `FTeid`, `UeIpAddr`, `NodeId`, `ReportType`

## What it does not do

upfkit has no networking of its own: it opens no sockets, runs no event
loop and sends or receives nothing. It has no message or event queues and
no thread helpers, and no command-line program. The header and PFCP classes
only encode and decode bytes; moving them over the network is left to the
caller.