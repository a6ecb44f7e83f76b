"""Memory bank abstraction for TEDS programming.

## Available Banks

### MockMemoryBank
In-memory bank for testing without hardware:
- Page-wise writes
- Optional random bit errors to exercise read-back verification

Hardware adapters implement MemoryBank (``size``, ``page_size``, ``write``,
``read``) around a vendor API. Device discovery is left to the caller.

## Quick Start

```python
from tedswriter import encode
from tedswriter.device import MockMemoryBank, write_teds, read_teds

bank = MockMemoryBank()
write_teds(bank, encode(fields, buffer_size=bank.size))
data = read_teds(bank)
```
"""

from __future__ import annotations

from .bank import MemoryBank
from .config import MockBankConfig
from .mock import MockMemoryBank
from .programmer import clear_bank, read_teds, write_teds

__all__ = [
    "MemoryBank",
    "MockMemoryBank",
    "MockBankConfig",
    "write_teds",
    "clear_bank",
    "read_teds",
]
